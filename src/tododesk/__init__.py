"""tododesk - personal task manager backed by a local SQLite store."""

__version__ = "1.0.0"
