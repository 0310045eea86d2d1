"""Adapters module - Repository implementations for storage backends."""

from .sqlite import SqliteCategoryRepository, SqliteTaskRepository, Store

__all__ = [
    "Store",
    "SqliteCategoryRepository",
    "SqliteTaskRepository",
]
