"""Exception hierarchy for tododesk.

Expected failures (blank titles, unknown ids) never raise; they are reported
through return values. These exceptions cover the conditions that are truly
exceptional for a local desktop tool.
"""

from __future__ import annotations


class TododeskError(Exception):
    """Base class for all tododesk errors."""


class StorageUnavailableError(TododeskError):
    """The SQLite database could not be opened or initialized."""


class ConfigError(TododeskError):
    """The configuration file could not be read, validated or written."""
