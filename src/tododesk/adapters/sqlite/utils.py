"""Utility functions for SQLite adapter."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string
    """
    return datetime.now(UTC).isoformat()


def to_db_date(value: date | None) -> str | None:
    """Convert a date to its stored ``YYYY-MM-DD`` form."""
    if value is None:
        return None
    return value.isoformat()


def parse_date(value: str | int | float | date | None) -> date | None:
    """Parse a stored date column.

    Accepts ISO text (a trailing time part is ignored), date objects, and the
    epoch-millisecond integers written by JDBC-based tools.

    Args:
        value: Raw column value

    Returns:
        date object or None
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000).date()
    if isinstance(value, str):
        return date.fromisoformat(value.strip()[:10])

    return None


def casefold_sql(value: Any) -> Any:
    """SQL function ``casefold(x)`` registered on every connection."""
    if isinstance(value, str):
        return value.casefold()
    return value
