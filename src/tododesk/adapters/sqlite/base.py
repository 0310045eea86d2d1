"""Shared plumbing for the SQLite repositories."""

from __future__ import annotations

import functools
import logging
import sqlite3
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from tododesk.adapters.sqlite.connection import Store
from tododesk.exceptions import StorageUnavailableError
from tododesk.repositories.result import StorageError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def storage_operation(action: str) -> Callable[[F], F]:
    """Turn storage failures inside a repository method into StorageError.

    The wrapped method returns Ok/NotFound itself; any sqlite3 error, an
    unavailable store, or a row that no longer parses is logged and
    reported as ``StorageError`` instead of propagating.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(self, *args, **kwargs):
            try:
                return func(self, *args, **kwargs)
            except StorageUnavailableError as e:
                logger.error("%s failed: %s", action, e)
                return StorageError(str(e))
            except sqlite3.Error as e:
                logger.error("%s failed: %s", action, e)
                return StorageError(f"{action} failed: {e}")
            except ValueError as e:
                # ValidationError is a ValueError; so is a malformed stored date
                logger.error("%s failed: invalid row in database: %s", action, e)
                return StorageError(f"{action} failed: invalid row: {e}")

        return wrapper  # type: ignore[return-value]

    return decorator


class SqliteRepository:
    """Base class holding the store and small query helpers."""

    def __init__(self, store: Store):
        """Initialize the repository.

        Args:
            store: Store owning the shared connection
        """
        self.store = store

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the store's live connection."""
        return self.store.get_connection()

    def _fetch_one(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Row | None:
        return self.connection.execute(sql, params).fetchone()

    def _fetch_all(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        return self.connection.execute(sql, params).fetchall()

    def _scalar(self, sql: str, params: Sequence[Any] = ()) -> Any:
        row = self.connection.execute(sql, params).fetchone()
        return row[0] if row is not None else None

    def _write(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        """Execute one statement as its own unit of work."""
        connection = self.connection
        try:
            cursor = connection.execute(sql, params)
            connection.commit()
        except sqlite3.Error:
            connection.rollback()
            raise
        return cursor
