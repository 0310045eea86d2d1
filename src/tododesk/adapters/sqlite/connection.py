"""Database connection management for the local SQLite store.

The Store owns the single connection shared by all repositories. It is created
explicitly at startup, passed to each repository, and closed at shutdown:

    with Store(db_path) as store:
        service = TaskService.from_store(store)
        ...
"""

from __future__ import annotations

import logging
import os
import sqlite3
import threading
from pathlib import Path
from types import TracebackType
from typing import Any

from tododesk.adapters.sqlite import schema
from tododesk.adapters.sqlite.migrations import ALL_MIGRATIONS, MigrationRunner
from tododesk.adapters.sqlite.utils import casefold_sql
from tododesk.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


class Store:
    """Owner of the SQLite connection for one database file.

    Provides:
    - Lazy open on first use, guarded by a lock
    - Transparent reopen when the held connection was closed
    - Schema migrations and default categories applied on every open
    - Foreign key enforcement (category deletes cascade to tasks)
    - WAL mode and owner-only file permissions for new databases
    - Idempotent close, also usable as a context manager
    """

    def __init__(self, db_path: str | Path):
        """Initialize the store without opening anything.

        Args:
            db_path: Path to the database file, or ":memory:"
        """
        self.db_path = db_path if str(db_path) == MEMORY_DATABASE else Path(db_path)
        self._connection: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    @property
    def is_memory(self) -> bool:
        return str(self.db_path) == MEMORY_DATABASE

    @property
    def is_open(self) -> bool:
        return self._connection is not None and _is_alive(self._connection)

    def get_connection(self) -> sqlite3.Connection:
        """Get the live connection, opening or reopening it when needed.

        Returns:
            sqlite3.Connection with the schema in place

        Raises:
            StorageUnavailableError: If the file cannot be opened or initialized
        """
        with self._lock:
            if self._connection is not None:
                if _is_alive(self._connection):
                    return self._connection
                logger.info("Database connection closed, reopening %s", self.db_path)
                self._connection = None

            self._connection = self._open()
            return self._connection

    def _open(self) -> sqlite3.Connection:
        try:
            is_new_database = self._prepare_path()
            connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,  # guarded by self._lock
                timeout=30.0,
            )
        except (OSError, sqlite3.Error) as e:
            logger.error("Database connection failed for %s: %s", self.db_path, e)
            raise StorageUnavailableError(
                f"Cannot open database {self.db_path}: {e}"
            ) from e

        try:
            self._configure(connection)
            applied = MigrationRunner(connection).run_migrations(ALL_MIGRATIONS)
            if applied:
                logger.info("Database schema initialized (%s migrations)", applied)
            if schema.seed_default_categories(connection):
                logger.info("Default categories created")
            if is_new_database:
                os.chmod(self.db_path, 0o600)
        except (OSError, sqlite3.Error, RuntimeError) as e:
            connection.close()
            logger.error("Schema initialization failed for %s: %s", self.db_path, e)
            raise StorageUnavailableError(
                f"Cannot initialize database {self.db_path}: {e}"
            ) from e

        logger.info("Database connected: %s", self.db_path)
        return connection

    def _prepare_path(self) -> bool:
        """Create the parent directory; return True if the file is new."""
        if self.is_memory:
            return False
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        return not self.db_path.exists()

    @staticmethod
    def _configure(connection: sqlite3.Connection) -> None:
        connection.row_factory = sqlite3.Row  # Enable dict-like access
        connection.execute("PRAGMA foreign_keys = ON")  # Required for the cascade
        connection.execute("PRAGMA journal_mode = WAL")
        connection.create_function("casefold", 1, casefold_sql, deterministic=True)

    def test_connection(self) -> bool:
        """Whether a connection is currently open and answering queries."""
        return self.is_open

    def database_info(self) -> dict[str, Any]:
        """Describe the database for diagnostics.

        Raises:
            StorageUnavailableError: If the database cannot be opened
        """
        connection = self.get_connection()
        runner = MigrationRunner(connection)
        (categories,) = connection.execute("SELECT COUNT(*) FROM categories").fetchone()
        (tasks,) = connection.execute("SELECT COUNT(*) FROM tasks").fetchone()
        return {
            "path": str(self.db_path),
            "sqlite_version": sqlite3.sqlite_version,
            "schema_version": runner.get_current_version(),
            "categories": categories,
            "tasks": tasks,
            "migrations": runner.get_migration_history(),
        }

    def close(self) -> None:
        """Close the connection. Safe to call repeatedly or before any open."""
        with self._lock:
            connection, self._connection = self._connection, None

        if connection is None:
            return
        try:
            connection.commit()
            connection.close()
        except sqlite3.ProgrammingError:
            # Already closed by someone else
            return
        except sqlite3.Error as e:
            logger.warning("Error closing database connection: %s", e)
            return
        logger.info("Database connection closed: %s", self.db_path)

    def __enter__(self) -> Store:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "open" if self._connection is not None else "closed"
        return f"Store({str(self.db_path)!r}, {state})"


def _is_alive(connection: sqlite3.Connection) -> bool:
    try:
        connection.execute("SELECT 1")
    except sqlite3.Error:
        return False
    return True
