"""Initial database schema migration.

Creates the ``categories`` and ``tasks`` tables and the task indexes.
"""

import sqlite3

from tododesk.adapters.sqlite import schema

from .runner import Migration


class InitialSchemaMigration(Migration):
    """Migration 001: Create initial database schema."""

    @property
    def version(self) -> int:
        return 1

    @property
    def description(self) -> str:
        return "Create categories and tasks tables"

    def up(self, connection: sqlite3.Connection) -> None:
        for create_statement in schema.ALL_TABLES:
            connection.execute(create_statement)

        for index_sql in schema.ALL_INDEXES:
            connection.execute(index_sql)


initial_migration = InitialSchemaMigration()
