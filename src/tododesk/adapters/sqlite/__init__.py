"""SQLite adapter module - Local database storage implementation."""

from tododesk.adapters.sqlite.category_repository import SqliteCategoryRepository
from tododesk.adapters.sqlite.connection import MEMORY_DATABASE, Store
from tododesk.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "Store",
    "MEMORY_DATABASE",
    "SqliteCategoryRepository",
    "SqliteTaskRepository",
]
