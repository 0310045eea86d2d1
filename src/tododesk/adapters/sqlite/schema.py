"""Database schema definitions for the local SQLite store.

Dates are stored as ISO ``YYYY-MM-DD`` text and booleans as 0/1 integers.
"""

from __future__ import annotations

import sqlite3

# Schema version tracking
SCHEMA_VERSION = 1

# Categories table
CREATE_CATEGORIES_TABLE = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE,
    icon TEXT DEFAULT '📁'
)
"""

# Tasks table - deleting a category removes its tasks
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    category_id INTEGER NOT NULL,
    due_date DATE,
    is_done INTEGER DEFAULT 0,
    created_at DATE DEFAULT CURRENT_DATE,
    FOREIGN KEY (category_id) REFERENCES categories(id) ON DELETE CASCADE
)
"""

# Tasks indexes
CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_task_category ON tasks(category_id)",
    "CREATE INDEX IF NOT EXISTS idx_task_done ON tasks(is_done)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_CATEGORIES_TABLE,
    CREATE_TASKS_TABLE,
]

# All index creation statements
ALL_INDEXES = CREATE_TASK_INDEXES

# Seeded on first run, in id order (Work=1, Personal=2, Urgent=3)
DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("Work", "💼"),
    ("Personal", "👤"),
    ("Urgent", "🔥"),
]

# Categories with an id up to this value are the seeded defaults
PROTECTED_CATEGORY_MAX_ID = len(DEFAULT_CATEGORIES)


def seed_default_categories(connection: sqlite3.Connection) -> bool:
    """Insert the default categories if the categories table is empty.

    Args:
        connection: sqlite3.Connection object with the schema applied

    Returns:
        True if the defaults were inserted
    """
    (count,) = connection.execute("SELECT COUNT(*) FROM categories").fetchone()
    if count:
        return False

    connection.executemany(
        "INSERT INTO categories (name, icon) VALUES (?, ?)", DEFAULT_CATEGORIES
    )
    connection.commit()
    return True
