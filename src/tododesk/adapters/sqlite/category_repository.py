"""SQLite implementation of CategoryRepository."""

from __future__ import annotations

import logging
import sqlite3

from tododesk.adapters.sqlite.base import SqliteRepository, storage_operation
from tododesk.models import Category, Persisted
from tododesk.repositories import CategoryRepository, NotFound, Ok, Result, StorageError

logger = logging.getLogger(__name__)


def _row_to_category(row: sqlite3.Row) -> Category:
    return Category(
        identity=Persisted(id=row["id"]),
        name=row["name"],
        icon=row["icon"],
    )


class SqliteCategoryRepository(SqliteRepository, CategoryRepository):
    """SQLite implementation of category repository."""

    @storage_operation("create category")
    def create(self, category: Category) -> Result[Category]:
        if category.is_persisted:
            return StorageError(f"Category is already persisted with id {category.id}")
        cursor = self._write(
            "INSERT INTO categories (name, icon) VALUES (?, ?)",
            (category.name, category.icon),
        )
        category.mark_persisted(cursor.lastrowid)
        logger.debug("Category created: %s (id=%s)", category.name, category.id)
        return Ok(category)

    @storage_operation("find category")
    def find_by_id(self, category_id: int) -> Result[Category]:
        row = self._fetch_one("SELECT * FROM categories WHERE id = ?", (category_id,))
        if row is None:
            return NotFound(f"Category not found: {category_id}")
        return Ok(_row_to_category(row))

    @storage_operation("find category by name")
    def find_by_name(self, name: str) -> Result[Category]:
        # name is declared COLLATE NOCASE, matching the unique constraint
        row = self._fetch_one("SELECT * FROM categories WHERE name = ?", (name,))
        if row is None:
            return NotFound(f"Category not found: {name}")
        return Ok(_row_to_category(row))

    @storage_operation("list categories")
    def find_all(self) -> Result[list[Category]]:
        rows = self._fetch_all("SELECT * FROM categories ORDER BY id")
        return Ok([_row_to_category(row) for row in rows])

    @storage_operation("count categories")
    def count(self) -> Result[int]:
        return Ok(int(self._scalar("SELECT COUNT(*) FROM categories")))

    @storage_operation("update category")
    def update(self, category: Category) -> Result[bool]:
        if category.id is None:
            return NotFound("Category is not persisted")

        cursor = self._write(
            "UPDATE categories SET name = ?, icon = ? WHERE id = ?",
            (category.name, category.icon, category.id),
        )
        if cursor.rowcount == 0:
            return NotFound(f"Category not found: {category.id}")
        logger.debug("Category updated: %s", category.id)
        return Ok(True)

    @storage_operation("delete category")
    def delete(self, category_id: int) -> Result[bool]:
        cursor = self._write("DELETE FROM categories WHERE id = ?", (category_id,))
        if cursor.rowcount == 0:
            return NotFound(f"Category not found: {category_id}")
        logger.debug("Category deleted: %s", category_id)
        return Ok(True)

    @storage_operation("check category")
    def exists(self, category_id: int) -> Result[bool]:
        row = self._fetch_one(
            "SELECT 1 FROM categories WHERE id = ? LIMIT 1", (category_id,)
        )
        return Ok(row is not None)
