"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date

from tododesk.adapters.sqlite.base import SqliteRepository, storage_operation
from tododesk.adapters.sqlite.utils import parse_date, to_db_date
from tododesk.models import Persisted, Task
from tododesk.repositories import NotFound, Ok, Result, StorageError, TaskRepository

logger = logging.getLogger(__name__)

# Newest first; id breaks ties between tasks created on the same day
NEWEST_FIRST = "ORDER BY created_at DESC, id DESC"


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        identity=Persisted(id=row["id"]),
        title=row["title"],
        description=row["description"],
        category_id=row["category_id"],
        due_date=parse_date(row["due_date"]),
        is_done=bool(row["is_done"]),
        created_at=parse_date(row["created_at"]),
    )


class SqliteTaskRepository(SqliteRepository, TaskRepository):
    """SQLite implementation of task repository."""

    def _list(self, where: str = "", params: tuple = (), order: str = NEWEST_FIRST) -> list[Task]:
        query = "SELECT * FROM tasks"
        if where:
            query += f" WHERE {where}"
        query += f" {order}"
        return [_row_to_task(row) for row in self._fetch_all(query, params)]

    @storage_operation("create task")
    def create(self, task: Task) -> Result[Task]:
        if task.is_persisted:
            return StorageError(f"Task is already persisted with id {task.id}")
        cursor = self._write(
            """INSERT INTO tasks (
                title, description, category_id, due_date, is_done, created_at
            ) VALUES (?, ?, ?, ?, ?, ?)""",
            (
                task.title,
                task.description,
                task.category_id,
                to_db_date(task.due_date),
                1 if task.is_done else 0,
                to_db_date(task.created_at),
            ),
        )
        task.mark_persisted(cursor.lastrowid)
        logger.debug("Task created: %s (id=%s)", task.title, task.id)
        return Ok(task)

    @storage_operation("find task")
    def find_by_id(self, task_id: int) -> Result[Task]:
        row = self._fetch_one("SELECT * FROM tasks WHERE id = ?", (task_id,))
        if row is None:
            return NotFound(f"Task not found: {task_id}")
        return Ok(_row_to_task(row))

    @storage_operation("list tasks")
    def find_all(self) -> Result[list[Task]]:
        return Ok(self._list())

    @storage_operation("list tasks by category")
    def find_by_category(self, category_id: int) -> Result[list[Task]]:
        return Ok(self._list("category_id = ?", (category_id,)))

    @storage_operation("list tasks by status")
    def find_by_status(self, is_done: bool) -> Result[list[Task]]:
        return Ok(self._list("is_done = ?", (1 if is_done else 0,)))

    @storage_operation("search tasks")
    def search(self, query: str) -> Result[list[Task]]:
        # instr() instead of LIKE so '%' and '_' in the query are literal
        needle = query.strip().casefold()
        return Ok(
            self._list(
                "instr(casefold(title), ?) > 0 "
                "OR instr(casefold(COALESCE(description, '')), ?) > 0",
                (needle, needle),
            )
        )

    @storage_operation("list due tasks")
    def find_due_tasks(self, today: date | None = None) -> Result[list[Task]]:
        today = today or date.today()
        return Ok(
            self._list(
                "is_done = 0 AND due_date IS NOT NULL AND due_date <= ?",
                (to_db_date(today),),
                order="ORDER BY due_date ASC, id ASC",
            )
        )

    @storage_operation("count tasks")
    def count(self) -> Result[int]:
        return Ok(int(self._scalar("SELECT COUNT(*) FROM tasks")))

    @storage_operation("count tasks by category")
    def count_by_category(self, category_id: int) -> Result[int]:
        return Ok(
            int(
                self._scalar(
                    "SELECT COUNT(*) FROM tasks WHERE category_id = ?", (category_id,)
                )
            )
        )

    @storage_operation("update task")
    def update(self, task: Task) -> Result[bool]:
        if task.id is None:
            return NotFound("Task is not persisted")

        cursor = self._write(
            """UPDATE tasks
               SET title = ?, description = ?, category_id = ?, due_date = ?, is_done = ?
               WHERE id = ?""",
            (
                task.title,
                task.description,
                task.category_id,
                to_db_date(task.due_date),
                1 if task.is_done else 0,
                task.id,
            ),
        )
        if cursor.rowcount == 0:
            return NotFound(f"Task not found: {task.id}")
        logger.debug("Task updated: %s", task.id)
        return Ok(True)

    @storage_operation("toggle task")
    def toggle_done(self, task_id: int) -> Result[bool]:
        cursor = self._write(
            "UPDATE tasks SET is_done = NOT is_done WHERE id = ?", (task_id,)
        )
        if cursor.rowcount == 0:
            return NotFound(f"Task not found: {task_id}")
        return Ok(True)

    @storage_operation("delete task")
    def delete(self, task_id: int) -> Result[bool]:
        cursor = self._write("DELETE FROM tasks WHERE id = ?", (task_id,))
        if cursor.rowcount == 0:
            return NotFound(f"Task not found: {task_id}")
        logger.debug("Task deleted: %s", task_id)
        return Ok(True)

    @storage_operation("delete completed tasks")
    def delete_completed(self) -> Result[int]:
        cursor = self._write("DELETE FROM tasks WHERE is_done = 1")
        logger.debug("Deleted %s completed tasks", cursor.rowcount)
        return Ok(cursor.rowcount)
