"""Repository abstraction layer for tododesk.

This module defines the abstract base classes (interfaces) for the two
repository types, following the Ports & Adapters pattern: the service layer
depends on these interfaces, the SQLite adapter implements them.

Repositories never raise for expected conditions. Every method returns a
tagged ``Result`` (``Ok`` / ``NotFound`` / ``StorageError``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from tododesk.models import Category, Task

from .result import Result


class CategoryRepository(ABC):
    """Abstract base class for category persistence operations."""

    @abstractmethod
    def create(self, category: Category) -> Result[Category]:
        """Insert a new category.

        Args:
            category: Unpersisted category

        Returns:
            Ok with the same category marked persisted, or StorageError
            (e.g. the name is already taken)
        """
        raise NotImplementedError(
            "CategoryRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    def find_by_id(self, category_id: int) -> Result[Category]:
        """Get a category by id.

        Returns:
            Ok(category), NotFound or StorageError
        """
        raise NotImplementedError(
            "CategoryRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    def find_by_name(self, name: str) -> Result[Category]:
        """Get a category by exact name (case-insensitive).

        Returns:
            Ok(category), NotFound or StorageError
        """
        raise NotImplementedError(
            "CategoryRepository.find_by_name() must be implemented by adapter"
        )

    @abstractmethod
    def find_all(self) -> Result[list[Category]]:
        """List all categories ordered by id ascending."""
        raise NotImplementedError(
            "CategoryRepository.find_all() must be implemented by adapter"
        )

    @abstractmethod
    def count(self) -> Result[int]:
        """Count categories."""
        raise NotImplementedError(
            "CategoryRepository.count() must be implemented by adapter"
        )

    @abstractmethod
    def update(self, category: Category) -> Result[bool]:
        """Overwrite name and icon of a persisted category.

        Returns:
            Ok(True), NotFound (unknown or unpersisted) or StorageError
        """
        raise NotImplementedError(
            "CategoryRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    def delete(self, category_id: int) -> Result[bool]:
        """Delete a category; its tasks are removed by the cascade.

        Returns:
            Ok(True), NotFound or StorageError
        """
        raise NotImplementedError(
            "CategoryRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    def exists(self, category_id: int) -> Result[bool]:
        """Check whether a category id exists."""
        raise NotImplementedError(
            "CategoryRepository.exists() must be implemented by adapter"
        )


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    List queries return newest first (created_at DESC, id DESC) unless noted.
    """

    @abstractmethod
    def create(self, task: Task) -> Result[Task]:
        """Insert a new task.

        Returns:
            Ok with the same task marked persisted, or StorageError
        """
        raise NotImplementedError("TaskRepository.create() must be implemented by adapter")

    @abstractmethod
    def find_by_id(self, task_id: int) -> Result[Task]:
        """Get a task by id."""
        raise NotImplementedError(
            "TaskRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    def find_all(self) -> Result[list[Task]]:
        """List every task."""
        raise NotImplementedError(
            "TaskRepository.find_all() must be implemented by adapter"
        )

    @abstractmethod
    def find_by_category(self, category_id: int) -> Result[list[Task]]:
        """List tasks of one category."""
        raise NotImplementedError(
            "TaskRepository.find_by_category() must be implemented by adapter"
        )

    @abstractmethod
    def find_by_status(self, is_done: bool) -> Result[list[Task]]:
        """List done or pending tasks."""
        raise NotImplementedError(
            "TaskRepository.find_by_status() must be implemented by adapter"
        )

    @abstractmethod
    def search(self, query: str) -> Result[list[Task]]:
        """Case-insensitive substring search over title and description."""
        raise NotImplementedError(
            "TaskRepository.search() must be implemented by adapter"
        )

    @abstractmethod
    def find_due_tasks(self, today: date | None = None) -> Result[list[Task]]:
        """List pending tasks due on or before ``today``, earliest first.

        Args:
            today: Reference date, defaults to the local current date
        """
        raise NotImplementedError(
            "TaskRepository.find_due_tasks() must be implemented by adapter"
        )

    @abstractmethod
    def count(self) -> Result[int]:
        """Count all tasks."""
        raise NotImplementedError("TaskRepository.count() must be implemented by adapter")

    @abstractmethod
    def count_by_category(self, category_id: int) -> Result[int]:
        """Count tasks in one category."""
        raise NotImplementedError(
            "TaskRepository.count_by_category() must be implemented by adapter"
        )

    @abstractmethod
    def update(self, task: Task) -> Result[bool]:
        """Overwrite the mutable fields of a persisted task.

        The id and created_at never change after creation.
        """
        raise NotImplementedError("TaskRepository.update() must be implemented by adapter")

    @abstractmethod
    def toggle_done(self, task_id: int) -> Result[bool]:
        """Flip is_done in storage without reading the row first."""
        raise NotImplementedError(
            "TaskRepository.toggle_done() must be implemented by adapter"
        )

    @abstractmethod
    def delete(self, task_id: int) -> Result[bool]:
        """Delete one task."""
        raise NotImplementedError("TaskRepository.delete() must be implemented by adapter")

    @abstractmethod
    def delete_completed(self) -> Result[int]:
        """Delete every done task and return how many were removed."""
        raise NotImplementedError(
            "TaskRepository.delete_completed() must be implemented by adapter"
        )
