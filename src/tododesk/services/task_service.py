"""Task service - Business logic for tasks and categories.

This service layer sits between front ends (the CLI, a GUI) and the
repositories. Expected failures such as a blank title or an unknown id never
raise: they are logged and reported as ``None`` / ``False`` / ``0``.
"""

from __future__ import annotations

import logging
from datetime import date

from pydantic import ValidationError

from tododesk.adapters.sqlite import SqliteCategoryRepository, SqliteTaskRepository, Store
from tododesk.adapters.sqlite.schema import PROTECTED_CATEGORY_MAX_ID
from tododesk.models import DEFAULT_ICON, Category, Task, TaskStats
from tododesk.repositories import (
    CategoryRepository,
    NotFound,
    Result,
    StorageError,
    TaskRepository,
    is_ok,
    unwrap_or,
)

logger = logging.getLogger(__name__)


def _warn_unless_ok(result: Result, action: str) -> bool:
    if is_ok(result):
        return True
    if isinstance(result, NotFound):
        logger.warning("%s: %s", action, result.detail or "not found")
    elif isinstance(result, StorageError):
        logger.warning("%s: storage error: %s", action, result.detail)
    return False


class TaskService:
    """Service for task and category business logic.

    This service encapsulates the business rules (validation, protected
    categories, filtering, statistics) and orchestrates the two repositories.
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        category_repository: CategoryRepository,
        store: Store | None = None,
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            category_repository: CategoryRepository implementation for data access
            store: Store backing the repositories, used for health checks
        """
        self.task_repository = task_repository
        self.category_repository = category_repository
        self.store = store

    @classmethod
    def from_store(cls, store: Store) -> TaskService:
        """Build a service wired to the SQLite repositories of ``store``."""
        return cls(
            SqliteTaskRepository(store),
            SqliteCategoryRepository(store),
            store=store,
        )

    def check_connection(self) -> bool:
        """Startup health check: open the store and confirm it answers.

        Returns:
            True if the database is usable
        """
        # A category count forces the lazy open
        if not _warn_unless_ok(self.category_repository.count(), "Health check"):
            return False
        return self.store is None or self.store.test_connection()

    # ---- task operations ----

    def add_task(
        self,
        title: str,
        description: str | None,
        category_id: int,
        due_date: date | None = None,
    ) -> Task | None:
        """Create a new task.

        Args:
            title: Task title, must not be blank
            description: Optional free text
            category_id: Id of an existing category
            due_date: Optional due date

        Returns:
            The persisted Task, or None if validation or storage failed
        """
        if title is None or not title.strip():
            logger.warning("Task title cannot be empty")
            return None

        if not self._category_exists(category_id):
            logger.warning("Invalid category ID: %s", category_id)
            return None

        try:
            task = Task(
                title=title,
                description=description,
                category_id=category_id,
                due_date=due_date,
            )
        except ValidationError as e:
            logger.warning("Invalid task: %s", e)
            return None

        result = self.task_repository.create(task)
        if not _warn_unless_ok(result, "Failed to create task"):
            return None
        return result.value

    def add_simple_task(self, title: str, category_id: int) -> Task | None:
        """Create a task with only a title."""
        return self.add_task(title, "", category_id)

    def update_task(
        self,
        task_id: int,
        title: str,
        description: str | None,
        category_id: int,
        due_date: date | None,
    ) -> bool:
        """Overwrite the editable fields of an existing task.

        Returns:
            True if the task was updated
        """
        if title is None or not title.strip():
            logger.warning("Task title cannot be empty")
            return False

        task = self.get_task(task_id)
        if task is None:
            logger.warning("Task not found: %s", task_id)
            return False

        if category_id != task.category_id and not self._category_exists(category_id):
            logger.warning("Invalid category ID: %s", category_id)
            return False

        try:
            task.title = title
            task.description = description
            task.category_id = category_id
            task.due_date = due_date
        except ValidationError as e:
            logger.warning("Invalid task update: %s", e)
            return False

        return _warn_unless_ok(self.task_repository.update(task), "Failed to update task")

    def mark_task_done(self, task_id: int, is_done: bool) -> bool:
        task = self.get_task(task_id)
        if task is None:
            logger.warning("Task not found: %s", task_id)
            return False

        task.is_done = is_done
        return _warn_unless_ok(self.task_repository.update(task), "Failed to update task")

    def toggle_task_done(self, task_id: int) -> bool:
        return _warn_unless_ok(
            self.task_repository.toggle_done(task_id), f"Failed to toggle task {task_id}"
        )

    def delete_task(self, task_id: int) -> bool:
        return _warn_unless_ok(
            self.task_repository.delete(task_id), f"Failed to delete task {task_id}"
        )

    def delete_completed_tasks(self) -> int:
        """Delete every completed task.

        Returns:
            Number of tasks deleted, 0 on failure
        """
        result = self.task_repository.delete_completed()
        if not _warn_unless_ok(result, "Failed to delete completed tasks"):
            return 0
        logger.info("Deleted %s completed tasks", result.value)
        return result.value

    # ---- task retrieval ----

    def get_task(self, task_id: int) -> Task | None:
        return unwrap_or(self.task_repository.find_by_id(task_id), None)

    def get_all_tasks(self) -> list[Task]:
        return unwrap_or(self.task_repository.find_all(), [])

    def get_tasks_by_category(self, category: int | str) -> list[Task]:
        """Get the tasks of a category given by id or by name.

        An unknown category name yields an empty list.
        """
        if isinstance(category, str):
            found = self.get_category_by_name(category)
            if found is None:
                return []
            category = found.id

        return unwrap_or(self.task_repository.find_by_category(category), [])

    def get_pending_tasks(self) -> list[Task]:
        return unwrap_or(self.task_repository.find_by_status(False), [])

    def get_completed_tasks(self) -> list[Task]:
        return unwrap_or(self.task_repository.find_by_status(True), [])

    def get_overdue_tasks(self, today: date | None = None) -> list[Task]:
        """Pending tasks due today or earlier, earliest due date first."""
        return unwrap_or(self.task_repository.find_due_tasks(today), [])

    def search_tasks(self, query: str | None) -> list[Task]:
        """Case-insensitive search on title and description.

        A blank query returns all tasks.
        """
        if query is None or not query.strip():
            return self.get_all_tasks()
        return unwrap_or(self.task_repository.search(query.strip()), [])

    def filter_tasks(
        self,
        category_id: int | None = None,
        show_completed: bool = False,
        search_query: str | None = None,
    ) -> list[Task]:
        """Filter tasks by category, then completion, then search text.

        Args:
            category_id: Restrict to this category; None means all
            show_completed: Keep completed tasks when True
            search_query: Case-insensitive text filter; blank means none

        Returns:
            Matching tasks in repository order (newest first)
        """
        if category_id is not None:
            tasks = self.get_tasks_by_category(category_id)
        else:
            tasks = self.get_all_tasks()

        if not show_completed:
            tasks = [task for task in tasks if not task.is_done]

        if search_query and search_query.strip():
            tasks = [task for task in tasks if task.matches_search(search_query)]

        return tasks

    # ---- category operations ----

    def add_category(self, name: str, icon: str | None = DEFAULT_ICON) -> Category | None:
        """Create a category, or return the existing one with the same name.

        Returns:
            The category, or None if the name is blank or storage failed
        """
        if name is None or not name.strip():
            logger.warning("Category name cannot be empty")
            return None

        existing = self.get_category_by_name(name.strip())
        if existing is not None:
            logger.warning("Category already exists: %s", existing.name)
            return existing

        result = self.category_repository.create(Category(name=name, icon=icon))
        if not _warn_unless_ok(result, "Failed to create category"):
            return None
        return result.value

    def update_category(self, category_id: int, name: str, icon: str | None) -> bool:
        if name is None or not name.strip():
            logger.warning("Category name cannot be empty")
            return False

        category = self.get_category(category_id)
        if category is None:
            logger.warning("Category not found: %s", category_id)
            return False

        category.name = name
        category.icon = icon
        return _warn_unless_ok(
            self.category_repository.update(category), "Failed to update category"
        )

    def delete_category(self, category_id: int) -> bool:
        """Delete a category and, through the cascade, all of its tasks.

        The seeded default categories cannot be deleted.
        """
        if category_id <= PROTECTED_CATEGORY_MAX_ID:
            logger.warning("Cannot delete default category: %s", category_id)
            return False

        task_count = unwrap_or(self.task_repository.count_by_category(category_id), 0)
        if task_count > 0:
            logger.warning(
                "Category %s has %s tasks. They will be deleted too.",
                category_id,
                task_count,
            )

        return _warn_unless_ok(
            self.category_repository.delete(category_id),
            f"Failed to delete category {category_id}",
        )

    def get_all_categories(self) -> list[Category]:
        return unwrap_or(self.category_repository.find_all(), [])

    def get_category(self, category_id: int) -> Category | None:
        return unwrap_or(self.category_repository.find_by_id(category_id), None)

    def get_category_by_name(self, name: str) -> Category | None:
        return unwrap_or(self.category_repository.find_by_name(name), None)

    def _category_exists(self, category_id: int) -> bool:
        return unwrap_or(self.category_repository.exists(category_id), False)

    # ---- statistics ----

    def get_statistics(self, today: date | None = None) -> TaskStats:
        """Aggregate counters over all tasks.

        Overdue counts the same tasks as get_overdue_tasks().
        """
        total = unwrap_or(self.task_repository.count(), 0)
        completed = len(self.get_completed_tasks())
        overdue = len(self.get_overdue_tasks(today))

        return TaskStats(
            total=total,
            completed=completed,
            pending=total - completed,
            overdue=overdue,
        )
