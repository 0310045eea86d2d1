"""Shared helpers for command modules."""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, timedelta

from tododesk.adapters.sqlite import Store
from tododesk.models import Category, Task
from tododesk.services.config_service import get_config_service
from tododesk.services.task_service import TaskService
from tododesk.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND, ERROR_STORAGE

from .decorators import AppError


@contextmanager
def open_task_service() -> Iterator[TaskService]:
    """Open the configured database for the duration of one command."""
    db_path = get_config_service().database_path
    with Store(db_path) as store:
        service = TaskService.from_store(store)
        if not service.check_connection():
            raise AppError(f"Database unavailable: {db_path}", ERROR_STORAGE)
        yield service


def default_output_format(output: str | None) -> str:
    """Use the explicit --output value, else the configured format."""
    return output or get_config_service().config.output.format


def default_show_completed(show_all: bool | None) -> bool:
    if show_all is not None:
        return show_all
    return get_config_service().config.output.show_completed


def resolve_category(service: TaskService, value: str) -> Category:
    """Find a category by numeric id or by (case-insensitive) name."""
    value = value.strip()
    category = service.get_category(int(value)) if value.isdigit() else None
    if category is None:
        category = service.get_category_by_name(value)
    if category is None:
        raise AppError(f"Category not found: {value}", ERROR_NOT_FOUND)
    return category


def require_task(service: TaskService, task_id: int) -> Task:
    task = service.get_task(task_id)
    if task is None:
        raise AppError(f"Task not found: {task_id}", ERROR_NOT_FOUND)
    return task


def parse_due_date(value: str | None, today: date | None = None) -> date | None:
    """Parse a --due value.

    Accepts ``YYYY-MM-DD``, ``today``, ``tomorrow`` and ``+N`` (days from today).
    """
    if value is None or not value.strip():
        return None

    today = today or date.today()
    text = value.strip().lower()
    if text == "today":
        return today
    if text == "tomorrow":
        return today + timedelta(days=1)
    if text.startswith("+") and text[1:].isdigit():
        return today + timedelta(days=int(text[1:]))

    try:
        return date.fromisoformat(text)
    except ValueError as e:
        raise AppError(
            f"Invalid due date '{value}'. Use YYYY-MM-DD, today, tomorrow or +N",
            ERROR_INVALID_ARGS,
        ) from e
