"""Task management commands."""

import typer

from tododesk.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS
from tododesk.utils.typer_helpers import SuggestingGroup
from tododesk.utils.ui.formatters import (
    format_output,
    format_success,
    format_warning,
    task_to_dict,
    tasks_to_dicts,
)

from .decorators import AppError, command_wrapper
from .utils import (
    default_output_format,
    default_show_completed,
    open_task_service,
    parse_due_date,
    require_task,
    resolve_category,
)

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


@app.command("add")
@command_wrapper
def add_task(
    title: str = typer.Argument(..., help="Task title"),
    category: str | None = typer.Option(
        None, "--category", "-c", help="Category ID or name (default: first category)"
    ),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due: str | None = typer.Option(
        None, "--due", help="Due date: YYYY-MM-DD, today, tomorrow or +N"
    ),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Add a new task."""
    if not title.strip():
        raise AppError("Task title cannot be empty", ERROR_INVALID_ARGS)
    due_date = parse_due_date(due)

    with open_task_service() as service:
        if category is None:
            categories = service.get_all_categories()
            if not categories:
                raise AppError("No categories available", ERROR_GENERAL)
            target = categories[0]
        else:
            target = resolve_category(service, category)

        task = service.add_task(title, description, target.id, due_date)
        if task is None:
            raise AppError("Failed to create task", ERROR_GENERAL)

        format_success(f"Task created: #{task.id}")
        format_output(task_to_dict(task, target), default_output_format(output))


@app.command("list")
@command_wrapper
def list_tasks(
    category: str | None = typer.Option(
        None, "--category", "-c", help="Only tasks of this category (ID or name)"
    ),
    show_all: bool | None = typer.Option(
        None, "--all/--pending-only", "-a", help="Include completed tasks"
    ),
    search: str | None = typer.Option(None, "--search", "-s", help="Search text"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List tasks, newest first."""
    with open_task_service() as service:
        category_id = resolve_category(service, category).id if category else None
        tasks = service.filter_tasks(
            category_id=category_id,
            show_completed=default_show_completed(show_all),
            search_query=search,
        )
        format_output(
            tasks_to_dicts(tasks, service.get_all_categories()),
            default_output_format(output),
        )


@app.command("show")
@command_wrapper
def show_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show task details."""
    with open_task_service() as service:
        task = require_task(service, task_id)
        category = service.get_category(task.category_id)
        format_output(task_to_dict(task, category), default_output_format(output))


@app.command("edit")
@command_wrapper
def edit_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", "-t", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    category: str | None = typer.Option(
        None, "--category", "-c", help="New category (ID or name)"
    ),
    due: str | None = typer.Option(None, "--due", help="New due date"),
    clear_due: bool = typer.Option(False, "--clear-due", help="Remove the due date"),
) -> None:
    """Edit a task. Unspecified fields keep their value."""
    if not clear_due and all(v is None for v in (title, description, category, due)):
        raise AppError("No updates specified", ERROR_INVALID_ARGS)
    if due is not None and clear_due:
        raise AppError("Use either --due or --clear-due", ERROR_INVALID_ARGS)

    with open_task_service() as service:
        task = require_task(service, task_id)

        category_id = task.category_id
        if category is not None:
            category_id = resolve_category(service, category).id

        due_date = task.due_date
        if clear_due:
            due_date = None
        elif due is not None:
            due_date = parse_due_date(due)

        updated = service.update_task(
            task_id,
            title if title is not None else task.title,
            description if description is not None else task.description,
            category_id,
            due_date,
        )
        if not updated:
            raise AppError(f"Failed to update task #{task_id}", ERROR_GENERAL)
        format_success(f"Task updated: #{task_id}")


def _set_done(task_id: int, is_done: bool) -> None:
    with open_task_service() as service:
        require_task(service, task_id)
        if not service.mark_task_done(task_id, is_done):
            raise AppError(f"Failed to update task #{task_id}", ERROR_GENERAL)


@app.command("done")
@command_wrapper
def complete_task(task_id: int = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task as done."""
    _set_done(task_id, True)
    format_success(f"Task completed: #{task_id}")


@app.command("undone")
@command_wrapper
def reopen_task(task_id: int = typer.Argument(..., help="Task ID")) -> None:
    """Mark a task as not done."""
    _set_done(task_id, False)
    format_success(f"Task reopened: #{task_id}")


@app.command("toggle")
@command_wrapper
def toggle_task(task_id: int = typer.Argument(..., help="Task ID")) -> None:
    """Flip the completion status of a task."""
    with open_task_service() as service:
        require_task(service, task_id)
        if not service.toggle_task_done(task_id):
            raise AppError(f"Failed to toggle task #{task_id}", ERROR_GENERAL)
        task = require_task(service, task_id)
        state = "done" if task.is_done else "not done"
        format_success(f"Task #{task_id} is now {state}")


@app.command("delete")
@command_wrapper
def delete_task(
    task_id: int = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    with open_task_service() as service:
        task = require_task(service, task_id)
        if not yes and not typer.confirm(f"Delete task #{task_id} '{task.title}'?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

        if not service.delete_task(task_id):
            raise AppError(f"Failed to delete task #{task_id}", ERROR_GENERAL)
        format_success(f"Task deleted: #{task_id}")


@app.command("clear-completed")
@command_wrapper
def clear_completed(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete all completed tasks."""
    if not yes and not typer.confirm("Delete all completed tasks?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    with open_task_service() as service:
        deleted = service.delete_completed_tasks()
        format_success(f"Deleted {deleted} completed task(s)")


@app.command("search")
@command_wrapper
def search_tasks(
    query: str = typer.Argument(..., help="Text to look for in title or description"),
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Search all tasks, case-insensitively."""
    with open_task_service() as service:
        tasks = service.search_tasks(query)
        format_output(
            tasks_to_dicts(tasks, service.get_all_categories()),
            default_output_format(output),
        )


@app.command("due")
@command_wrapper
def due_tasks(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List pending tasks due today or earlier."""
    with open_task_service() as service:
        tasks = service.get_overdue_tasks()
        format_output(
            tasks_to_dicts(tasks, service.get_all_categories()),
            default_output_format(output),
        )
