"""Category management commands."""

import typer

from tododesk.adapters.sqlite.schema import PROTECTED_CATEGORY_MAX_ID
from tododesk.models import DEFAULT_ICON
from tododesk.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_PERMISSION_DENIED,
)
from tododesk.utils.typer_helpers import SuggestingGroup
from tododesk.utils.ui.formatters import (
    category_to_dict,
    format_output,
    format_success,
    format_warning,
)

from .decorators import AppError, command_wrapper
from .utils import default_output_format, open_task_service, resolve_category

app = typer.Typer(cls=SuggestingGroup, help="Category management commands")


@app.command("list")
@command_wrapper
def list_categories(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """List categories with their task counts."""
    with open_task_service() as service:
        categories = service.get_all_categories()
        result = [
            category_to_dict(category, len(service.get_tasks_by_category(category.id)))
            for category in categories
        ]
        format_output(result, default_output_format(output))


@app.command("add")
@command_wrapper
def add_category(
    name: str = typer.Argument(..., help="Category name"),
    icon: str = typer.Option(DEFAULT_ICON, "--icon", "-i", help="Icon shown next to the name"),
) -> None:
    """Create a category. An existing name is reused."""
    if not name.strip():
        raise AppError("Category name cannot be empty", ERROR_INVALID_ARGS)

    with open_task_service() as service:
        existing = service.get_category_by_name(name.strip())
        category = service.add_category(name, icon)
        if category is None:
            raise AppError("Failed to create category", ERROR_GENERAL)

        if existing is not None:
            format_warning(f"Category already exists: #{category.id} {category.display_text}")
        else:
            format_success(f"Category created: #{category.id} {category.display_text}")


@app.command("update")
@command_wrapper
def update_category(
    category: str = typer.Argument(..., help="Category ID or name"),
    name: str | None = typer.Option(None, "--name", "-n", help="New name"),
    icon: str | None = typer.Option(None, "--icon", "-i", help="New icon"),
) -> None:
    """Rename a category or change its icon."""
    if name is None and icon is None:
        raise AppError("No updates specified", ERROR_INVALID_ARGS)

    with open_task_service() as service:
        target = resolve_category(service, category)
        updated = service.update_category(
            target.id,
            name if name is not None else target.name,
            icon if icon is not None else target.icon,
        )
        if not updated:
            raise AppError(f"Failed to update category #{target.id}", ERROR_GENERAL)
        format_success(f"Category updated: #{target.id}")


@app.command("delete")
@command_wrapper
def delete_category(
    category: str = typer.Argument(..., help="Category ID or name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a category together with all of its tasks."""
    with open_task_service() as service:
        target = resolve_category(service, category)
        if target.id <= PROTECTED_CATEGORY_MAX_ID:
            raise AppError(
                f"Cannot delete default category '{target.name}'", ERROR_PERMISSION_DENIED
            )

        task_count = len(service.get_tasks_by_category(target.id))
        prompt = f"Delete category '{target.name}'"
        if task_count:
            prompt += f" and its {task_count} task(s)"
        if not yes and not typer.confirm(f"{prompt}?"):
            format_warning("Cancelled")
            raise typer.Exit(0)

        if not service.delete_category(target.id):
            raise AppError(f"Failed to delete category #{target.id}", ERROR_GENERAL)
        format_success(f"Category deleted: {target.name}")
