"""Output formatters for the tododesk CLI."""

import json
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from tododesk.models import Category, Task, TaskStats

console = Console()


# ============================================================================
# Model serialization
# ============================================================================


def task_to_dict(task: Task, category: Category | None = None) -> dict[str, Any]:
    """Flatten a task into plain data for json/yaml/table output."""
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "category_id": task.category_id,
        "category": category.display_text if category else None,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "is_done": task.is_done,
        "is_overdue": task.is_overdue,
        "is_due_soon": task.is_due_soon,
        "created_at": task.created_at.isoformat(),
    }


def tasks_to_dicts(tasks: list[Task], categories: list[Category]) -> list[dict[str, Any]]:
    by_id = {category.id: category for category in categories}
    return [task_to_dict(task, by_id.get(task.category_id)) for task in tasks]


def category_to_dict(category: Category, task_count: int | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": category.id,
        "icon": category.icon,
        "name": category.name,
    }
    if task_count is not None:
        data["tasks"] = task_count
    return data


def stats_to_dict(stats: TaskStats) -> dict[str, Any]:
    data = stats.model_dump()
    data["completion_percentage"] = round(stats.completion_percentage, 1)
    return data


# ============================================================================
# Generic output
# ============================================================================


def format_output(data: Any, output_format: str = "pretty") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True))
    elif output_format == "table":
        format_table(data)
    else:
        format_pretty(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No items found[/yellow]")
        return

    if isinstance(data, list):
        if isinstance(data[0], dict):
            format_dict_table(data)
        else:
            for item in data:
                console.print(item)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None or value == "":
        return "-"
    return escape(str(value))


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), _cell(value))

    console.print(table)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


# ============================================================================
# Pretty Format Implementation
# ============================================================================

STATUS_ICONS = {
    "done": "✓",
    "overdue": "🔴",
    "due_soon": "🟡",
    "open": "⬜",
}


def format_pretty(data: Any) -> None:
    """Pick a pretty renderer from the shape of the data."""
    if isinstance(data, list):
        if not data:
            console.print("[yellow]No items found[/yellow]")
        elif isinstance(data[0], dict) and "title" in data[0]:
            format_tasks_pretty(data)
        elif isinstance(data[0], dict) and "icon" in data[0]:
            format_categories_pretty(data)
        else:
            format_table(data)
    elif isinstance(data, dict) and "completion_percentage" in data:
        format_stats_pretty(data)
    elif isinstance(data, dict) and "title" in data:
        format_task_detail(data)
    else:
        format_table(data)


def task_status(task: dict) -> str:
    if task.get("is_done"):
        return "done"
    if task.get("is_overdue"):
        return "overdue"
    if task.get("is_due_soon"):
        return "due_soon"
    return "open"


def format_tasks_pretty(tasks: list[dict]) -> None:
    """Render tasks one per line with a status marker."""
    for task in tasks:
        status = task_status(task)
        line = Text()
        line.append(f"{STATUS_ICONS[status]} ")
        line.append(f"#{task['id']} ", style="dim")
        title_style = {
            "done": "dim strike",
            "overdue": "bold red",
            "due_soon": "yellow",
        }.get(status, "")
        line.append(task["title"], style=title_style)
        if task.get("category"):
            line.append(f"  {task['category']}", style="cyan")
        if task.get("due_date"):
            line.append(f"  📅 {task['due_date']}", style="magenta")
        console.print(line)

    console.print(f"\n[dim]{len(tasks)} task(s)[/dim]")


def format_task_detail(task: dict) -> None:
    status = task_status(task)
    console.print(f"{STATUS_ICONS[status]} [bold]{escape(task['title'])}[/bold]")
    format_single_item(
        {
            "id": task["id"],
            "category": task.get("category") or task["category_id"],
            "description": task.get("description"),
            "due_date": task.get("due_date"),
            "status": status.replace("_", " "),
            "created_at": task.get("created_at"),
        }
    )


def format_categories_pretty(categories: list[dict]) -> None:
    for category in categories:
        line = f"[dim]#{category['id']}[/dim] {category['icon']} [bold]{escape(category['name'])}[/bold]"
        if "tasks" in category:
            line += f" [dim]({category['tasks']} tasks)[/dim]"
        console.print(line)


def format_stats_pretty(stats: dict) -> None:
    percentage = stats["completion_percentage"]
    color = get_completion_color(percentage)
    console.print("[bold]Task statistics[/bold]")
    console.print(
        f"  Progress  [{color}]{get_progress_bar(percentage)}[/{color}] {percentage:.1f}%"
    )
    console.print(f"  Total     {stats['total']}")
    console.print(f"  Done      [green]{stats['completed']}[/green]")
    console.print(f"  Pending   {stats['pending']}")
    overdue_style = "bold red" if stats["overdue"] else "dim"
    console.print(f"  Overdue   [{overdue_style}]{stats['overdue']}[/{overdue_style}]")


def get_progress_bar(percentage: float) -> str:
    """Get a progress bar representation."""
    filled = int(percentage / 10)
    empty = 10 - filled
    return "▓" * filled + "░" * empty


def get_completion_color(percentage: float) -> str:
    """Get color based on completion percentage."""
    if percentage >= 80:
        return "green"
    if percentage >= 40:
        return "yellow"
    return "red"
