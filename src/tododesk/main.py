"""Main entry point for the tododesk CLI."""

import typer
from rich.console import Console

from tododesk import __version__
from tododesk.adapters.sqlite import Store
from tododesk.commands import categories, config, stats, tasks
from tododesk.commands.decorators import AppError, command_wrapper
from tododesk.services.config_service import get_config_service
from tododesk.services.task_service import TaskService
from tododesk.utils.exit_codes import ERROR_STORAGE
from tododesk.utils.typer_helpers import SuggestingGroup
from tododesk.utils.ui.formatters import format_output, format_success

# Create main app with custom group class
app = typer.Typer(
    name="tododesk",
    cls=SuggestingGroup,
    help="A local task manager with categories, due dates and search",
    no_args_is_help=True,
)

console = Console()


# Add subcommands
app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(categories.app, name="categories", help="Category management commands")
app.add_typer(config.app, name="config", help="Configuration management")
app.command("stats")(stats.show_stats)


# Add top-level commands
@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]tododesk[/bold] version [cyan]{__version__}[/cyan]")


@app.command()
@command_wrapper
def doctor(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Check that the database opens and show what it contains."""
    db_path = get_config_service().database_path
    with Store(db_path) as store:
        service = TaskService.from_store(store)
        if not service.check_connection():
            raise AppError(f"Database unavailable: {db_path}", ERROR_STORAGE)

        format_success("Database connection OK")
        info = store.database_info()
        if output in ("json", "yaml"):
            format_output(info, output)
            return

        migrations = info.pop("migrations")
        format_output(info, output)
        format_output(migrations, "table")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
