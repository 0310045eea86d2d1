"""Statistics command."""

import typer

from tododesk.utils.ui.formatters import format_output, stats_to_dict

from .decorators import command_wrapper
from .utils import default_output_format, open_task_service


@command_wrapper
def show_stats(
    output: str | None = typer.Option(None, "--output", "-o", help="Output format"),
) -> None:
    """Show task statistics."""
    with open_task_service() as service:
        stats = service.get_statistics()
        format_output(stats_to_dict(stats), default_output_format(output))
