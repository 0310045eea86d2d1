"""Configuration management commands."""

import typer

from tododesk.exceptions import ConfigError
from tododesk.services.config_service import get_config_service
from tododesk.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from tododesk.utils.typer_helpers import SuggestingGroup
from tododesk.utils.ui.console import get_console
from tododesk.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management commands")
console = get_console()


@app.command("show")
@command_wrapper
def show_config(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show the current configuration."""
    config_service = get_config_service()
    config_dict = config_service.config.model_dump()
    config_dict["database_file"] = str(config_service.database_path)
    config_dict["config_file"] = str(config_service.config_path)
    format_output(config_dict, output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
) -> None:
    """Get a configuration value."""
    try:
        value = get_config_service().get(key)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e
    console.print(value)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., output.format)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_service().set(key, value)
    except KeyError as e:
        raise AppError(f"Configuration key '{key}' not found", ERROR_NOT_FOUND) from e
    except ConfigError as e:
        raise AppError(str(e), ERROR_INVALID_ARGS) from e
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        format_warning("Cancelled")
        raise typer.Exit(0)

    get_config_service().reset_config()
    format_success("Configuration reset to defaults")
