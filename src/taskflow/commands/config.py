"""Configuration management commands."""

import typer
from pydantic import ValidationError

from taskflow.config import get_config_manager
from taskflow.ui.formatters import format_output, format_success
from taskflow.utils.exit_codes import ERROR_INVALID_ARGS
from taskflow.utils.typer_helpers import SuggestingGroup

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Configuration management")


@app.command("show")
@command_wrapper(auth_required=False)
def show_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """Show the full configuration."""
    format_output(get_config_manager().config.model_dump(), output)


@app.command("get")
@command_wrapper(auth_required=False)
def get_config(key: str = typer.Argument(..., help="Dot-separated key, e.g. backend.type")) -> None:
    """Get a configuration value."""
    config_manager = get_config_manager()
    if not config_manager.has_key(config_manager.config, key):
        raise AppError(f"Unknown configuration key: {key}", ERROR_INVALID_ARGS)
    value = config_manager.get(key)
    typer.echo("-" if value is None else value)


@app.command("set")
@command_wrapper(auth_required=False)
def set_config(
    key: str = typer.Argument(..., help="Dot-separated key, e.g. backend.type"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    try:
        get_config_manager().set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown configuration key: {key}", ERROR_INVALID_ARGS) from e
    except ValidationError as e:
        raise AppError(
            f"Invalid value for {key}: {e.errors()[0]['msg']}", ERROR_INVALID_ARGS
        ) from e
    format_success(f"Set {key} = {value}")


@app.command("reset")
@command_wrapper(auth_required=False)
def reset_config(
    key: str | None = typer.Argument(None, help="Key to reset (all when omitted)"),
) -> None:
    """Reset configuration to defaults."""
    try:
        get_config_manager().reset(key)
    except KeyError as e:
        raise AppError(f"Unknown configuration key: {key}", ERROR_INVALID_ARGS) from e
    format_success(f"Reset {key or 'configuration'} to defaults")
