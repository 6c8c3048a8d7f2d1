"""Colour theme commands.

The dark-mode flag is kept in the local state file next to the tasks, so
it survives switching between local and remote backends.
"""

import typer

from taskflow.services.bootstrap import get_state_file
from taskflow.ui.formatters import apply_theme, format_info, format_success
from taskflow.utils.typer_helpers import SuggestingGroup

from .decorators import command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Light and dark colour themes")


def _set_dark_mode(enabled: bool) -> None:
    get_state_file().set_dark_mode(enabled)
    apply_theme(enabled)
    format_success(f"Switched to {'dark' if enabled else 'light'} theme")


@app.command("show")
@command_wrapper(auth_required=False)
def show_theme() -> None:
    """Show the active theme."""
    dark = get_state_file().get_dark_mode()
    format_info(f"Current theme: {'dark' if dark else 'light'}")


@app.command("dark")
@command_wrapper(auth_required=False)
def dark_theme() -> None:
    """Use the dark theme."""
    _set_dark_mode(True)


@app.command("light")
@command_wrapper(auth_required=False)
def light_theme() -> None:
    """Use the light theme."""
    _set_dark_mode(False)


@app.command("toggle")
@command_wrapper(auth_required=False)
def toggle_theme() -> None:
    """Switch between light and dark."""
    _set_dark_mode(not get_state_file().get_dark_mode())
