"""Console utilities for TaskFlow."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

LIGHT_THEME = Theme(
    {
        "accent": "bold blue",
        "muted": "grey50",
        "status.todo": "grey50",
        "status.in_progress": "blue",
        "status.completed": "green",
        "priority.low": "green",
        "priority.medium": "dark_orange",
        "priority.high": "red",
        "overdue": "bold red",
    }
)

DARK_THEME = Theme(
    {
        "accent": "bold bright_cyan",
        "muted": "grey62",
        "status.todo": "grey70",
        "status.in_progress": "bright_blue",
        "status.completed": "bright_green",
        "priority.low": "bright_green",
        "priority.medium": "yellow",
        "priority.high": "bright_red",
        "overdue": "bold bright_red",
    }
)


@lru_cache(maxsize=2)
def get_console(dark_mode: bool = False) -> Console:
    """Get a Rich Console using the light or dark colour theme."""
    return Console(theme=DARK_THEME if dark_mode else LIGHT_THEME)
