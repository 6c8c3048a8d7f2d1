"""Main entry point for the TaskFlow CLI."""

import typer

from taskflow import __version__
from taskflow.commands import auth, config, tasks, theme
from taskflow.commands.decorators import command_wrapper
from taskflow.commands.tasks import load_or_exit
from taskflow.config import get_config_manager
from taskflow.exceptions import StorageError
from taskflow.models import StatusFilter
from taskflow.services.auth_service import AuthService
from taskflow.services.bootstrap import get_state_file, open_task_store
from taskflow.ui.formatters import (
    apply_theme,
    format_info,
    format_stats,
    format_tasks_pretty,
    format_welcome,
)
from taskflow.utils.logger import get_logger
from taskflow.utils.typer_helpers import SuggestingGroup

app = typer.Typer(
    name="taskflow",
    cls=SuggestingGroup,
    help="Create, edit, filter and track your tasks",
    no_args_is_help=True,
)

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(auth.app, name="auth", help="Authentication commands")
app.add_typer(config.app, name="config", help="Configuration management")
app.add_typer(theme.app, name="theme", help="Light and dark colour themes")


@app.callback()
def main_callback() -> None:
    """Apply the stored colour theme before any command runs."""
    try:
        apply_theme(get_state_file().get_dark_mode())
    except StorageError as e:
        get_logger().warning("Could not read theme preference: %s", e)


@app.command()
@command_wrapper
async def dashboard(
    status_filter: StatusFilter = typer.Option(
        StatusFilter.ALL,
        "--filter",
        "-f",
        case_sensitive=False,
        help="Show only tasks with this status",
    ),
) -> None:
    """Show a greeting, task counts and your task list."""
    user = AuthService(get_config_manager()).current_user()
    async with open_task_store() as store:
        await load_or_exit(store)
        format_welcome(user, has_tasks=bool(store.tasks))
        format_stats(store.stats)
        format_tasks_pretty(store.filtered(status_filter), selector=status_filter)


@app.command()
def version() -> None:
    """Show version information and the active backend."""
    config_manager = get_config_manager()
    format_info(f"TaskFlow version {__version__}")
    if config_manager.is_remote:
        format_info(f"Backend: record service at {config_manager.config.backend.endpoint}")
    else:
        format_info(f"Backend: local state file {config_manager.state_path}")


if __name__ == "__main__":
    app()
