"""Task management commands."""

from datetime import date

import typer

from taskflow.config import get_config_manager
from taskflow.models import Priority, StatusFilter, TaskInput, TaskUpdate
from taskflow.services.bootstrap import open_task_store
from taskflow.services.task_store import TaskStore
from taskflow.ui.formatters import (
    format_info,
    format_load_error,
    format_stats,
    format_success,
    format_tasks,
)
from taskflow.utils.exit_codes import ERROR_GENERAL, ERROR_INVALID_ARGS, exit_code_for
from taskflow.utils.typer_helpers import SuggestingGroup

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")


async def load_or_exit(store: TaskStore) -> None:
    """Load the store, or show the error panel and stop."""
    if not await store.load():
        format_load_error(store.error or "Failed to load your tasks.")
        if store.load_exception is None:
            raise typer.Exit(ERROR_GENERAL)
        raise typer.Exit(exit_code_for(store.load_exception))


def parse_due_date(value: str | None) -> date | None:
    """Parse a --due value; an empty string clears the date."""
    if value is None or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise AppError(
            f"Invalid due date '{value}'. Use YYYY-MM-DD.", ERROR_INVALID_ARGS
        ) from e


def _output_format(output: str | None) -> str:
    return output or get_config_manager().config.output.format


@app.command("list")
@command_wrapper
async def list_tasks(
    status_filter: StatusFilter = typer.Option(
        StatusFilter.ALL,
        "--filter",
        "-f",
        case_sensitive=False,
        help="Show only tasks with this status",
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format: pretty, table, json, yaml"
    ),
) -> None:
    """List tasks."""
    async with open_task_store() as store:
        await load_or_exit(store)
        format_tasks(
            store.filtered(status_filter),
            _output_format(output),
            selector=status_filter,
        )


@app.command("add")
@command_wrapper
async def add_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    due: str | None = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    priority: Priority = typer.Option(
        Priority.MEDIUM, "--priority", "-p", case_sensitive=False, help="Task priority"
    ),
) -> None:
    """Create a new task."""
    data = TaskInput(
        title=title,
        description=description,
        due_date=parse_due_date(due),
        priority=priority,
    )
    async with open_task_store() as store:
        await load_or_exit(store)
        task = await store.create(data)
    format_success(f"Created task '{task.title}' ({task.id})")


@app.command("edit")
@command_wrapper
async def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(
        None, "--description", "-d", help="New description"
    ),
    due: str | None = typer.Option(
        None, "--due", help="New due date (YYYY-MM-DD, empty to clear)"
    ),
    priority: Priority | None = typer.Option(
        None, "--priority", "-p", case_sensitive=False, help="New priority"
    ),
) -> None:
    """Edit a task's fields."""
    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if due is not None:
        changes["due_date"] = parse_due_date(due)
    if priority is not None:
        changes["priority"] = priority

    if not changes:
        raise AppError("Nothing to update. Pass at least one field option.", ERROR_INVALID_ARGS)

    async with open_task_store() as store:
        await load_or_exit(store)
        task = await store.update(task_id, TaskUpdate(**changes))
    format_success(f"Updated task '{task.title}'")


@app.command("advance")
@command_wrapper
async def advance_task(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Move a task to its next status (To Do -> In Progress -> Completed -> To Do)."""
    async with open_task_store() as store:
        await load_or_exit(store)
        task = await store.advance_status(task_id)
    format_success(f"'{task.title}' is now {task.status.label}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    async with open_task_store() as store:
        await load_or_exit(store)
        task = store.get(task_id)
        if not force and not typer.confirm(f"Delete task '{task.title}'?"):
            format_info("Cancelled")
            return
        await store.delete(task_id)
    format_success(f"Deleted task '{task.title}'")


@app.command("stats")
@command_wrapper
async def task_stats(
    output: str | None = typer.Option(
        None, "--output", "-o", help="Output format: pretty, json, yaml"
    ),
) -> None:
    """Show completed, in-progress and pending counts."""
    async with open_task_store() as store:
        await load_or_exit(store)
        format_stats(store.stats, _output_format(output))
