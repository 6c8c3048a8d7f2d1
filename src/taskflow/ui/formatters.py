"""Output formatters for different formats."""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import yaml
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from taskflow.models import Priority, StatusFilter, Task, TaskStats, TaskStatus, User
from taskflow.services.views import empty_state_message, is_past_due
from taskflow.ui.console import get_console

console = get_console()

STATUS_ICONS = {
    TaskStatus.TODO: "○",
    TaskStatus.IN_PROGRESS: "◐",
    TaskStatus.COMPLETED: "✓",
}

FIELD_LABELS = {"title": "Title", "dueDate": "Due date"}


def apply_theme(dark_mode: bool) -> None:
    """Switch every formatter to the light or dark console theme."""
    global console
    console = get_console(dark_mode)


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display plain data based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col)

    for item in items:
        table.add_row(*(_cell(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key, value in item.items():
        table.add_row(key, _cell(value))

    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if value is None or value == "":
        return "-"
    return escape(str(value))


def format_tasks(
    tasks: list[Task],
    output_format: str = "pretty",
    *,
    selector: StatusFilter = StatusFilter.ALL,
    today: date | None = None,
) -> None:
    """Display a task list in the requested format."""
    if output_format in ("json", "yaml", "table"):
        format_output([task.to_wire() for task in tasks], output_format)
    else:
        format_tasks_pretty(tasks, selector=selector, today=today)


def format_tasks_pretty(
    tasks: list[Task],
    *,
    selector: StatusFilter = StatusFilter.ALL,
    today: date | None = None,
) -> None:
    """Display tasks as a readable list, one per line."""
    if not tasks:
        console.print(f"[muted]No tasks found. {empty_state_message(selector)}[/muted]")
        if selector is not StatusFilter.ALL:
            console.print("[muted]Use --filter ALL to view all tasks.[/muted]")
        return

    for task in tasks:
        format_task_item(task, today=today)


def format_task_item(task: Task, today: date | None = None) -> None:
    """Display a single task with status icon, priority badge and due date."""
    style = f"status.{task.status.value.lower()}"
    title = escape(task.title)
    if task.status is TaskStatus.COMPLETED:
        title = f"[strike muted]{title}[/]"

    line = (
        f"[{style}]{STATUS_ICONS[task.status]}[/{style}] {title} "
        f"{format_priority_badge(task.priority)}"
    )
    if task.due_date is not None:
        line += f" {format_due_date(task, today=today)}"
    line += f"  [muted]{escape(task.id)}[/muted]"
    console.print(line)

    if task.description:
        console.print(f"    [muted]{escape(task.description)}[/muted]")


def format_priority_badge(priority: Priority) -> str:
    style = f"priority.{priority.value.lower()}"
    return f"[{style}]\\[{priority.label}][/{style}]"


def format_due_date(task: Task, today: date | None = None) -> str:
    """Due date as e.g. 'Oct 19, 2026', flagged when overdue."""
    if task.due_date is None:
        return ""
    text = f"{task.due_date:%b} {task.due_date.day}, {task.due_date.year}"
    if is_past_due(task, today):
        return f"[overdue]📅 {text} (Overdue)[/overdue]"
    return f"[muted]📅 {text}[/muted]"


def format_stats(stats: TaskStats, output_format: str = "pretty") -> None:
    """Display dashboard counts."""
    if output_format in ("json", "yaml"):
        format_output(stats.to_wire(), output_format)
        return

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label")
    table.add_column("Count", justify="right")
    table.add_row("[status.completed]✓ Completed[/status.completed]", str(stats.completed))
    table.add_row(
        "[status.in_progress]◐ In Progress[/status.in_progress]", str(stats.in_progress)
    )
    table.add_row("[status.todo]○ Pending[/status.todo]", str(stats.pending))
    console.print(table)


def format_welcome(user: User | None, has_tasks: bool) -> None:
    """Greeting shown at the top of the dashboard."""
    name = escape(user.display_name) if user else "there"
    console.print(f"[accent]Welcome, {name}![/accent]")
    if not has_tasks:
        console.print(
            "[muted]Get started by adding your first task with "
            "'taskflow tasks add'. Organize, prioritize, and track your "
            "tasks with ease.[/muted]"
        )


def format_load_error(message: str) -> None:
    """Blocking panel shown when tasks could not be loaded."""
    console.print(
        Panel(
            f"{escape(message)}\n\n[muted]Run the command again to retry.[/muted]",
            title="[bold red]Error[/bold red]",
            border_style="red",
        )
    )


def format_form_errors(errors: dict[str, str]) -> None:
    """Display field-keyed validation messages."""
    for field, message in errors.items():
        label = FIELD_LABELS.get(field, field)
        console.print(f"[bold red]✗ {label}:[/bold red] {escape(message)}")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")
