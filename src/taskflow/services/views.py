"""Derived views over the task list: filtering, dashboard counts, overdue checks."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from taskflow.models import StatusFilter, Task, TaskStats, TaskStatus


def filter_tasks(tasks: Iterable[Task], selector: StatusFilter) -> list[Task]:
    """Return the tasks matching *selector*, keeping their relative order."""
    return [task for task in tasks if selector.matches(task.status)]


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    """Count completed, in-progress and pending (TODO) tasks."""
    completed = in_progress = pending = 0
    for task in tasks:
        if task.status is TaskStatus.COMPLETED:
            completed += 1
        elif task.status is TaskStatus.IN_PROGRESS:
            in_progress += 1
        else:
            pending += 1
    return TaskStats(completed=completed, in_progress=in_progress, pending=pending)


def is_past_due(task: Task, today: date | None = None) -> bool:
    """True when an unfinished task's due date is before today."""
    if task.due_date is None or task.status is TaskStatus.COMPLETED:
        return False
    return task.due_date < (today or date.today())


def empty_state_message(selector: StatusFilter) -> str:
    """Message shown when a filter matches no tasks."""
    if selector is StatusFilter.ALL:
        return "You haven't created any tasks yet."
    return f"You don't have any {selector.value.lower().replace('_', ' ')} tasks."
