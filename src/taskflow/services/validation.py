"""Task form validation.

Both validators return field-keyed messages, keyed by the same camelCase
names the records use. An empty dict means the data is valid.

The due-date rule only applies when a task is created. Editing an existing
task with a past due date is accepted.
"""

from __future__ import annotations

from datetime import date

from taskflow.models import TaskInput, TaskUpdate

TITLE_REQUIRED = "Title is required"
DUE_DATE_IN_PAST = "Due date cannot be in the past"


def validate_new_task(data: TaskInput, today: date | None = None) -> dict[str, str]:
    """Validate the create form."""
    errors: dict[str, str] = {}
    today = today or date.today()

    if not data.title.strip():
        errors["title"] = TITLE_REQUIRED

    if data.due_date is not None and data.due_date < today:
        errors["dueDate"] = DUE_DATE_IN_PAST

    return errors


def validate_task_edit(fields: TaskUpdate) -> dict[str, str]:
    """Validate the edit form; only a supplied title is checked."""
    errors: dict[str, str] = {}
    if fields.title is not None and not fields.title.strip():
        errors["title"] = TITLE_REQUIRED
    return errors
