"""Exception types raised by the TaskFlow store, repositories and clients."""

from __future__ import annotations


class TaskflowError(Exception):
    """Base class for all TaskFlow errors."""


class TaskValidationError(TaskflowError):
    """Raised when task form data fails validation.

    Attributes:
        errors: Field-keyed error messages (e.g. ``{"title": "Title is required"}``)
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()) or "Invalid task data")


class TaskNotFoundError(TaskflowError):
    """Raised when a task id is not present in the store."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class RecordServiceError(TaskflowError):
    """Raised when a call to the hosted record service fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)


class StorageError(TaskflowError):
    """Raised when the local state file cannot be read or written."""
