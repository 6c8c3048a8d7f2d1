"""Task data models."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TaskStatus(str, Enum):
    """Task status. Advancing cycles TODO -> IN_PROGRESS -> COMPLETED -> TODO."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    def next(self) -> TaskStatus:
        return _STATUS_CYCLE[self]

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


_STATUS_CYCLE = {
    TaskStatus.TODO: TaskStatus.IN_PROGRESS,
    TaskStatus.IN_PROGRESS: TaskStatus.COMPLETED,
    TaskStatus.COMPLETED: TaskStatus.TODO,
}


class Priority(str, Enum):
    """Task priority."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def label(self) -> str:
        return self.value.title()


class StatusFilter(str, Enum):
    """Selector used to narrow the task list."""

    ALL = "ALL"
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    def matches(self, status: TaskStatus) -> bool:
        return self is StatusFilter.ALL or self.value == status.value


class _WireModel(BaseModel):
    """Base for models exchanged with storage backends using camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self, **kwargs) -> dict:
        """Dump using the camelCase keys used by the record service and state file."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Task(_WireModel):
    """Task model representing a stored task record.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional free-text description
        due_date: Optional calendar due date
        priority: Priority level
        status: Workflow status
        created_at: Creation timestamp
        updated_at: Last mutation timestamp
    """

    id: str
    title: str
    description: str = ""
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime
    updated_at: datetime

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Some services hand back numeric ids
        return str(value) if isinstance(value, int) else value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value):
        return "" if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value):
        return _blank_to_none(value)


class TaskInput(_WireModel):
    """Data collected by the create form.

    Attributes:
        title: Task title (validated as required)
        description: Optional description
        due_date: Optional due date, must not be in the past
        priority: Priority level (default MEDIUM)
        status: Initial status (default TODO)
    """

    title: str = ""
    description: str = ""
    due_date: date | None = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value):
        return _blank_to_none(value)


class TaskUpdate(_WireModel):
    """Fields changed by the edit form.

    All fields are optional - only provided fields are applied.
    """

    title: str | None = None
    description: str | None = None
    due_date: date | None = None
    priority: Priority | None = None
    status: TaskStatus | None = None

    @field_validator("due_date", mode="before")
    @classmethod
    def _blank_due_date(cls, value):
        return _blank_to_none(value)

    def apply_to(self, task: Task, updated_at: datetime) -> Task:
        """Return a copy of *task* with the set fields applied."""
        changes = self.model_dump(exclude_unset=True)
        changes["updated_at"] = updated_at
        return task.model_copy(update=changes)


class TaskStats(_WireModel):
    """Aggregate status counts shown on the dashboard."""

    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    pending: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.completed + self.in_progress + self.pending
