"""TaskFlow domain models.

Pydantic models for tasks and users, plus the typed authentication result.
"""

from .auth import Authenticated, AuthResult, Failed, User
from .task import (
    Priority,
    StatusFilter,
    Task,
    TaskInput,
    TaskStats,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    # Task models
    "Task",
    "TaskInput",
    "TaskUpdate",
    "TaskStats",
    "TaskStatus",
    "Priority",
    "StatusFilter",
    # Auth models
    "User",
    "Authenticated",
    "Failed",
    "AuthResult",
]
