"""Service layer: task store, validation, derived views, auth and wiring."""

from .auth_service import AuthService
from .task_store import TaskStore

__all__ = ["AuthService", "TaskStore"]
