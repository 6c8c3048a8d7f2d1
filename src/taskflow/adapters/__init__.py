"""Storage adapters implementing :class:`taskflow.repositories.TaskRepository`."""

from .local_storage import LocalStateFile, LocalTaskRepository
from .record_service import RecordServiceTaskRepository

__all__ = [
    "LocalStateFile",
    "LocalTaskRepository",
    "RecordServiceTaskRepository",
]
