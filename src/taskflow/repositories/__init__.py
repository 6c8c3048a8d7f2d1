"""Repository interfaces for TaskFlow.

Implementations (Adapters) are in:
- taskflow.adapters.local_storage (local state file)
- taskflow.adapters.record_service (hosted record service)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
