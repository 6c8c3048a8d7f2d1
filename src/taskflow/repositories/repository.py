"""Repository abstraction layer for TaskFlow.

This module defines the abstract base class (interface) for task persistence,
following the hexagonal architecture (Ports & Adapters) pattern.

The store works against this interface only, so it never knows whether tasks
live in the local state file or in the hosted record service.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskflow.models import Task, TaskInput


class TaskRepository(ABC):
    """Abstract base class for task persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """List every stored task.

        Returns:
            Tasks in the backend's natural order (insertion order locally,
            most recently updated first remotely)

        Raises:
            StorageError: If the local state cannot be read
            RecordServiceError: If the remote fetch fails
        """
        raise NotImplementedError(
            "TaskRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def add(self, task_data: TaskInput) -> Task:
        """Create a new task.

        Args:
            task_data: Validated form data

        Returns:
            Created Task with id and timestamps assigned
        """
        raise NotImplementedError("TaskRepository.add() must be implemented by adapter")

    @abstractmethod
    async def update(self, task: Task) -> Task:
        """Persist the full edited record.

        Args:
            task: Task carrying the new field values

        Returns:
            The record as stored
        """
        raise NotImplementedError(
            "TaskRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task.

        Args:
            task_id: Unique identifier for the task

        Returns:
            True if deletion was successful
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )
