"""Local state file adapter.

All local state lives in one JSON document::

    {"tasks": [<task record>, ...], "darkMode": false}

Task records use the same camelCase keys as the record service, so a state
file can be imported into a remote collection unchanged.
"""

from __future__ import annotations

import json
import os
import time
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from taskflow.exceptions import StorageError
from taskflow.models import Task, TaskInput
from taskflow.repositories.repository import TaskRepository
from taskflow.utils.logger import get_logger

TASKS_KEY = "tasks"
DARK_MODE_KEY = "darkMode"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LocalStateFile:
    """Reads and writes the local state document."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self) -> dict[str, Any]:
        """Return the whole state document; a missing file reads as empty."""
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read local state {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Local state {self.path} is not a JSON object")
        return data

    def write(self, data: dict[str, Any]) -> None:
        """Replace the state document atomically."""
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Failed to write local state {self.path}: {e}") from e

    def load_tasks(self) -> list[dict[str, Any]]:
        tasks = self.read().get(TASKS_KEY, [])
        if not isinstance(tasks, list):
            raise StorageError(f"Local state {self.path} has a malformed task list")
        return tasks

    def save_tasks(self, tasks: list[dict[str, Any]]) -> None:
        data = self.read()
        data[TASKS_KEY] = tasks
        self.write(data)

    def get_dark_mode(self, default: bool = False) -> bool:
        return bool(self.read().get(DARK_MODE_KEY, default))

    def set_dark_mode(self, enabled: bool) -> None:
        data = self.read()
        data[DARK_MODE_KEY] = bool(enabled)
        self.write(data)


class LocalTaskRepository(TaskRepository):
    """Task repository backed by the local state file.

    Ids are millisecond timestamps, bumped when two tasks are created within
    the same millisecond. Insertion order is preserved.
    """

    def __init__(
        self,
        state: LocalStateFile,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.state = state
        self._clock = clock
        self._logger = get_logger("local")

    def _read(self) -> list[Task]:
        try:
            return [Task.model_validate(record) for record in self.state.load_tasks()]
        except ValueError as e:
            raise StorageError(f"Local state contains an invalid task: {e}") from e

    def _write(self, tasks: list[Task]) -> None:
        self.state.save_tasks([task.to_wire() for task in tasks])

    def _next_id(self, existing: set[str]) -> str:
        candidate = int(time.time() * 1000)
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    async def list_all(self) -> list[Task]:
        """List all tasks in insertion order."""
        return self._read()

    async def add(self, task_data: TaskInput) -> Task:
        """Append a new task with a timestamp id."""
        tasks = self._read()
        now = self._clock()
        task = Task(
            id=self._next_id({t.id for t in tasks}),
            created_at=now,
            updated_at=now,
            **task_data.model_dump(),
        )
        tasks.append(task)
        self._write(tasks)
        self._logger.debug("stored task %s in %s", task.id, self.state.path)
        return task

    async def update(self, task: Task) -> Task:
        """Replace the stored record with the same id."""
        tasks = self._read()
        for index, existing in enumerate(tasks):
            if existing.id == task.id:
                tasks[index] = task
                self._write(tasks)
                return task
        raise StorageError(f"Task {task.id} is not in local state")

    async def delete(self, task_id: str) -> bool:
        """Remove the record with *task_id*."""
        tasks = self._read()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            return False
        self._write(remaining)
        return True
