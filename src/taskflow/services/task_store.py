"""Task store - in-memory task list and the operations that mutate it.

The store sits between commands and the task repository. It is the only
code that changes the task list: each mutation is persisted first and the
list is updated only after the repository call returns, so a failed call
leaves the list exactly as it was.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone

from taskflow.exceptions import (
    TaskflowError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskflow.models import (
    StatusFilter,
    Task,
    TaskInput,
    TaskStats,
    TaskUpdate,
)
from taskflow.repositories import TaskRepository
from taskflow.services.validation import validate_new_task, validate_task_edit
from taskflow.services.views import compute_stats, filter_tasks
from taskflow.utils.logger import get_logger

LOAD_ERROR_MESSAGE = "Failed to load your tasks. Please try again later."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """In-memory task list backed by a TaskRepository.

    Attributes:
        tasks: Current task list
        is_loading: True while :meth:`load` is running
        is_submitting: True while a mutation is running
        error: Message for a failed load or create, shown as a blocking panel
        form_errors: Field-keyed messages from the last rejected form
        mutation_error: Message from the last failed update, delete or advance
        load_exception: Cause of the last failed load, for picking an exit code
    """

    def __init__(
        self,
        task_repository: TaskRepository,
        *,
        clock: Callable[[], datetime] = _utcnow,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the store.

        Args:
            task_repository: TaskRepository implementation for persistence
            clock: Source of mutation timestamps
            today: Source of the current date for due-date validation
        """
        self.repository = task_repository
        self._clock = clock
        self._today = today
        self._logger = get_logger("store")

        self.tasks: list[Task] = []
        self.is_loading = False
        self.is_submitting = False
        self.error: str | None = None
        self.form_errors: dict[str, str] = {}
        self.mutation_error: str | None = None
        self.load_exception: TaskflowError | None = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch every task from the repository.

        Returns:
            True on success. On failure ``error`` is set and the current
            list is kept.
        """
        self.is_loading = True
        try:
            tasks = await self.repository.list_all()
        except TaskflowError as e:
            self._logger.error("Failed to load tasks: %s", e)
            self.error = LOAD_ERROR_MESSAGE
            self.load_exception = e
            return False
        finally:
            self.is_loading = False

        self.tasks = tasks
        self.error = None
        self.load_exception = None
        self._logger.debug("loaded %d tasks", len(tasks))
        return True

    async def reload(self) -> bool:
        """Retry after a failed load."""
        self.error = None
        return await self.load()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, task_id: str) -> Task:
        """Get a task by id.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        for task in self.tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def filtered(self, selector: StatusFilter = StatusFilter.ALL) -> list[Task]:
        return filter_tasks(self.tasks, selector)

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, data: TaskInput) -> Task:
        """Validate and create a task.

        Args:
            data: Create form data

        Returns:
            The stored task, appended to the list

        Raises:
            TaskValidationError: If the title is blank or the due date is past
            RecordServiceError: If the remote create fails
            StorageError: If the local state cannot be written
        """
        errors = validate_new_task(data, today=self._today())
        self.form_errors = errors
        if errors:
            raise TaskValidationError(errors)

        self.is_submitting = True
        try:
            task = await self.repository.add(data)
        except TaskflowError as e:
            self._logger.error("Failed to create task %r: %s", data.title, e)
            self.error = str(e)
            raise
        finally:
            self.is_submitting = False

        self.tasks.append(task)
        self.error = None
        self._logger.info("created task %s", task.id)
        return task

    async def advance_status(self, task_id: str) -> Task:
        """Move a task to the next status in the cycle.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        task = self.get(task_id)
        changed = task.model_copy(
            update={"status": task.status.next(), "updated_at": self._clock()}
        )
        stored = await self._persist(changed, action="advance")
        self._logger.info(
            "task %s advanced %s -> %s", task_id, task.status.value, stored.status.value
        )
        return stored

    async def update(self, task_id: str, fields: TaskUpdate) -> Task:
        """Apply edited fields and persist the full record.

        Raises:
            TaskNotFoundError: If no task has this id
            TaskValidationError: If a blank title is supplied
        """
        task = self.get(task_id)
        errors = validate_task_edit(fields)
        self.form_errors = errors
        if errors:
            raise TaskValidationError(errors)

        stored = await self._persist(
            fields.apply_to(task, updated_at=self._clock()), action="update"
        )
        self._logger.info("updated task %s", task_id)
        return stored

    async def delete(self, task_id: str) -> None:
        """Delete a task from the repository and the list.

        Raises:
            TaskNotFoundError: If no task has this id
        """
        self.get(task_id)
        self.is_submitting = True
        try:
            await self.repository.delete(task_id)
        except TaskflowError as e:
            self._record_mutation_failure("delete", task_id, e)
            raise
        finally:
            self.is_submitting = False

        self.tasks = [task for task in self.tasks if task.id != task_id]
        self.mutation_error = None
        self._logger.info("deleted task %s", task_id)

    async def _persist(self, task: Task, *, action: str) -> Task:
        self.is_submitting = True
        try:
            stored = await self.repository.update(task)
        except TaskflowError as e:
            self._record_mutation_failure(action, task.id, e)
            raise
        finally:
            self.is_submitting = False

        self.tasks = [stored if t.id == stored.id else t for t in self.tasks]
        self.mutation_error = None
        return stored

    def _record_mutation_failure(self, action: str, task_id: str, error: Exception) -> None:
        self._logger.error("Failed to %s task %s: %s", action, task_id, error)
        self.mutation_error = str(error)
