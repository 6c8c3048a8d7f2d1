"""Record service adapter - TaskRepository backed by the hosted `Tasks` collection."""

from __future__ import annotations

from taskflow.api.client import RecordServiceClient
from taskflow.exceptions import RecordServiceError
from taskflow.models import Task, TaskInput
from taskflow.repositories.repository import TaskRepository

TASK_FIELDS = [
    "id",
    "title",
    "description",
    "dueDate",
    "priority",
    "status",
    "createdAt",
    "updatedAt",
]
ORDER_BY_UPDATED_DESC = [{"field": "updatedAt", "direction": "desc"}]


class RecordServiceTaskRepository(TaskRepository):
    """Task repository implementation using the record service client."""

    def __init__(self, client: RecordServiceClient, collection: str = "Tasks"):
        """Initialize the repository.

        Args:
            client: Record service client owned by the caller
            collection: Name of the task collection
        """
        self.client = client
        self.collection = collection

    @staticmethod
    def _to_task(record: dict) -> Task:
        try:
            return Task.model_validate(record)
        except ValueError as e:
            raise RecordServiceError(f"Record service returned an invalid task: {e}") from e

    async def list_all(self) -> list[Task]:
        """Fetch all tasks, most recently updated first."""
        records = await self.client.fetch_records(
            self.collection,
            fields=TASK_FIELDS,
            order_by=ORDER_BY_UPDATED_DESC,
        )
        return [self._to_task(record) for record in records]

    async def add(self, task_data: TaskInput) -> Task:
        """Create a task; the service assigns the id."""
        record = await self.client.create_record(self.collection, task_data.to_wire())
        return self._to_task(record)

    async def update(self, task: Task) -> Task:
        """Send the full edited record."""
        record = task.to_wire()
        stored = await self.client.update_record(self.collection, task.id, record)
        if not stored:
            # Some deployments answer updates with an empty body
            return task
        return self._to_task({**task.to_wire(), **stored})

    async def delete(self, task_id: str) -> bool:
        """Delete a task by id."""
        await self.client.delete_record(self.collection, task_id)
        return True
