"""Unit tests for TaskStore.

The repository is an AsyncMock, except for the end-to-end class at the
bottom which runs against the local state file.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskflow.adapters.local_storage import LocalStateFile, LocalTaskRepository
from taskflow.exceptions import (
    RecordServiceError,
    TaskNotFoundError,
    TaskValidationError,
)
from taskflow.models import Priority, StatusFilter, TaskInput, TaskStatus, TaskUpdate
from taskflow.services.task_store import LOAD_ERROR_MESSAGE, TaskStore

TODAY = date(2026, 10, 19)
LATER = datetime(2026, 10, 19, 12, 0, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.list_all = AsyncMock(return_value=[])
    repo.add = AsyncMock()
    repo.update = AsyncMock(side_effect=lambda task: task)
    repo.delete = AsyncMock(return_value=True)
    return repo


@pytest.fixture()
def store(mock_repo):
    return TaskStore(mock_repo, clock=lambda: LATER, today=lambda: TODAY)


@pytest.fixture()
def loaded_store(store, mock_repo, task_factory):
    store.tasks = [
        task_factory("1", "first", status=TaskStatus.TODO),
        task_factory("2", "second", status=TaskStatus.IN_PROGRESS),
        task_factory("3", "third", status=TaskStatus.COMPLETED),
    ]
    return store


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_load_populates_tasks(store, mock_repo, task_factory):
    tasks = [task_factory("1"), task_factory("2")]
    mock_repo.list_all.return_value = tasks

    assert await store.load() is True

    assert store.tasks == tasks
    assert store.is_loading is False
    assert store.error is None


@pytest.mark.asyncio
async def test_load_failure_sets_error_and_keeps_list(store, mock_repo, task_factory):
    store.tasks = [task_factory("keep")]
    mock_repo.list_all.side_effect = RecordServiceError("boom", status_code=500)

    assert await store.load() is False

    assert store.error == LOAD_ERROR_MESSAGE
    assert store.is_loading is False
    assert [t.id for t in store.tasks] == ["keep"]
    assert isinstance(store.load_exception, RecordServiceError)


@pytest.mark.asyncio
async def test_reload_clears_error_on_success(store, mock_repo):
    mock_repo.list_all.side_effect = [RecordServiceError("down"), []]

    assert await store.load() is False
    assert await store.reload() is True
    assert store.error is None
    assert store.load_exception is None


@pytest.mark.asyncio
async def test_is_loading_set_during_fetch(store, mock_repo):
    seen = {}

    async def list_all():
        seen["loading"] = store.is_loading
        return []

    mock_repo.list_all.side_effect = list_all
    await store.load()
    assert seen["loading"] is True


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_create_empty_title_rejected_without_mutation(loaded_store, mock_repo):
    before = list(loaded_store.tasks)

    with pytest.raises(TaskValidationError) as exc_info:
        await loaded_store.create(TaskInput(title="  "))

    assert exc_info.value.errors == {"title": "Title is required"}
    assert loaded_store.form_errors == {"title": "Title is required"}
    assert loaded_store.tasks == before
    mock_repo.add.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_due_yesterday_rejected(store, mock_repo):
    with pytest.raises(TaskValidationError) as exc_info:
        await store.create(TaskInput(title="x", due_date=TODAY - timedelta(days=1)))

    assert "dueDate" in exc_info.value.errors
    mock_repo.add.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_due_today_appends(store, mock_repo, task_factory):
    created = task_factory("new", "x", due_date=TODAY)
    mock_repo.add.return_value = created

    result = await store.create(TaskInput(title="x", due_date=TODAY))

    assert result is created
    assert store.tasks[-1] is created
    assert store.form_errors == {}
    assert store.is_submitting is False


@pytest.mark.asyncio
async def test_create_remote_failure_sets_error(store, mock_repo):
    mock_repo.add.side_effect = RecordServiceError("service unavailable", 503)

    with pytest.raises(RecordServiceError):
        await store.create(TaskInput(title="x"))

    assert store.error == "service unavailable"
    assert store.tasks == []
    assert store.is_submitting is False


@pytest.mark.asyncio
async def test_is_submitting_set_during_create(store, mock_repo, task_factory):
    seen = {}

    async def add(data):
        seen["submitting"] = store.is_submitting
        return task_factory("n", data.title)

    mock_repo.add.side_effect = add
    await store.create(TaskInput(title="x"))
    assert seen["submitting"] is True
    assert store.is_submitting is False


# ---------------------------------------------------------------------------
# advance_status
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("task_id", "expected"),
    [
        ("1", TaskStatus.IN_PROGRESS),
        ("2", TaskStatus.COMPLETED),
        ("3", TaskStatus.TODO),
    ],
)
async def test_advance_status_cycles(loaded_store, mock_repo, task_id, expected):
    result = await loaded_store.advance_status(task_id)

    assert result.status is expected
    assert result.updated_at == LATER
    assert loaded_store.get(task_id).status is expected
    persisted = mock_repo.update.call_args[0][0]
    assert persisted.id == task_id
    assert persisted.status is expected


@pytest.mark.asyncio
async def test_advance_unknown_task(loaded_store, mock_repo):
    with pytest.raises(TaskNotFoundError):
        await loaded_store.advance_status("missing")
    mock_repo.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_advance_failure_leaves_list_and_surfaces_error(loaded_store, mock_repo):
    mock_repo.update.side_effect = RecordServiceError("timeout")

    with pytest.raises(RecordServiceError):
        await loaded_store.advance_status("1")

    assert loaded_store.get("1").status is TaskStatus.TODO
    assert loaded_store.mutation_error == "timeout"
    assert loaded_store.is_submitting is False


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_update_persists_full_record(loaded_store, mock_repo):
    result = await loaded_store.update(
        "2", TaskUpdate(title="renamed", priority=Priority.HIGH)
    )

    persisted = mock_repo.update.call_args[0][0]
    assert persisted.title == "renamed"
    assert persisted.priority is Priority.HIGH
    assert persisted.status is TaskStatus.IN_PROGRESS
    assert persisted.updated_at == LATER
    assert loaded_store.get("2") == result


@pytest.mark.asyncio
async def test_update_allows_past_due_date(loaded_store):
    past = TODAY - timedelta(days=7)
    result = await loaded_store.update("1", TaskUpdate(due_date=past))
    assert result.due_date == past


@pytest.mark.asyncio
async def test_update_blank_title_rejected(loaded_store, mock_repo):
    with pytest.raises(TaskValidationError):
        await loaded_store.update("1", TaskUpdate(title=""))
    assert loaded_store.get("1").title == "first"
    mock_repo.update.assert_not_awaited()


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_delete_removes_exactly_one(loaded_store, mock_repo):
    others_before = [t for t in loaded_store.tasks if t.id != "2"]

    await loaded_store.delete("2")

    mock_repo.delete.assert_awaited_once_with("2")
    assert loaded_store.tasks == others_before


@pytest.mark.asyncio
async def test_delete_failure_keeps_record(loaded_store, mock_repo):
    mock_repo.delete.side_effect = RecordServiceError("nope", 500)

    with pytest.raises(RecordServiceError):
        await loaded_store.delete("2")

    assert [t.id for t in loaded_store.tasks] == ["1", "2", "3"]
    assert loaded_store.mutation_error == "nope"


@pytest.mark.asyncio
async def test_delete_unknown_task(loaded_store, mock_repo):
    with pytest.raises(TaskNotFoundError):
        await loaded_store.delete("missing")
    mock_repo.delete.assert_not_awaited()


# ---------------------------------------------------------------------------
# derived views
# ---------------------------------------------------------------------------


def test_filtered_and_stats(loaded_store):
    assert [t.id for t in loaded_store.filtered(StatusFilter.COMPLETED)] == ["3"]
    stats = loaded_store.stats
    assert (stats.pending, stats.in_progress, stats.completed) == (1, 1, 1)


# ---------------------------------------------------------------------------
# against the local state file
# ---------------------------------------------------------------------------


class TestWithLocalRepository:
    @pytest.fixture()
    def local_store(self, tmp_path):
        repo = LocalTaskRepository(LocalStateFile(tmp_path / "state.json"))
        return TaskStore(repo, today=lambda: TODAY)

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, local_store, tmp_path):
        first = await local_store.create(TaskInput(title="first"))
        second = await local_store.create(
            TaskInput(title="second", due_date=TODAY, priority=Priority.LOW)
        )
        await local_store.advance_status(first.id)
        await local_store.update(second.id, TaskUpdate(description="details"))

        reloaded = TaskStore(
            LocalTaskRepository(LocalStateFile(tmp_path / "state.json"))
        )
        await reloaded.load()

        assert [t.title for t in reloaded.tasks] == ["first", "second"]
        assert reloaded.get(first.id).status is TaskStatus.IN_PROGRESS
        assert reloaded.get(second.id).description == "details"

        await reloaded.delete(first.id)
        again = TaskStore(LocalTaskRepository(LocalStateFile(tmp_path / "state.json")))
        await again.load()
        assert [t.id for t in again.tasks] == [second.id]
