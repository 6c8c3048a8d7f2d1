"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from unittest.mock import patch

import pytest

from taskflow.config import get_config_manager, reset_config_manager
from taskflow.models import Priority, Task, TaskStatus

# ---------------------------------------------------------------------------
# Directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path):
    """Point config, data and log directories at *tmp_path*.

    Also drops the cached config manager and logger so each test starts
    from a clean slate.
    """
    import taskflow.utils.logger as logger_mod

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "log"

    def _reset_logging():
        logger_mod._root = None
        root = logging.getLogger("taskflow")
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)

    _reset_logging()
    reset_config_manager()
    with (
        patch("taskflow.config.user_config_dir", return_value=str(config_dir)),
        patch("taskflow.config.user_data_dir", return_value=str(data_dir)),
        patch("taskflow.utils.logger.user_log_dir", return_value=str(log_dir)),
    ):
        yield tmp_path
    reset_config_manager()
    _reset_logging()


@pytest.fixture()
def config_manager():
    """The active (isolated) ConfigManager."""
    return get_config_manager()


@pytest.fixture()
def remote_config(config_manager):
    """Switch the isolated configuration to the record service backend."""
    config_manager.set("backend.type", "remote")
    config_manager.set("backend.endpoint", "https://records.test/api")
    config_manager.set("backend.client_id", "client-123")
    return config_manager


# ---------------------------------------------------------------------------
# Task factories
# ---------------------------------------------------------------------------

NOW = datetime(2026, 10, 19, 9, 0, 0, tzinfo=timezone.utc)


def make_task(
    task_id: str = "1",
    title: str = "Write report",
    *,
    status: TaskStatus = TaskStatus.TODO,
    priority: Priority = Priority.MEDIUM,
    due_date: date | None = None,
    description: str = "",
) -> Task:
    return Task(
        id=task_id,
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        status=status,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture()
def task_factory():
    """Build Task objects with sensible defaults."""
    return make_task
