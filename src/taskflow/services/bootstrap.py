"""
Application wiring.

The backend is chosen once per command from the active configuration:
``backend.type == "local"`` stores tasks in the local state file,
``"remote"`` talks to the record service. The record service client is
created here and closed when the ``async with`` block exits; nothing else
holds on to it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from taskflow.adapters.local_storage import LocalStateFile, LocalTaskRepository
from taskflow.adapters.record_service import RecordServiceTaskRepository
from taskflow.api.auth import RecordServiceAuthAdapter
from taskflow.api.client import RecordServiceClient
from taskflow.config import ConfigManager, get_config_manager
from taskflow.services.auth_service import AuthService
from taskflow.services.task_store import TaskStore
from taskflow.utils.logger import get_logger


def get_state_file(config_manager: ConfigManager | None = None) -> LocalStateFile:
    """Local state file for the active profile."""
    config_manager = config_manager or get_config_manager()
    return LocalStateFile(config_manager.state_path)


@asynccontextmanager
async def open_task_store(
    config_manager: ConfigManager | None = None,
) -> AsyncIterator[TaskStore]:
    """Build a TaskStore for the configured backend."""
    config_manager = config_manager or get_config_manager()
    backend = config_manager.config.backend

    if backend.type == "remote":
        token = AuthService(config_manager).token()
        async with RecordServiceClient.from_config(backend, token=token) as client:
            get_logger().debug("using record service at %s", client.base_url)
            yield TaskStore(RecordServiceTaskRepository(client, backend.collection))
    else:
        state = get_state_file(config_manager)
        get_logger().debug("using local state file %s", state.path)
        yield TaskStore(LocalTaskRepository(state))


@asynccontextmanager
async def open_auth_service(
    config_manager: ConfigManager | None = None,
) -> AsyncIterator[AuthService]:
    """Build an AuthService wired to the record service."""
    config_manager = config_manager or get_config_manager()
    backend = config_manager.config.backend
    async with RecordServiceClient.from_config(backend) as client:
        yield AuthService(config_manager, RecordServiceAuthAdapter(client))
