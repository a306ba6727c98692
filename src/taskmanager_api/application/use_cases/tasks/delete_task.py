# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Use Case: Delete Task (soft delete)."""

from __future__ import annotations

from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


class DeleteTask:
    """Mark a task deleted. Raises ``NotFoundError`` when already gone."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, task_uuid: UUID) -> None:
        async def _delete(tx: UnitOfWork) -> None:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            await repo.delete(task_uuid)

        await run_in_uow(self._uow, _delete)
        logger.info("tasks.delete", extra={"task_uuid": str(task_uuid)})
