# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Use Case: Update Task

Purpose:
    Replace the title and description of an existing task. Status is changed
    only through :class:`UpdateTaskStatus`.

Layer: application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.entities.task import Task
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True)
class UpdateTaskRequest:
    """Input for :class:`UpdateTask`."""

    task_uuid: UUID
    title: str
    description: str


class UpdateTask:
    """Update title/description of a live task."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, req: UpdateTaskRequest) -> Task:
        """Apply the change and return the updated task.

        Raises:
            NotFoundError: If the task does not exist.
            ValidationError: If the new fields are invalid.
        """

        async def _update(tx: UnitOfWork) -> Task:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            current = await repo.retrieve_by_uuid(req.task_uuid)
            changed = current.with_changes(title=req.title, description=req.description)
            changed.validate()
            await repo.update(req.task_uuid, changed)
            return await repo.retrieve_by_uuid(req.task_uuid)

        updated = await run_in_uow(self._uow, _update)
        logger.info("tasks.update", extra={"task_uuid": str(req.task_uuid)})
        return updated
