# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Use Case: Create Task

Purpose:
    Validate input, assign a fresh identifier, force the initial ``to_do``
    status, and persist the task inside one unit of work.

Layer: application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.entities.task import Task
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True)
class CreateTaskRequest:
    """Input for :class:`CreateTask`."""

    title: str
    description: str


class CreateTask:
    """Create a task in ``to_do``."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, req: CreateTaskRequest) -> Task:
        """Create and return the persisted task.

        Raises:
            ValidationError: If title or description is invalid.
        """
        task = Task.new(title=req.title, description=req.description)
        task.validate()

        async def _create(tx: UnitOfWork) -> Task:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            return await repo.create(task)

        created = await run_in_uow(self._uow, _create)
        logger.info("tasks.create", extra={"task_uuid": str(created.uuid)})
        return created
