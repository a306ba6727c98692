# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Use Case: Get Task by external identifier."""

from __future__ import annotations

from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.domain.entities.task import Task
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository


class GetTask:
    """Read a single live task. Raises ``NotFoundError`` when absent."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, task_uuid: UUID) -> Task:
        async with self._uow as tx:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            return await repo.retrieve_by_uuid(task_uuid)
