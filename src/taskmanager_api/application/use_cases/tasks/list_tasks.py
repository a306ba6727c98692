# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Use Case: List Tasks

Purpose:
    Return one page of live tasks, newest first, optionally filtered by
    status. Page size follows the configured default/maximum policy.

Layer: application/use_cases
"""

from __future__ import annotations

from dataclasses import dataclass

from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.application.use_cases.pagination import ListLimits
from taskmanager_api.domain.entities.task import TaskPage, TaskStatus
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository


@dataclass(frozen=True)
class ListTasksRequest:
    """Input for :class:`ListTasks`.

    Attributes:
        page: 1-indexed page number (values < 1 are treated as 1).
        limit: Requested page size (<= 0 means "use the default").
        status: Optional status filter.
    """

    page: int = 1
    limit: int = 0
    status: TaskStatus | None = None


class ListTasks:
    """List tasks through the task repository (cached or not, per wiring)."""

    def __init__(self, uow: UnitOfWork, limits: ListLimits) -> None:
        self._uow = uow
        self._limits = limits

    async def execute(self, req: ListTasksRequest) -> TaskPage:
        page, limit = self._limits.normalize(req.page, req.limit)
        async with self._uow as tx:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            return await repo.list_paginated(req.status, page, limit)
