# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Task repository interface (domain port).

Purpose:
    Storage contract for tasks. Implemented by the SQLAlchemy adapter and by
    the list-cache decorator, which wraps any other implementation and exposes
    this same surface.

Layer:
    domain/interfaces/repositories

Notes:
    * Every read excludes soft-deleted rows.
    * Mutations that affect zero rows raise :class:`NotFoundError`.
    * Implementations never commit; the unit of work owns the transaction.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from taskmanager_api.domain.entities.task import StatusChange, Task, TaskPage, TaskStatus


class TaskRepository(Protocol):
    """Persistence port for tasks."""

    async def create(self, task: Task) -> Task:
        """Insert a task and return it with store-assigned fields populated."""
        raise NotImplementedError

    async def retrieve_by_uuid(self, task_uuid: UUID) -> Task:
        """Return the live task with ``task_uuid``.

        Raises:
            NotFoundError: If no such task exists.
        """
        raise NotImplementedError

    async def update(self, task_uuid: UUID, task: Task) -> None:
        """Persist title and description of ``task`` onto the row ``task_uuid``.

        Raises:
            NotFoundError: If zero rows were affected.
        """
        raise NotImplementedError

    async def delete(self, task_uuid: UUID) -> None:
        """Soft-delete a task.

        Raises:
            NotFoundError: If zero rows were affected.
        """
        raise NotImplementedError

    async def list_paginated(
        self,
        status: TaskStatus | None,
        page: int,
        limit: int,
    ) -> TaskPage:
        """Return one page of tasks, newest first, optionally filtered by status.

        Ordering is ``created_at DESC, id DESC``; ``offset = (page - 1) * limit``.
        A page past the end yields no items and the full ``total_items``.
        """
        raise NotImplementedError

    async def update_status(self, task_uuid: UUID, change: StatusChange) -> None:
        """Persist a status change and its timestamps.

        Raises:
            NotFoundError: If zero rows were affected.
        """
        raise NotImplementedError

    async def list_by_team_id(self, team_id: int) -> Sequence[Task]:
        """Return the team's tasks, newest first (possibly empty)."""
        raise NotImplementedError
