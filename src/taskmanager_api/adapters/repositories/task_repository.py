# src/taskmanager_api/adapters/repositories/task_repository.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the task repository port.

Layer:
    adapters/repositories
"""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager_api.adapters.repositories.base_repository import BaseRepository
from taskmanager_api.domain.entities.task import StatusChange, Task, TaskPage, TaskStatus
from taskmanager_api.domain.exceptions.tasks import NotFoundError
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.database.models.tasks import TaskRow

TASK_NOT_FOUND = "task not found"


def row_to_task(row: TaskRow) -> Task:
    """Map an ORM row to the domain entity."""
    return Task(
        id=row.id,
        uuid=row.uuid,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        started_at=row.started_at,
        finished_at=row.finished_at,
        team_id=row.team_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyTaskRepository(BaseRepository[TaskRow], TaskRepository):
    """Task persistence over an AsyncSession. Never commits."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    @staticmethod
    def _live() -> list[object]:
        return [TaskRow.deleted_at.is_(None)]

    async def create(self, task: Task) -> Task:
        now = self.utc_now()
        row = TaskRow(
            uuid=task.uuid,
            title=task.title,
            description=task.description,
            status=task.status.value,
            started_at=task.started_at,
            finished_at=task.finished_at,
            team_id=task.team_id,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        return row_to_task(row)

    async def retrieve_by_uuid(self, task_uuid: UUID) -> Task:
        stmt = select(TaskRow).where(TaskRow.uuid == task_uuid, *self._live())
        row = await self.fetch_optional(stmt)
        if row is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return row_to_task(row)

    async def update(self, task_uuid: UUID, task: Task) -> None:
        stmt = (
            update(TaskRow)
            .where(TaskRow.uuid == task_uuid, *self._live())
            .values(title=task.title, description=task.description, updated_at=self.utc_now())
        )
        await self.execute_expecting_rows(stmt, not_found=TASK_NOT_FOUND)

    async def delete(self, task_uuid: UUID) -> None:
        now = self.utc_now()
        stmt = (
            update(TaskRow)
            .where(TaskRow.uuid == task_uuid, *self._live())
            .values(deleted_at=now, updated_at=now)
        )
        await self.execute_expecting_rows(stmt, not_found=TASK_NOT_FOUND)

    async def list_paginated(
        self,
        status: TaskStatus | None,
        page: int,
        limit: int,
    ) -> TaskPage:
        stmt = select(TaskRow).where(*self._live())
        if status is not None:
            stmt = stmt.where(TaskRow.status == status.value)

        total = await self.count(stmt)
        ordered = self.order_by_newest(stmt, TaskRow.created_at, TaskRow.id)
        rows = await self.fetch_all(self.paginate(ordered, page=page, limit=limit))
        return TaskPage(
            items=tuple(row_to_task(r) for r in rows),
            page=page,
            limit=limit,
            total_items=total,
        )

    async def update_status(self, task_uuid: UUID, change: StatusChange) -> None:
        stmt = (
            update(TaskRow)
            .where(TaskRow.uuid == task_uuid, *self._live())
            .values(
                status=change.status.value,
                started_at=change.started_at,
                finished_at=change.finished_at,
                updated_at=self.utc_now(),
            )
        )
        await self.execute_expecting_rows(stmt, not_found=TASK_NOT_FOUND)

    async def list_by_team_id(self, team_id: int) -> Sequence[Task]:
        stmt = select(TaskRow).where(TaskRow.team_id == team_id, *self._live())
        rows = await self.fetch_all(self.order_by_newest(stmt, TaskRow.created_at, TaskRow.id))
        return [row_to_task(r) for r in rows]
