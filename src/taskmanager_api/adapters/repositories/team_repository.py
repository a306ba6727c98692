# src/taskmanager_api/adapters/repositories/team_repository.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""SQLAlchemy implementation of the team repository port.

Task/team association lives here because it is a team concern; the task row
only carries the nullable ``team_id`` reference.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager_api.adapters.repositories.base_repository import BaseRepository
from taskmanager_api.adapters.repositories.task_repository import TASK_NOT_FOUND
from taskmanager_api.domain.entities.team import Team, TeamPage
from taskmanager_api.domain.exceptions.tasks import NotFoundError
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository
from taskmanager_api.infrastructure.database.models.tasks import TaskRow, TeamRow

TEAM_NOT_FOUND = "team not found"


def row_to_team(row: TeamRow) -> Team:
    """Map an ORM row to the domain entity."""
    return Team(
        id=row.id,
        uuid=row.uuid,
        name=row.name,
        description=row.description,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlAlchemyTeamRepository(BaseRepository[TeamRow], TeamRepository):
    """Team persistence over an AsyncSession. Never commits."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def create(self, team: Team) -> Team:
        now = self.utc_now()
        row = TeamRow(
            uuid=team.uuid,
            name=team.name,
            description=team.description,
            created_at=now,
            updated_at=now,
        )
        self._session.add(row)
        await self._session.flush()
        return row_to_team(row)

    async def retrieve_by_uuid(self, team_uuid: UUID) -> Team:
        stmt = select(TeamRow).where(TeamRow.uuid == team_uuid, TeamRow.deleted_at.is_(None))
        row = await self.fetch_optional(stmt)
        if row is None:
            raise NotFoundError(TEAM_NOT_FOUND)
        return row_to_team(row)

    async def list_paginated(self, page: int, limit: int) -> TeamPage:
        stmt = select(TeamRow).where(TeamRow.deleted_at.is_(None))
        total = await self.count(stmt)
        ordered = self.order_by_newest(stmt, TeamRow.created_at, TeamRow.id)
        rows = await self.fetch_all(self.paginate(ordered, page=page, limit=limit))
        return TeamPage(
            items=tuple(row_to_team(r) for r in rows),
            page=page,
            limit=limit,
            total_items=total,
        )

    async def retrieve_task_team_id(self, task_uuid: UUID) -> int | None:
        stmt = select(TaskRow.team_id).where(
            TaskRow.uuid == task_uuid, TaskRow.deleted_at.is_(None)
        )
        found = (await self._session.execute(stmt)).first()
        if found is None:
            raise NotFoundError(TASK_NOT_FOUND)
        return found[0]

    async def update_task_team_id(self, task_uuid: UUID, team_id: int | None) -> None:
        stmt = (
            update(TaskRow)
            .where(TaskRow.uuid == task_uuid, TaskRow.deleted_at.is_(None))
            .values(team_id=team_id, updated_at=self.utc_now())
        )
        await self.execute_expecting_rows(stmt, not_found=TASK_NOT_FOUND)
