# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Use Case: Get Team together with its tasks."""

from __future__ import annotations

from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.domain.entities.team import TeamWithTasks
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository


class GetTeamWithTasks:
    """Read a team and the tasks associated with it (newest first)."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, team_uuid: UUID) -> TeamWithTasks:
        """Return the team and its tasks.

        Raises:
            NotFoundError: If the team does not exist.
        """
        async with self._uow as tx:
            teams: TeamRepository = tx.get_repository(TeamRepository)
            tasks: TaskRepository = tx.get_repository(TaskRepository)
            team = await teams.retrieve_by_uuid(team_uuid)
            # Unsaved teams own nothing; unassigned tasks also have team_id None.
            members = await tasks.list_by_team_id(team.id) if team.id is not None else ()
            return TeamWithTasks(team=team, tasks=tuple(members))
