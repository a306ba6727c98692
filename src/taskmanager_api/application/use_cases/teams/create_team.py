# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Use Case: Create Team."""

from __future__ import annotations

from dataclasses import dataclass

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.entities.team import Team
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True)
class CreateTeamRequest:
    """Input for :class:`CreateTeam`."""

    name: str
    description: str


class CreateTeam:
    """Validate and persist a new team."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, req: CreateTeamRequest) -> Team:
        """Create and return the persisted team.

        Raises:
            ValidationError: If name or description is invalid.
        """
        team = Team.new(name=req.name, description=req.description)
        team.validate()

        async def _create(tx: UnitOfWork) -> Team:
            repo: TeamRepository = tx.get_repository(TeamRepository)
            return await repo.create(team)

        created = await run_in_uow(self._uow, _create)
        logger.info("teams.create", extra={"team_uuid": str(created.uuid)})
        return created
