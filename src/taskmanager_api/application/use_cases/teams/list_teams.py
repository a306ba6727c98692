# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Use Case: List Teams."""

from __future__ import annotations

from dataclasses import dataclass

from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.application.use_cases.pagination import ListLimits
from taskmanager_api.domain.entities.team import TeamPage
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository


@dataclass(frozen=True)
class ListTeamsRequest:
    """Input for :class:`ListTeams`."""

    page: int = 1
    limit: int = 0


class ListTeams:
    """Return one page of live teams, newest first."""

    def __init__(self, uow: UnitOfWork, limits: ListLimits) -> None:
        self._uow = uow
        self._limits = limits

    async def execute(self, req: ListTeamsRequest) -> TeamPage:
        page, limit = self._limits.normalize(req.page, req.limit)
        async with self._uow as tx:
            repo: TeamRepository = tx.get_repository(TeamRepository)
            return await repo.list_paginated(page, limit)
