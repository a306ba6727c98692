# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Team repository interface (domain port).

Layer:
    domain/interfaces/repositories
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from taskmanager_api.domain.entities.team import Team, TeamPage


class TeamRepository(Protocol):
    """Persistence port for teams and task/team association."""

    async def create(self, team: Team) -> Team:
        """Insert a team and return it with store-assigned fields populated."""
        raise NotImplementedError

    async def retrieve_by_uuid(self, team_uuid: UUID) -> Team:
        """Return the live team with ``team_uuid``.

        Raises:
            NotFoundError: If no such team exists.
        """
        raise NotImplementedError

    async def list_paginated(self, page: int, limit: int) -> TeamPage:
        """Return one page of teams ordered ``created_at DESC, id DESC``."""
        raise NotImplementedError

    async def retrieve_task_team_id(self, task_uuid: UUID) -> int | None:
        """Return the team id a live task is associated with, or ``None``.

        Raises:
            NotFoundError: If the task does not exist.
        """
        raise NotImplementedError

    async def update_task_team_id(self, task_uuid: UUID, team_id: int | None) -> None:
        """Set (or clear) the team reference of a live task.

        Raises:
            NotFoundError: If zero rows were affected.
        """
        raise NotImplementedError
