# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Use Cases: Associate / Disassociate a Task with a Team

Purpose:
    Maintain the weak task -> team reference. A task belongs to at most one
    team at a time; moving it requires disassociating it first.

Layer: application/use_cases

Notes:
    Lookup failures surface as validation errors ("team not found",
    "task not found") because both identifiers arrive in the request.
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.entities.team import Team
from taskmanager_api.domain.exceptions.tasks import NotFoundError, ValidationError
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass(frozen=True)
class TaskMembershipRequest:
    """Identifies the team and the task whose association changes."""

    team_uuid: UUID
    task_uuid: UUID


async def _resolve(repo: TeamRepository, req: TaskMembershipRequest) -> tuple[Team, int | None]:
    """Return the team and the task's current team id, as validation errors."""
    try:
        team = await repo.retrieve_by_uuid(req.team_uuid)
    except NotFoundError as exc:
        raise ValidationError.single("team", "team not found") from exc
    try:
        current_team_id = await repo.retrieve_task_team_id(req.task_uuid)
    except NotFoundError as exc:
        raise ValidationError.single("task", "task not found") from exc
    return team, current_team_id


class AssociateTask:
    """Attach a task to a team. Re-attaching to the same team is a no-op."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, req: TaskMembershipRequest) -> None:
        """Associate the task.

        Raises:
            ValidationError: If the team or task is missing, or the task
                already belongs to another team.
        """

        async def _associate(tx: UnitOfWork) -> None:
            repo: TeamRepository = tx.get_repository(TeamRepository)
            team, current_team_id = await _resolve(repo, req)
            if current_team_id is not None and current_team_id != team.id:
                raise ValidationError.single(
                    "task", "task is already associated with another team"
                )
            if current_team_id == team.id:
                return
            await repo.update_task_team_id(req.task_uuid, team.id)

        await run_in_uow(self._uow, _associate)
        logger.info(
            "teams.task_associated",
            extra={"team_uuid": str(req.team_uuid), "task_uuid": str(req.task_uuid)},
        )


class DisassociateTask:
    """Detach a task from the team it currently belongs to."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def execute(self, req: TaskMembershipRequest) -> None:
        """Disassociate the task.

        Raises:
            ValidationError: If the team or task is missing, or the task is
                not associated with this team.
        """

        async def _disassociate(tx: UnitOfWork) -> None:
            repo: TeamRepository = tx.get_repository(TeamRepository)
            team, current_team_id = await _resolve(repo, req)
            if current_team_id is None or current_team_id != team.id:
                raise ValidationError.single(
                    "task", "task is not associated with this team"
                )
            await repo.update_task_team_id(req.task_uuid, None)

        await run_in_uow(self._uow, _disassociate)
        logger.info(
            "teams.task_disassociated",
            extra={"team_uuid": str(req.team_uuid), "task_uuid": str(req.task_uuid)},
        )
