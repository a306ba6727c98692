# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Use Case: Update Task Status

Purpose:
    Move a task along the status graph and stamp first-entry timestamps
    (``started_at`` on the first move to ``in_progress``, ``finished_at`` on
    the first move to ``done``/``canceled``).

Layer: application/use_cases
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID

from taskmanager_api.application.uow import UnitOfWork, run_in_uow
from taskmanager_api.domain.entities.task import StatusChange, Task, TaskStatus
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class UpdateTaskStatusRequest:
    """Input for :class:`UpdateTaskStatus`. ``status`` may be a raw string."""

    task_uuid: UUID
    status: TaskStatus | str


class UpdateTaskStatus:
    """Validate and apply a status transition.

    Args:
        uow: Unit of work resolving the task repository.
        clock: Source of "now" for timestamp stamping.
    """

    def __init__(self, uow: UnitOfWork, clock: Callable[[], datetime] = _utc_now) -> None:
        self._uow = uow
        self._clock = clock

    async def execute(self, req: UpdateTaskStatusRequest) -> Task:
        """Apply the transition and return the updated task.

        Raises:
            NotFoundError: If the task does not exist.
            ValidationError: If the status value is unknown or the transition
                is not allowed from the current status.
        """

        async def _transition(tx: UnitOfWork) -> Task:
            repo: TaskRepository = tx.get_repository(TaskRepository)
            current = await repo.retrieve_by_uuid(req.task_uuid)
            target = current.validate_transition_to(req.status)
            moved = replace(current, status=target).ensure_timestamps_for_status(self._clock())
            await repo.update_status(req.task_uuid, StatusChange.from_task(moved))
            return await repo.retrieve_by_uuid(req.task_uuid)

        updated = await run_in_uow(self._uow, _transition)
        logger.info(
            "tasks.status_changed",
            extra={"task_uuid": str(req.task_uuid), "status": updated.status.value},
        )
        return updated
