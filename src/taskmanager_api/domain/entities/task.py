# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Task Entity

Purpose:
    Immutable domain representation of a task, its status graph, and the
    rules for stamping ``started_at``/``finished_at``.

Layer: domain/entities
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID

from taskmanager_api.domain.entities.base import (
    check_required_text,
    check_short_text,
    ensure_utc,
    new_external_id,
)
from taskmanager_api.domain.exceptions.tasks import ValidationError


class TaskStatus(str, Enum):
    """Lifecycle states of a task."""

    TODO = "to_do"
    IN_PROGRESS = "in_progress"
    CANCELED = "canceled"
    DONE = "done"

    @classmethod
    def parse(cls, raw: str | TaskStatus) -> TaskStatus:
        """Return the member for ``raw``.

        Raises:
            ValidationError: If ``raw`` is not a known status value.
        """
        try:
            return cls(raw)
        except ValueError as exc:
            raise ValidationError.single("status", "invalid status value") from exc


#: Allowed edges of the status graph. Terminal states have no entry.
ALLOWED_TRANSITIONS: dict[TaskStatus, frozenset[TaskStatus]] = {
    TaskStatus.TODO: frozenset({TaskStatus.IN_PROGRESS, TaskStatus.CANCELED}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.CANCELED, TaskStatus.DONE}),
}


@dataclass(frozen=True, slots=True)
class Task:
    """Task entity.

    Args:
        uuid: External identifier (UUIDv7), immutable once assigned.
        title: Short title, non-empty after trimming, at most 255 characters.
        description: Free text, non-empty after trimming.
        status: Current lifecycle state.
        id: Store-assigned surrogate key (``None`` until persisted).
        started_at: First time the task entered ``in_progress``.
        finished_at: First time the task entered ``done`` or ``canceled``.
        team_id: Store id of the owning team, if associated.
        created_at: Store-managed creation time.
        updated_at: Store-managed modification time.
    """

    uuid: UUID
    title: str
    description: str
    status: TaskStatus = TaskStatus.TODO
    id: int | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
    team_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", TaskStatus(self.status))
        for name in ("started_at", "finished_at", "created_at", "updated_at"):
            object.__setattr__(self, name, ensure_utc(getattr(self, name)))

    @classmethod
    def new(cls, *, title: str, description: str) -> Task:
        """Build a not-yet-persisted task in ``to_do`` with a fresh identifier."""
        return cls(
            uuid=new_external_id(),
            title=title.strip(),
            description=description.strip(),
            status=TaskStatus.TODO,
        )

    def validate(self) -> None:
        """Check field invariants.

        Raises:
            ValidationError: With one entry per failing field.
        """
        errors = [
            err
            for err in (
                check_short_text("title", self.title),
                check_required_text("description", self.description),
            )
            if err is not None
        ]
        if errors:
            raise ValidationError(errors)

    def validate_transition_to(self, to: TaskStatus | str) -> TaskStatus:
        """Check that moving from the current status to ``to`` is allowed.

        Returns:
            The parsed target status.

        Raises:
            ValidationError: If ``to`` is unknown or the edge is not allowed.
        """
        target = TaskStatus.parse(to)
        if target not in ALLOWED_TRANSITIONS.get(self.status, frozenset()):
            raise ValidationError.single("status", "invalid status transition")
        return target

    def ensure_timestamps_for_status(self, now: datetime) -> Task:
        """Return a copy with first-entry timestamps stamped for the current status.

        ``started_at`` and ``finished_at`` are only filled when unset, so
        repeated calls never move them.
        """
        if self.status is TaskStatus.IN_PROGRESS and self.started_at is None:
            return replace(self, started_at=now)
        if self.status in (TaskStatus.DONE, TaskStatus.CANCELED) and self.finished_at is None:
            return replace(self, finished_at=now)
        return self

    def with_changes(self, *, title: str, description: str) -> Task:
        """Return a copy carrying new (trimmed) title and description."""
        return replace(self, title=title.strip(), description=description.strip())


@dataclass(frozen=True, slots=True)
class StatusChange:
    """Fields written by a status update."""

    status: TaskStatus
    started_at: datetime | None
    finished_at: datetime | None

    @classmethod
    def from_task(cls, task: Task) -> StatusChange:
        return cls(status=task.status, started_at=task.started_at, finished_at=task.finished_at)


@dataclass(frozen=True, slots=True)
class TaskPage:
    """One page of a task listing plus the pre-pagination total."""

    items: Sequence[Task] = field(default_factory=tuple)
    page: int = 1
    limit: int = 10
    total_items: int = 0


__all__ = [
    "ALLOWED_TRANSITIONS",
    "StatusChange",
    "Task",
    "TaskPage",
    "TaskStatus",
]
