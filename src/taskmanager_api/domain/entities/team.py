# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Team Entity

Purpose:
    Immutable domain representation of a team. A team references tasks
    weakly (by id); it never owns their lifecycle.

Layer: domain/entities
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from taskmanager_api.domain.entities.base import (
    check_required_text,
    check_short_text,
    ensure_utc,
    new_external_id,
)
from taskmanager_api.domain.entities.task import Task
from taskmanager_api.domain.exceptions.tasks import ValidationError


@dataclass(frozen=True, slots=True)
class Team:
    """Team entity."""

    uuid: UUID
    name: str
    description: str
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_at", ensure_utc(self.created_at))
        object.__setattr__(self, "updated_at", ensure_utc(self.updated_at))

    @classmethod
    def new(cls, *, name: str, description: str) -> Team:
        """Build a not-yet-persisted team with a fresh identifier."""
        return cls(uuid=new_external_id(), name=name.strip(), description=description.strip())

    def validate(self) -> None:
        """Check field invariants.

        Raises:
            ValidationError: With one entry per failing field.
        """
        errors = [
            err
            for err in (
                check_short_text("name", self.name),
                check_required_text("description", self.description),
            )
            if err is not None
        ]
        if errors:
            raise ValidationError(errors)


@dataclass(frozen=True, slots=True)
class TeamWithTasks:
    """A team together with the tasks currently associated to it."""

    team: Team
    tasks: Sequence[Task] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class TeamPage:
    """One page of a team listing plus the pre-pagination total."""

    items: Sequence[Team] = field(default_factory=tuple)
    page: int = 1
    limit: int = 10
    total_items: int = 0
