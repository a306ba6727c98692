# src/taskmanager_api/infrastructure/database/models/tasks.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""ORM rows for tasks and teams."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from taskmanager_api.infrastructure.database.models.base import (
    DEFAULT_DB_SCHEMA,
    Base,
    BigIntPK,
    ExternalIdMixin,
    IdMixin,
    SoftDeleteMixin,
    TimestampMixin,
)

__all__ = ["TaskRow", "TeamRow"]

_TEAMS_ID = f"{DEFAULT_DB_SCHEMA}.teams.id" if DEFAULT_DB_SCHEMA else "teams.id"


class TeamRow(IdMixin, ExternalIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Persisted team."""

    __tablename__ = "teams"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class TaskRow(IdMixin, ExternalIdMixin, TimestampMixin, SoftDeleteMixin, Base):
    """Persisted task. ``team_id`` is a weak reference (nullable, no cascade)."""

    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_status_created_at", "status", "created_at"),
        Index("ix_tasks_team_id", "team_id"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="to_do")
    started_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    team_id: Mapped[int | None] = mapped_column(
        BigIntPK,
        ForeignKey(_TEAMS_ID, ondelete="SET NULL"),
        nullable=True,
    )
