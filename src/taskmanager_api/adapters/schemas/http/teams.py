# src/taskmanager_api/adapters/schemas/http/teams.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Team HTTP schemas (requests and responses)."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskmanager_api.adapters.schemas.http.base import BaseHTTPSchema, BaseRequestSchema
from taskmanager_api.adapters.schemas.http.tasks import TaskResponse

__all__ = [
    "TeamCreateRequest",
    "TaskAssociationRequest",
    "TeamResponse",
    "TeamWithTasksResponse",
]


class TeamCreateRequest(BaseRequestSchema):
    """Body for ``POST /api/teams``."""

    name: str = Field(default="", examples=["Platform"])
    description: str = Field(default="", examples=["Owns the deployment pipeline"])


class TaskAssociationRequest(BaseRequestSchema):
    """Body for ``POST /api/teams/{uuid}/tasks``."""

    task_uuid: UUID


class TeamResponse(BaseHTTPSchema):
    """Public representation of a team."""

    uuid: UUID
    name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TeamWithTasksResponse(TeamResponse):
    """A team and the tasks currently associated with it."""

    tasks: list[TaskResponse] = Field(default_factory=list)
