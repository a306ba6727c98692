# src/taskmanager_api/adapters/schemas/http/tasks.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Task HTTP schemas (requests and responses).

Request bodies default missing strings to ``""`` so that absent fields reach
entity validation and come back as field-level 422 errors rather than as
transport-level 400s.

Layer: adapters/schemas/http
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskmanager_api.adapters.schemas.http.base import BaseHTTPSchema, BaseRequestSchema

__all__ = [
    "TaskCreateRequest",
    "TaskUpdateRequest",
    "TaskStatusRequest",
    "TaskResponse",
]


class TaskCreateRequest(BaseRequestSchema):
    """Body for ``POST /api/tasks``."""

    title: str = Field(default="", examples=["Write release notes"])
    description: str = Field(default="", examples=["Summarize changes since 0.3"])


class TaskUpdateRequest(BaseRequestSchema):
    """Body for ``PUT /api/tasks/{uuid}``; replaces title and description."""

    title: str = Field(default="")
    description: str = Field(default="")


class TaskStatusRequest(BaseRequestSchema):
    """Body for ``POST /api/tasks/{uuid}/status``."""

    status: str = Field(default="", examples=["in_progress"])


class TaskResponse(BaseHTTPSchema):
    """Public representation of a task."""

    uuid: UUID
    title: str
    description: str
    status: str = Field(..., examples=["to_do"])
    started_at: datetime | None = None
    finished_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
