# src/taskmanager_api/adapters/schemas/http/envelopes.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Response wrappers shared by every endpoint.

Purpose:
    Shapes:
      - ErrorEnvelope      {"error": ErrorObject}
      - SuccessEnvelope[T] {"data": T}
      - PageBody[T]        one page of a listing plus totals
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taskmanager_api.adapters.schemas.http.base import BaseHTTPSchema

__all__ = [
    "ErrorObject",
    "ErrorEnvelope",
    "SuccessEnvelope",
    "PageBody",
]


class ErrorObject(BaseModel):
    """Structured error object inside ErrorEnvelope.

    Error codes are UPPER_SNAKE_CASE and stable across releases:
        - NOT_FOUND
        - VALIDATION_ERROR (details: {"errors": [{"field", "message"}]})
        - BAD_REQUEST
        - INTERNAL_ERROR
    """

    model_config = ConfigDict(
        title="ErrorObject",
        extra="forbid",
        json_schema_extra={
            "examples": [
                {
                    "code": "VALIDATION_ERROR",
                    "http_status": 422,
                    "message": "title: title is required",
                    "details": {"errors": [{"field": "title", "message": "title is required"}]},
                    "trace_id": "req-123",
                }
            ]
        },
    )

    code: str = Field(..., description="Stable machine-readable error code.")
    http_status: int = Field(..., description="Associated HTTP status.")
    message: str = Field(..., description="Human-readable error description.")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Optional structured details safe for clients.",
    )
    trace_id: str | None = Field(
        default=None,
        description="Request correlation identifier (X-Request-ID).",
    )


class ErrorEnvelope(BaseHTTPSchema):
    r"""Canonical error envelope: {"error": ErrorObject}."""

    model_config = ConfigDict(title="ErrorEnvelope", extra="forbid")

    error: ErrorObject = Field(..., description="Structured error details.")


class SuccessEnvelope[T](BaseHTTPSchema):
    r"""Success envelope: {"data": T}."""

    model_config = ConfigDict(title="SuccessEnvelope", extra="forbid")

    data: T = Field(..., description="Returned resource or value.")


class PageBody[T](BaseHTTPSchema):
    """One page of a listing.

    ``total_pages`` is ``ceil(total_items / items_per_page)`` and never below 1,
    so an empty listing still reports a single (empty) page.
    """

    model_config = ConfigDict(title="PageBody", extra="forbid")

    page: int = Field(..., ge=1)
    items_per_page: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=1)
    items: Sequence[T] = Field(default_factory=list)
