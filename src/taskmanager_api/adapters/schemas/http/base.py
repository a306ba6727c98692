# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Pydantic bases for request and response bodies.

Responses forbid undeclared fields so the published schema is exactly what
goes out. Request bodies drop unknown keys instead of failing on them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseHTTPSchema(BaseModel):
    """Strict base for response payloads; enums serialize as their values."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        use_enum_values=True,
        ser_json_timedelta="iso8601",
    )


class BaseRequestSchema(BaseHTTPSchema):
    """Base for request bodies: unknown keys are ignored, not rejected."""

    model_config = ConfigDict(extra="ignore")
