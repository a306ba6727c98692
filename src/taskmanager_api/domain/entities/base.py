# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Shared helpers for domain entities.

Purpose:
    Identifier generation and text-field validation used by both Task and
    Team. No I/O.

Layer:
    domain/entities
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from uuid6 import uuid7

from taskmanager_api.domain.exceptions.tasks import FieldError

#: Upper bound for short text fields (task title, team name).
MAX_SHORT_TEXT_LENGTH = 255


def new_external_id() -> UUID:
    """Return a fresh time-ordered (v7) identifier."""
    return UUID(bytes=uuid7().bytes)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite hands them back naive)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def check_short_text(field: str, value: str) -> FieldError | None:
    """Validate a required, length-capped text field.

    Args:
        field: Field name reported in the error.
        value: Raw field value; surrounding whitespace is ignored.

    Returns:
        A FieldError, or ``None`` when the value is acceptable.
    """
    trimmed = value.strip()
    if not trimmed:
        return FieldError(field=field, message=f"{field} is required")
    if len(trimmed) > MAX_SHORT_TEXT_LENGTH:
        return FieldError(
            field=field,
            message=f"{field} must not exceed {MAX_SHORT_TEXT_LENGTH} characters",
        )
    return None


def check_required_text(field: str, value: str) -> FieldError | None:
    """Validate a required text field with no length cap."""
    if not value.strip():
        return FieldError(field=field, message=f"{field} is required")
    return None
