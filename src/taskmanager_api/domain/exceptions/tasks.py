# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Task/Team Domain Exceptions.

Summary:
    Errors raised by entities, repositories, and use cases. Routers map these
    to HTTP status codes; the cache layer relays them untouched.

Layer:
    domain/exceptions
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from taskmanager_api.domain.exceptions.base import DomainError


class NotFoundError(DomainError):
    """A keyed row does not exist or has been soft-deleted."""

    code = "NOT_FOUND"

    def __init__(self, message: str = "resource not found") -> None:
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str


class ValidationError(DomainError):
    """One or more entity invariants were violated."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: list[FieldError] = list(errors)
        message = "; ".join(f"{e.field}: {e.message}" for e in self.errors) or "validation failed"
        super().__init__(
            message,
            details={"errors": [{"field": e.field, "message": e.message} for e in self.errors]},
        )

    @classmethod
    def single(cls, field: str, message: str) -> ValidationError:
        """Build an error carrying exactly one field failure."""
        return cls([FieldError(field=field, message=message)])


class BadRequestError(DomainError):
    """A request parameter could not be interpreted (wrong format or value)."""

    code = "BAD_REQUEST"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message, details={"field": field} if field else None)
        self.field = field
