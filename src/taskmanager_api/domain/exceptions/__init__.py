"""Domain exception hierarchy."""

from __future__ import annotations

from taskmanager_api.domain.exceptions.base import DomainError
from taskmanager_api.domain.exceptions.cache import CacheUnavailableError
from taskmanager_api.domain.exceptions.tasks import (
    BadRequestError,
    FieldError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "BadRequestError",
    "CacheUnavailableError",
    "DomainError",
    "FieldError",
    "NotFoundError",
    "ValidationError",
]
