"""HTTP schemas for the adapters layer."""

from __future__ import annotations

from taskmanager_api.adapters.schemas.http.envelopes import (
    ErrorEnvelope,
    ErrorObject,
    PageBody,
    SuccessEnvelope,
)

__all__ = ["ErrorEnvelope", "ErrorObject", "PageBody", "SuccessEnvelope"]
