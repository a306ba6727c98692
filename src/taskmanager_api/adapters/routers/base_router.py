# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Router base for the /api resources.

Purpose:
    Canonical APIRouter wrapper for resource endpoints:
      - Stable prefixes under ``/api`` (e.g. ``/api/tasks``).
      - 400, 404, 422 and 500 documented with the ErrorEnvelope schema.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import APIRouter

from taskmanager_api.adapters.schemas.http.envelopes import ErrorEnvelope
from taskmanager_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

API_PREFIX = "/api"

TagType = str | Enum


class BaseRouter(APIRouter):
    """Router mounted at ``/api/<resource>``.

    Args:
        resource: Plural resource segment (e.g. "tasks").
        prefix: Optional explicit prefix (overrides the computed one).
        tags: Default tags applied to all routes mounted on this router.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        resource: str,
        prefix: str | None = None,
        tags: Sequence[TagType] | None = None,
        **kwargs: Any,
    ) -> None:
        computed_prefix = prefix or f"{API_PREFIX}/{resource}"
        super().__init__(
            prefix=computed_prefix,
            tags=list(tags) if tags is not None else None,
            **kwargs,
        )
        _LOGGER.debug(
            "router_initialized",
            extra={"extra": {"prefix": computed_prefix, "tags": list(tags or [])}},
        )

    @staticmethod
    def std_error_responses(*codes: int) -> dict[int | str, dict[str, Any]]:
        """Return OpenAPI error responses (all of them when ``codes`` is empty).

        Use in routes via ``responses=BaseRouter.std_error_responses(404, 422)``.
        """
        catalog: dict[int, str] = {
            400: "Malformed request (body, path or query parameter).",
            404: "Not found.",
            422: "Unprocessable content (field validation failed).",
            500: "Internal server error.",
        }
        wanted = codes or tuple(catalog)
        return {
            code: {"model": ErrorEnvelope, "description": catalog[code]}
            for code in wanted
            if code in catalog
        }
