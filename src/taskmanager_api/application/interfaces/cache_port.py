# src/taskmanager_api/application/interfaces/cache_port.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Port for the JSON key/value store behind the task list cache.

Redis implements it in production; unit tests use an in-memory dict.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class CachePort(Protocol):
    """JSON cache with TTL semantics.

    Absence is a normal outcome (``None``), distinct from failure: any problem
    reaching the cache or decoding a value raises ``CacheUnavailableError``.
    """

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Return the mapping stored at ``key``, or ``None`` when absent."""

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds (``ttl <= 0`` stores nothing)."""

    async def delete(self, *keys: str) -> None:
        """Delete the given keys. No-op when called without keys."""

    async def delete_by_prefix(self, prefix: str) -> None:
        """Delete every key starting with ``prefix``, scanning in batches."""
