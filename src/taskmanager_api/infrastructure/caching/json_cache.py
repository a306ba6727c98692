# src/taskmanager_api/infrastructure/caching/json_cache.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""JSON Cache (Redis-backed).

Synopsis:
    Thin adapter that implements the application CachePort Protocol on top of
    an injected Redis client. Provides JSON get/set with TTL, multi-key delete,
    and prefix invalidation via incremental ``SCAN``.

Design:
    * Pure JSON (utf-8) serialization; no pickle.
    * A missing key is ``None``. Every other failure (connection, timeout,
      undecodable payload) is raised as ``CacheUnavailableError`` so callers
      can tell "absent" from "broken".
    * Each Redis round-trip runs under ``asyncio.timeout`` so a stalled cache
      never holds a request past its deadline.
    * ``delete_by_prefix`` pages through matches (``COUNT`` batches) until the
      cursor returns to 0 and never assumes the key space fits one reply.

Layer:
    infrastructure/caching
"""

from __future__ import annotations

import asyncio
import json
import re
import time
from collections.abc import Awaitable, Mapping
from contextlib import suppress
from typing import Any, TypeVar

from redis.exceptions import RedisError

from taskmanager_api.application.interfaces.cache_port import CachePort
from taskmanager_api.domain.exceptions.cache import CacheUnavailableError
from taskmanager_api.infrastructure.caching.redis_client import RedisClient
from taskmanager_api.infrastructure.observability.metrics import (
    get_cache_operation_duration_seconds,
    get_cache_operations_total,
)

__all__ = ["RedisJsonCache", "SCAN_BATCH_SIZE"]

#: Keys requested per SCAN round-trip during prefix invalidation.
SCAN_BATCH_SIZE = 100

_GLOB_SPECIALS = re.compile(r"([*?\[\]\\])")

T = TypeVar("T")


def _glob_escape(prefix: str) -> str:
    return _GLOB_SPECIALS.sub(r"\\\1", prefix)


class RedisJsonCache(CachePort):
    """Redis-backed implementation of the CachePort Protocol."""

    def __init__(
        self,
        client: RedisClient,
        *,
        operation_timeout_s: float = 0.5,
        scan_batch_size: int = SCAN_BATCH_SIZE,
    ) -> None:
        """Initialize the cache adapter.

        Args:
            client: Open Redis client (shared, process-wide).
            operation_timeout_s: Deadline for a single round-trip.
            scan_batch_size: ``COUNT`` hint for SCAN during prefix deletes.
        """
        self._client = client
        self._timeout_s = operation_timeout_s
        self._scan_batch_size = scan_batch_size

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Await one Redis round-trip under the deadline, normalizing errors."""
        try:
            async with asyncio.timeout(self._timeout_s):
                return await awaitable
        except TimeoutError as exc:
            raise CacheUnavailableError(
                f"cache {operation} timed out after {self._timeout_s}s",
                details={"operation": operation},
            ) from exc
        except (RedisError, OSError) as exc:
            raise CacheUnavailableError(
                f"cache {operation} failed: {exc}",
                details={"operation": operation},
            ) from exc

    @staticmethod
    def _record(operation: str, result: str, started: float) -> None:
        with suppress(Exception):
            get_cache_operation_duration_seconds().labels(
                operation=operation, result=result
            ).observe(time.perf_counter() - started)
            get_cache_operations_total().labels(operation=operation, result=result).inc()

    # ------------------------------------------------------------------ #
    # CachePort implementation
    # ------------------------------------------------------------------ #
    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        """Get a JSON-serialized mapping by key.

        Args:
            key: Fully-qualified cache key.

        Returns:
            Deserialized mapping if present, else None.

        Raises:
            CacheUnavailableError: On connectivity problems or an undecodable value.
        """
        start = time.perf_counter()
        result = "error"
        try:
            raw = await self._call("get", self._client.get(key))
            if raw is None:
                result = "miss"
                return None
            try:
                value = json.loads(raw)
            except ValueError as exc:
                raise CacheUnavailableError(
                    f"cache value at {key!r} is not valid JSON",
                    details={"operation": "get", "key": key},
                ) from exc
            if not isinstance(value, dict):
                raise CacheUnavailableError(
                    f"cache value at {key!r} is not a JSON object",
                    details={"operation": "get", "key": key},
                )
            result = "hit"
            return value
        finally:
            self._record("get", result, start)

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        """Set a JSON-serialized value with TTL.

        Args:
            key: Fully-qualified cache key.
            value: JSON-serializable mapping.
            ttl: Time-to-live in seconds; values <= 0 skip the write.

        Raises:
            CacheUnavailableError: On connectivity problems or unserializable input.
        """
        start = time.perf_counter()
        result = "error"
        try:
            if ttl <= 0:
                result = "ok"
                return
            try:
                encoded = json.dumps(value, separators=(",", ":"))
            except (TypeError, ValueError) as exc:
                raise CacheUnavailableError(
                    f"cache value for {key!r} is not JSON-serializable",
                    details={"operation": "set", "key": key},
                ) from exc
            await self._call("set", self._client.set(key, encoded, ex=ttl))
            result = "ok"
        finally:
            self._record("set", result, start)

    async def delete(self, *keys: str) -> None:
        """Delete the given keys; a call without keys does nothing."""
        if not keys:
            return
        start = time.perf_counter()
        result = "error"
        try:
            await self._call("delete", self._client.delete(*keys))
            result = "ok"
        finally:
            self._record("delete", result, start)

    async def delete_by_prefix(self, prefix: str) -> None:
        """Delete every key that starts with ``prefix``.

        Iterates ``SCAN cursor MATCH <prefix>* COUNT <batch>`` and deletes each
        discovered batch, stopping when the server hands back cursor 0.

        Raises:
            CacheUnavailableError: If any round-trip fails. Batches deleted
                before the failure stay deleted.
        """
        start = time.perf_counter()
        result = "error"
        pattern = f"{_glob_escape(prefix)}*"
        try:
            cursor = 0
            while True:
                cursor, keys = await self._call(
                    "scan",
                    self._client.scan(cursor=cursor, match=pattern, count=self._scan_batch_size),
                )
                if keys:
                    await self._call("delete", self._client.delete(*keys))
                if int(cursor) == 0:
                    break
            result = "ok"
        finally:
            self._record("delete_by_prefix", result, start)
