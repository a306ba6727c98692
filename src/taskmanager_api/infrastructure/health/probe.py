# src/taskmanager_api/infrastructure/health/probe.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Readiness probes for the database and Redis (with Prometheus histograms).

Design:
    * Latency is observed whether the probe succeeds or fails.
    * Small public surface: ``db()`` and ``redis()`` returning
      ``(success, detail)``.
    * When caching is disabled there is no Redis handle; the Redis probe then
      reports success with a ``"cache disabled"`` detail.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from taskmanager_api.infrastructure.caching.redis_client import RedisHandle
from taskmanager_api.infrastructure.database.session import Database
from taskmanager_api.infrastructure.observability.metrics import (
    get_readyz_db_latency_seconds,
    get_readyz_redis_latency_seconds,
)

if TYPE_CHECKING:
    from prometheus_client import Histogram

__all__ = ["DbRedisProbe"]


class DbRedisProbe:
    """Readiness probe backed by the process-wide handles."""

    def __init__(self, database: Database, redis: RedisHandle | None) -> None:
        self._database = database
        self._redis = redis
        self._db_hist: Histogram = get_readyz_db_latency_seconds()
        self._redis_hist: Histogram = get_readyz_redis_latency_seconds()

    async def db(self) -> tuple[bool, str | None]:
        """Probe the database with ``SELECT 1``."""
        start = time.perf_counter()
        try:
            return await self._database.ping()
        finally:
            self._db_hist.observe(time.perf_counter() - start)

    async def redis(self) -> tuple[bool, str | None]:
        """Probe Redis with ``PING``."""
        if self._redis is None:
            return True, "cache disabled"
        start = time.perf_counter()
        try:
            return await self._redis.ping()
        finally:
            self._redis_hist.observe(time.perf_counter() - start)
