# src/taskmanager_api/dependencies/core/bootstrap.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Core bootstrap for infrastructure (database, Redis).

This module owns the lifecycle of the shared handles used by the FastAPI app.
Configuration is read from Settings and the heavy lifting is delegated to the
infrastructure modules. Handles live on ``app.state``; nothing is kept in
module globals.

The single public surface is :func:`bootstrap`, an async context manager that
yields a :class:`BootstrapState`.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from fastapi import FastAPI

from taskmanager_api.config.settings import Settings, get_settings
from taskmanager_api.infrastructure.caching.redis_client import RedisHandle
from taskmanager_api.infrastructure.database.session import Database
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


@dataclass
class BootstrapState:
    """State yielded by the bootstrap context manager.

    Attributes:
        settings: Resolved application settings.
        database: Open database handle.
        redis: Open Redis handle, or ``None`` when caching is disabled.
    """

    settings: Settings
    database: Database
    redis: RedisHandle | None


@asynccontextmanager
async def bootstrap(
    app: FastAPI,
    *,
    settings: Settings | None = None,
    database: Database | None = None,
    redis: RedisHandle | None = None,
) -> AsyncGenerator[BootstrapState, None]:
    """Open the shared handles, publish them on ``app.state``, close on exit.

    Pre-built handles may be passed in (tests hand in an in-memory database
    and a fakeredis-backed handle); otherwise they are built from settings.
    Redis is only opened when ``CACHE_ENABLED`` is true. Handles are closed in
    reverse order of opening on every exit path.

    Args:
        app: FastAPI application instance.
        settings: Optional settings override.
        database: Optional pre-built database handle.
        redis: Optional pre-built Redis handle.

    Yields:
        BootstrapState: Resolved settings and open handles.
    """
    settings = settings or get_settings()
    logger.info("bootstrap.start", extra={"extra": {"cache_enabled": settings.cache_enabled}})

    db = database or Database.from_settings(settings)
    db.open()

    cache: RedisHandle | None = None
    try:
        if settings.cache_enabled:
            cache = redis or RedisHandle.from_settings(settings)
            cache.open()

        state = BootstrapState(settings=settings, database=db, redis=cache)
        app.state.settings = settings
        app.state.database = db
        app.state.redis = cache
        yield state
    finally:
        if cache is not None:
            try:
                await cache.close()
            except Exception:
                logger.exception("bootstrap.redis_close_failed")
        try:
            await db.dispose()
        except Exception:
            logger.exception("bootstrap.db_dispose_failed")
        logger.info("bootstrap.stop")
