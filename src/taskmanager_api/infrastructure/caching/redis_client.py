# src/taskmanager_api/infrastructure/caching/redis_client.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Async Redis client handle.

The handle is constructed at startup, opened once, shared by reference for the
lifetime of the process, and closed at shutdown. Nothing is stored in module
globals; consumers receive the handle (or its client) through constructors.
"""

from __future__ import annotations

from contextlib import suppress
from types import TracebackType
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

import redis.asyncio as aioredis

if TYPE_CHECKING:
    from redis.asyncio.client import Redis as _RedisGeneric

    type AioredisRedis = _RedisGeneric[str]
else:
    from redis.asyncio.client import Redis as AioredisRedis  # type: ignore[assignment]

from taskmanager_api.config.settings import Settings
from taskmanager_api.infrastructure.logging.logger import get_json_logger

__all__ = ["RedisClient", "RedisHandle"]

logger = get_json_logger(__name__)


@runtime_checkable
class RedisClient(Protocol):
    """Minimal async Redis protocol used by the cache store."""

    async def ping(self) -> Any: ...
    async def aclose(self) -> None: ...

    async def get(self, key: str) -> Any: ...
    async def set(
        self,
        key: str,
        value: Any,
        *,
        ex: int | None = None,
    ) -> Any: ...
    async def delete(self, *keys: str) -> Any: ...
    async def scan(
        self,
        cursor: int = 0,
        match: str | None = None,
        count: int | None = None,
    ) -> Any: ...


class RedisHandle:
    """Owns one ``redis.asyncio`` client with an explicit open/close lifecycle.

    Usage:
        async with RedisHandle.from_settings(settings) as handle:
            cache = RedisJsonCache(handle.client, ...)
    """

    def __init__(
        self,
        url: str,
        *,
        socket_timeout_s: float = 1.0,
        socket_connect_timeout_s: float = 1.0,
    ) -> None:
        self._url = url
        self._socket_timeout_s = socket_timeout_s
        self._socket_connect_timeout_s = socket_connect_timeout_s
        self._client: RedisClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> RedisHandle:
        """Build a handle from application settings (not yet opened)."""
        return cls(
            settings.redis_url,
            socket_timeout_s=settings.redis_socket_timeout_s,
            socket_connect_timeout_s=settings.redis_socket_connect_timeout_s,
        )

    @classmethod
    def from_client(cls, client: RedisClient) -> RedisHandle:
        """Wrap an already-constructed client (e.g. ``fakeredis`` in tests)."""
        handle = cls("redis://in-process")
        handle._client = client
        return handle

    @property
    def client(self) -> RedisClient:
        """Return the open client.

        Raises:
            RuntimeError: If the handle has not been opened.
        """
        if self._client is None:
            raise RuntimeError("Redis handle is not open (call open() at startup)")
        return self._client

    def open(self) -> RedisClient:
        """Create the underlying client (idempotent). Connections are lazy."""
        if self._client is None:
            # Untyped shim so mypy doesn't care which redis stubs are installed.
            _from_url: Any = aioredis.from_url
            client = _from_url(
                url=self._url,
                encoding="utf-8",
                decode_responses=True,
                health_check_interval=15,
                socket_timeout=self._socket_timeout_s,
                socket_connect_timeout=self._socket_connect_timeout_s,
            )
            self._client = cast(RedisClient, cast(AioredisRedis, client))
            logger.info("redis.open")
        return self._client

    async def close(self) -> None:
        """Close the client if open. Safe to call more than once."""
        client, self._client = self._client, None
        if client is not None:
            with suppress(RuntimeError):
                await client.aclose()
            logger.info("redis.close")

    async def ping(self) -> tuple[bool, str | None]:
        """Readiness probe: ``PING`` the server."""
        try:
            await self.client.ping()
        except Exception as exc:
            return False, f"{type(exc).__name__}: {exc}"
        return True, None

    async def __aenter__(self) -> RedisHandle:
        self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
