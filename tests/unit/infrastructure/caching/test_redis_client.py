# tests/unit/infrastructure/caching/test_redis_client.py
from __future__ import annotations

import pytest

from taskmanager_api.infrastructure.caching.redis_client import RedisHandle


class _DownClient:
    async def ping(self) -> bool:
        raise ConnectionError("no route to host")

    async def aclose(self) -> None:
        return None


def test_client_before_open_raises() -> None:
    handle = RedisHandle("redis://localhost:6379/0")

    with pytest.raises(RuntimeError):
        _ = handle.client


def test_from_settings_is_not_opened(settings) -> None:
    handle = RedisHandle.from_settings(settings)

    with pytest.raises(RuntimeError):
        _ = handle.client


@pytest.mark.asyncio
async def test_ping_ok_with_fake_client(fake_redis) -> None:
    handle = RedisHandle.from_client(fake_redis)

    assert await handle.ping() == (True, None)


@pytest.mark.asyncio
async def test_ping_reports_failure_detail() -> None:
    handle = RedisHandle.from_client(_DownClient())

    ok, detail = await handle.ping()

    assert ok is False
    assert detail is not None and "no route to host" in detail


@pytest.mark.asyncio
async def test_open_is_idempotent_and_close_is_repeatable() -> None:
    handle = RedisHandle("redis://localhost:6379/0")

    first = handle.open()
    assert handle.open() is first

    await handle.close()
    await handle.close()
    with pytest.raises(RuntimeError):
        _ = handle.client
