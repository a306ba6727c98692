# tests/unit/dependencies/test_uow_wiring.py
from __future__ import annotations

import pytest

from taskmanager_api.adapters.repositories.cached_task_repository import CachedTaskRepository
from taskmanager_api.adapters.repositories.task_repository import SqlAlchemyTaskRepository
from taskmanager_api.dependencies.core.uow import build_uow
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.caching.redis_client import RedisHandle


@pytest.mark.asyncio
async def test_cache_enabled_wraps_task_repository(session_factory, settings_factory, fake_redis):
    settings = settings_factory(CACHE_TTL_SECONDS=0)
    uow = build_uow(session_factory, settings, RedisHandle.from_client(fake_redis))

    async with uow:
        repo = uow.get_repository(TaskRepository)

    assert isinstance(repo, CachedTaskRepository)
    assert isinstance(repo.inner, SqlAlchemyTaskRepository)
    assert repo.ttl_seconds == 300


@pytest.mark.asyncio
async def test_no_redis_uses_plain_repository(session_factory, settings) -> None:
    uow = build_uow(session_factory, settings, None)

    async with uow:
        assert isinstance(uow.get_repository(TaskRepository), SqlAlchemyTaskRepository)


@pytest.mark.asyncio
async def test_cache_disabled_ignores_redis(session_factory, settings_factory, fake_redis):
    settings = settings_factory(CACHE_ENABLED=False)
    uow = build_uow(session_factory, settings, RedisHandle.from_client(fake_redis))

    async with uow:
        assert isinstance(uow.get_repository(TaskRepository), SqlAlchemyTaskRepository)
