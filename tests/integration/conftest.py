# tests/integration/conftest.py
"""Application wired to in-memory SQLite and fakeredis."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import httpx
import pytest_asyncio
from fastapi import FastAPI

from taskmanager_api.dependencies.core.bootstrap import bootstrap
from taskmanager_api.infrastructure.caching.redis_client import RedisHandle
from taskmanager_api.main import create_app


@pytest_asyncio.fixture
async def app(settings, database, fake_redis) -> AsyncGenerator[FastAPI, None]:
    application = create_app(settings)
    # ASGITransport does not run the lifespan; enter it by hand.
    async with bootstrap(
        application,
        settings=settings,
        database=database,
        redis=RedisHandle.from_client(fake_redis),
    ):
        yield application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
