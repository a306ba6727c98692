# tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncGenerator

import fakeredis.aioredis
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from taskmanager_api.config.settings import Settings
from taskmanager_api.infrastructure.database.models import metadata
from taskmanager_api.infrastructure.database.session import Database

SQLITE_URL = "sqlite+aiosqlite:///:memory:"


def make_settings(**overrides: object) -> Settings:
    """Build Settings for tests without reading the process environment's DB/Redis."""
    values: dict[str, object] = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": SQLITE_URL,
        "REDIS_URL": "redis://localhost:6379/15",
        "CACHE_ENABLED": True,
        "CACHE_TTL_SECONDS": 300,
        "TASK_LIST_DEFAULT_LIMIT": 10,
        "TASK_LIST_MAX_LIMIT": 100,
        "TEAM_LIST_DEFAULT_LIMIT": 10,
        "TEAM_LIST_MAX_LIMIT": 100,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)  # type: ignore[arg-type]


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """In-memory SQLite handle with the schema created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    db = Database(SQLITE_URL, poolclass=StaticPool)
    db.open()
    async with db.engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    try:
        yield db
    finally:
        await db.dispose()


@pytest.fixture
def engine(database: Database) -> AsyncEngine:
    return database.engine


@pytest.fixture
def session_factory(database: Database) -> async_sessionmaker[AsyncSession]:
    return database.sessionmaker


@pytest_asyncio.fixture
async def fake_redis() -> AsyncGenerator[fakeredis.aioredis.FakeRedis, None]:
    client = fakeredis.aioredis.FakeRedis(decode_responses=True)
    try:
        yield client
    finally:
        await client.flushall()
        await client.aclose()


@pytest.fixture
def settings_factory():
    """Return :func:`make_settings` so tests can build variants."""
    return make_settings
