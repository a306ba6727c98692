# src/taskmanager_api/dependencies/core/uow.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Unit-of-work wiring.

The task list cache is composed here: when a Redis handle is open the
``TaskRepository`` factory wraps the SQLAlchemy repository in
:class:`CachedTaskRepository`; otherwise the plain repository is used.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskmanager_api.adapters.repositories.cached_task_repository import CachedTaskRepository
from taskmanager_api.adapters.repositories.task_repository import SqlAlchemyTaskRepository
from taskmanager_api.adapters.uow.sqlalchemy_uow import RepoFactory, SqlAlchemyUnitOfWork
from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.config.settings import Settings
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.caching.json_cache import RedisJsonCache
from taskmanager_api.infrastructure.caching.redis_client import RedisHandle


def cached_task_repo_factory(redis: RedisHandle, settings: Settings) -> RepoFactory:
    """Return a factory building the cache-aside task repository for a session."""
    cache = RedisJsonCache(redis.client, operation_timeout_s=settings.cache_operation_timeout_s)

    def _factory(session: AsyncSession) -> CachedTaskRepository:
        return CachedTaskRepository(
            SqlAlchemyTaskRepository(session=session),
            cache,
            ttl_seconds=settings.effective_cache_ttl_seconds,
        )

    return _factory


def build_uow(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
    redis: RedisHandle | None,
) -> SqlAlchemyUnitOfWork:
    """Compose a unit of work, with the list cache when Redis is available."""
    factories: dict[type[Any], RepoFactory] = {}
    if settings.cache_enabled and redis is not None:
        factories[TaskRepository] = cached_task_repo_factory(redis, settings)
    return SqlAlchemyUnitOfWork(session_factory=session_factory, repo_factories=factories)


def get_settings_from_app(request: Request) -> Settings:
    """FastAPI dependency: settings resolved at startup."""
    settings: Settings = request.app.state.settings
    return settings


def get_uow(request: Request) -> UnitOfWork:
    """FastAPI dependency: a fresh unit of work per request."""
    state = request.app.state
    return build_uow(state.database.sessionmaker, state.settings, state.redis)
