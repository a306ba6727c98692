# src/taskmanager_api/adapters/repositories/cached_task_repository.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Cache-aside decorator for the task repository.

Synopsis:
    Wraps any :class:`TaskRepository` and exposes the identical surface.
    Paginated listings are served cache-aside; every successful mutation drops
    the whole list key space. The inner repository knows nothing about caching,
    so decorators can be stacked freely at wiring time.

Read path (``list_paginated``):
    1. Derive the key from (status, page, limit).
    2. Hit: decode and return without touching the inner repository.
       Miss or cache failure: fall through. Cache failures are logged and
       never reach the caller.
    3. Query the inner repository; its errors propagate unchanged.
    4. Best-effort write-back with a bounded TTL.
    5. Return the inner repository's result.

Write path (``create``/``update``/``delete``/``update_status``):
    Delegate first. A failed mutation raises before any invalidation, leaving
    cached pages untouched. A successful one deletes every key under
    ``tasks:list:``; an invalidation failure is logged and swallowed.

    Invalidating every listing is deliberate: one status change can move a
    task between filtered views and shift every later page, so per-key
    invalidation would need to know which pages a row lands on.

Pass-through:
    ``retrieve_by_uuid`` and ``list_by_team_id`` are never cached.

Concurrency:
    The decorator holds no mutable state. A write-back racing a concurrent
    invalidation can resurrect a stale page; the TTL bounds how long it lives.

Layer:
    adapters/repositories
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from contextlib import suppress
from datetime import datetime
from typing import Any
from uuid import UUID

from taskmanager_api.adapters.repositories.task_cache_keys import (
    LIST_CACHE_PREFIX,
    list_cache_key,
)
from taskmanager_api.application.interfaces.cache_port import CachePort
from taskmanager_api.config.settings import DEFAULT_CACHE_TTL_SECONDS
from taskmanager_api.domain.entities.task import StatusChange, Task, TaskPage, TaskStatus
from taskmanager_api.domain.exceptions.cache import CacheUnavailableError
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.infrastructure.logging.logger import get_json_logger
from taskmanager_api.infrastructure.observability.metrics import (
    get_task_list_cache_events_total,
)

logger = get_json_logger(__name__)

__all__ = ["CachedTaskRepository", "page_from_payload", "page_to_payload"]


# -----------------------------------------------------------------------------
# Payload codec
# -----------------------------------------------------------------------------


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _dt(value: Any) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _task_to_payload(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "uuid": str(task.uuid),
        "title": task.title,
        "description": task.description,
        "status": task.status.value,
        "started_at": _iso(task.started_at),
        "finished_at": _iso(task.finished_at),
        "team_id": task.team_id,
        "created_at": _iso(task.created_at),
        "updated_at": _iso(task.updated_at),
    }


def _task_from_payload(payload: Mapping[str, Any]) -> Task:
    return Task(
        id=payload.get("id"),
        uuid=UUID(str(payload["uuid"])),
        title=str(payload["title"]),
        description=str(payload["description"]),
        status=TaskStatus(payload["status"]),
        started_at=_dt(payload.get("started_at")),
        finished_at=_dt(payload.get("finished_at")),
        team_id=payload.get("team_id"),
        created_at=_dt(payload.get("created_at")),
        updated_at=_dt(payload.get("updated_at")),
    )


def page_to_payload(page: TaskPage) -> dict[str, Any]:
    """Serialize a :class:`TaskPage` into a JSON-friendly mapping."""
    return {
        "items": [_task_to_payload(t) for t in page.items],
        "page": page.page,
        "limit": page.limit,
        "total_items": page.total_items,
    }


def page_from_payload(payload: Mapping[str, Any], *, page: int, limit: int) -> TaskPage:
    """Rebuild a :class:`TaskPage` from a cached mapping.

    Missing ``page``/``limit`` fall back to the requested values.

    Raises:
        CacheUnavailableError: If the payload cannot be decoded.
    """
    try:
        return TaskPage(
            items=tuple(_task_from_payload(item) for item in payload.get("items") or ()),
            page=int(payload.get("page", page)),
            limit=int(payload.get("limit", limit)),
            total_items=int(payload.get("total_items", 0)),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise CacheUnavailableError(f"undecodable task page payload: {exc}") from exc


def _count(event: str) -> None:
    with suppress(Exception):
        get_task_list_cache_events_total().labels(event=event).inc()


# -----------------------------------------------------------------------------
# Decorator
# -----------------------------------------------------------------------------


class CachedTaskRepository(TaskRepository):
    """Task repository decorator adding a cache-aside list cache.

    Args:
        inner: Repository that talks to the authoritative store.
        cache: Key/value cache; may fail at any time without affecting results.
        ttl_seconds: Lifetime of cached pages; values <= 0 use the 5 minute default.
    """

    def __init__(
        self,
        inner: TaskRepository,
        cache: CachePort,
        *,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ) -> None:
        self._inner = inner
        self._cache = cache
        self._ttl = ttl_seconds if ttl_seconds > 0 else DEFAULT_CACHE_TTL_SECONDS

    @property
    def inner(self) -> TaskRepository:
        return self._inner

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    # ------------------------------------------------------------------
    # Cached read
    # ------------------------------------------------------------------

    async def list_paginated(
        self,
        status: TaskStatus | None,
        page: int,
        limit: int,
    ) -> TaskPage:
        key = list_cache_key(status, page, limit)

        cached = await self._lookup(key, page=page, limit=limit)
        if cached is not None:
            _count("hit")
            return cached
        _count("miss")

        result = await self._inner.list_paginated(status, page, limit)

        try:
            await self._cache.set_json(key, page_to_payload(result), ttl=self._ttl)
        except CacheUnavailableError as exc:
            _count("set_error")
            logger.warning(
                "task_list_cache.set_failed",
                extra={"extra": {"key": key, "error": str(exc)}},
            )
        return result

    async def _lookup(self, key: str, *, page: int, limit: int) -> TaskPage | None:
        """Return the cached page, or ``None`` on a miss or any cache failure."""
        try:
            payload = await self._cache.get_json(key)
            if payload is None:
                return None
            return page_from_payload(payload, page=page, limit=limit)
        except CacheUnavailableError as exc:
            _count("get_error")
            logger.warning(
                "task_list_cache.get_failed",
                extra={"extra": {"key": key, "error": str(exc)}},
            )
            return None

    # ------------------------------------------------------------------
    # Invalidating writes
    # ------------------------------------------------------------------

    async def create(self, task: Task) -> Task:
        created = await self._inner.create(task)
        await self._invalidate_lists("create")
        return created

    async def update(self, task_uuid: UUID, task: Task) -> None:
        await self._inner.update(task_uuid, task)
        await self._invalidate_lists("update")

    async def delete(self, task_uuid: UUID) -> None:
        await self._inner.delete(task_uuid)
        await self._invalidate_lists("delete")

    async def update_status(self, task_uuid: UUID, change: StatusChange) -> None:
        await self._inner.update_status(task_uuid, change)
        await self._invalidate_lists("update_status")

    async def _invalidate_lists(self, cause: str) -> None:
        try:
            await self._cache.delete_by_prefix(LIST_CACHE_PREFIX)
        except CacheUnavailableError as exc:
            _count("invalidate_error")
            logger.warning(
                "task_list_cache.invalidate_failed",
                extra={"extra": {"prefix": LIST_CACHE_PREFIX, "cause": cause, "error": str(exc)}},
            )
            return
        _count("invalidated")

    # ------------------------------------------------------------------
    # Pass-through reads
    # ------------------------------------------------------------------

    async def retrieve_by_uuid(self, task_uuid: UUID) -> Task:
        return await self._inner.retrieve_by_uuid(task_uuid)

    async def list_by_team_id(self, team_id: int) -> Sequence[Task]:
        return await self._inner.list_by_team_id(team_id)
