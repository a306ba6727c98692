# tests/unit/adapters/repositories/test_cached_task_repository.py
from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any
from uuid import UUID

import pytest

from taskmanager_api.adapters.repositories.cached_task_repository import (
    CachedTaskRepository,
    page_from_payload,
    page_to_payload,
)
from taskmanager_api.adapters.repositories.task_cache_keys import list_cache_key
from taskmanager_api.domain.entities.task import StatusChange, Task, TaskPage, TaskStatus
from taskmanager_api.domain.exceptions import CacheUnavailableError, NotFoundError

# --------------------------------------------------------------------------- #
# Doubles
# --------------------------------------------------------------------------- #


class _StubInner:
    """Records calls; raises ``error`` from mutations when set."""

    def __init__(self, page: TaskPage | None = None) -> None:
        self.page = page or TaskPage(items=(), page=1, limit=10, total_items=0)
        self.calls: list[str] = []
        self.error: Exception | None = None

    def _hit(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def create(self, task: Task) -> Task:
        self._hit("create")
        return task

    async def retrieve_by_uuid(self, task_uuid: UUID) -> Task:
        self._hit("retrieve_by_uuid")
        return Task(uuid=task_uuid, title="t", description="d")

    async def update(self, task_uuid: UUID, task: Task) -> None:
        self._hit("update")

    async def delete(self, task_uuid: UUID) -> None:
        self._hit("delete")

    async def list_paginated(self, status: TaskStatus | None, page: int, limit: int) -> TaskPage:
        self._hit("list_paginated")
        return self.page

    async def update_status(self, task_uuid: UUID, change: StatusChange) -> None:
        self._hit("update_status")

    async def list_by_team_id(self, team_id: int) -> Sequence[Task]:
        self._hit("list_by_team_id")
        return ()


class _DictCache:
    """In-memory CachePort with switchable failures."""

    def __init__(self) -> None:
        self.store: dict[str, Mapping[str, Any]] = {}
        self.ttls: dict[str, int] = {}
        self.fail_get = False
        self.fail_set = False
        self.fail_invalidate = False
        self.prefix_deletes: list[str] = []

    async def get_json(self, key: str) -> Mapping[str, Any] | None:
        if self.fail_get:
            raise CacheUnavailableError("get down")
        return self.store.get(key)

    async def set_json(self, key: str, value: Mapping[str, Any], *, ttl: int) -> None:
        if self.fail_set:
            raise CacheUnavailableError("set down")
        self.store[key] = value
        self.ttls[key] = ttl

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self.store.pop(key, None)

    async def delete_by_prefix(self, prefix: str) -> None:
        if self.fail_invalidate:
            raise CacheUnavailableError("scan down")
        self.prefix_deletes.append(prefix)
        for key in [k for k in self.store if k.startswith(prefix)]:
            del self.store[key]


def _sample_page() -> TaskPage:
    task = Task(
        id=7,
        uuid=UUID("01890a5d-ac96-774b-bcce-b302099a8057"),
        title="Write docs",
        description="API reference",
        status=TaskStatus.IN_PROGRESS,
        started_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        created_at=datetime(2026, 1, 1, tzinfo=UTC),
        updated_at=datetime(2026, 1, 2, tzinfo=UTC),
    )
    return TaskPage(items=(task,), page=1, limit=10, total_items=1)


TASK_ID = UUID("01890a5d-ac96-774b-bcce-b302099a8057")


# --------------------------------------------------------------------------- #
# Read path
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio
async def test_miss_queries_inner_and_populates_cache_with_ttl() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    repo = CachedTaskRepository(inner, cache, ttl_seconds=120)

    result = await repo.list_paginated(None, 1, 10)

    key = list_cache_key(None, 1, 10)
    assert result == inner.page
    assert inner.calls == ["list_paginated"]
    assert cache.store[key] == page_to_payload(inner.page)
    assert cache.ttls[key] == 120


@pytest.mark.asyncio
async def test_hit_is_served_without_touching_inner() -> None:
    inner, cache = _StubInner(), _DictCache()
    cache.store[list_cache_key(TaskStatus.DONE, 2, 5)] = {
        "items": [],
        "page": 2,
        "limit": 5,
        "total_items": 999,
    }
    repo = CachedTaskRepository(inner, cache)

    result = await repo.list_paginated(TaskStatus.DONE, 2, 5)

    assert inner.calls == []
    assert result.total_items == 999
    assert (result.page, result.limit) == (2, 5)


@pytest.mark.asyncio
async def test_second_read_is_a_hit() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    repo = CachedTaskRepository(inner, cache)

    first = await repo.list_paginated(None, 1, 10)
    second = await repo.list_paginated(None, 1, 10)

    assert inner.calls == ["list_paginated"]
    assert second == first


@pytest.mark.asyncio
async def test_get_failure_falls_through_to_inner() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    cache.fail_get = True
    repo = CachedTaskRepository(inner, cache)

    result = await repo.list_paginated(None, 1, 10)

    assert result == inner.page
    assert inner.calls == ["list_paginated"]


@pytest.mark.asyncio
async def test_undecodable_cached_payload_is_treated_as_a_miss() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    key = list_cache_key(None, 1, 10)
    cache.store[key] = {"items": [{"uuid": "not-a-uuid"}], "total_items": 1}
    repo = CachedTaskRepository(inner, cache)

    result = await repo.list_paginated(None, 1, 10)

    assert result == inner.page
    assert cache.store[key] == page_to_payload(inner.page)


@pytest.mark.asyncio
async def test_set_failure_still_returns_inner_result() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    cache.fail_set = True
    repo = CachedTaskRepository(inner, cache)

    result = await repo.list_paginated(None, 1, 10)

    assert result == inner.page
    assert cache.store == {}


@pytest.mark.asyncio
async def test_inner_list_error_propagates_and_nothing_is_cached() -> None:
    inner, cache = _StubInner(), _DictCache()
    inner.error = RuntimeError("db down")
    repo = CachedTaskRepository(inner, cache)

    with pytest.raises(RuntimeError, match="db down"):
        await repo.list_paginated(None, 1, 10)
    assert cache.store == {}


# --------------------------------------------------------------------------- #
# Write path
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio
async def test_create_drops_every_cached_listing() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    repo = CachedTaskRepository(inner, cache)
    await repo.list_paginated(None, 1, 10)
    await repo.list_paginated(TaskStatus.TODO, 1, 10)
    cache.store["unrelated"] = {"keep": True}

    await repo.create(Task.new(title="t", description="d"))

    assert list(cache.store) == ["unrelated"]
    assert cache.prefix_deletes == ["tasks:list:"]


@pytest.mark.asyncio
@pytest.mark.parametrize("operation", ["update", "delete", "update_status"])
async def test_successful_mutations_invalidate(operation: str) -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    repo = CachedTaskRepository(inner, cache)
    await repo.list_paginated(None, 1, 10)

    if operation == "update":
        await repo.update(TASK_ID, Task.new(title="t", description="d"))
    elif operation == "delete":
        await repo.delete(TASK_ID)
    else:
        await repo.update_status(
            TASK_ID, StatusChange(status=TaskStatus.DONE, started_at=None, finished_at=None)
        )

    assert cache.store == {}
    assert inner.calls[-1] == operation


@pytest.mark.asyncio
async def test_failed_mutation_propagates_and_keeps_cache() -> None:
    inner, cache = _StubInner(_sample_page()), _DictCache()
    repo = CachedTaskRepository(inner, cache)
    await repo.list_paginated(None, 1, 10)
    inner.error = NotFoundError("task not found")

    with pytest.raises(NotFoundError):
        await repo.update(TASK_ID, Task.new(title="t", description="d"))

    assert list_cache_key(None, 1, 10) in cache.store
    assert cache.prefix_deletes == []


@pytest.mark.asyncio
async def test_invalidation_failure_is_swallowed() -> None:
    inner, cache = _StubInner(), _DictCache()
    cache.fail_invalidate = True
    repo = CachedTaskRepository(inner, cache)
    task = Task.new(title="t", description="d")

    assert await repo.create(task) is task
    await repo.delete(TASK_ID)
    assert inner.calls == ["create", "delete"]


# --------------------------------------------------------------------------- #
# Pass-through and configuration
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio
async def test_uncached_reads_pass_through() -> None:
    inner, cache = _StubInner(), _DictCache()
    repo = CachedTaskRepository(inner, cache)

    found = await repo.retrieve_by_uuid(TASK_ID)
    team_tasks = await repo.list_by_team_id(3)

    assert found.uuid == TASK_ID
    assert team_tasks == ()
    assert inner.calls == ["retrieve_by_uuid", "list_by_team_id"]
    assert cache.store == {}
    assert cache.prefix_deletes == []


@pytest.mark.parametrize(("given", "expected"), [(0, 300), (-5, 300), (60, 60)])
def test_non_positive_ttl_falls_back_to_default(given: int, expected: int) -> None:
    repo = CachedTaskRepository(_StubInner(), _DictCache(), ttl_seconds=given)

    assert repo.ttl_seconds == expected


def test_payload_restores_timestamps_and_status() -> None:
    page = _sample_page()

    restored = page_from_payload(page_to_payload(page), page=1, limit=10)

    assert restored == page
    assert restored.items[0].started_at == datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_payload_without_page_fields_uses_requested_values() -> None:
    restored = page_from_payload({"items": [], "total_items": 4}, page=3, limit=2)

    assert (restored.page, restored.limit, restored.total_items) == (3, 2, 4)


def test_malformed_payload_raises_cache_error() -> None:
    with pytest.raises(CacheUnavailableError):
        page_from_payload({"items": [{"title": "missing uuid"}]}, page=1, limit=10)
