# tests/unit/application/conftest.py
"""In-memory unit of work and repositories for use-case tests."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import pytest

from taskmanager_api.domain.entities.task import StatusChange, Task, TaskPage, TaskStatus
from taskmanager_api.domain.entities.team import Team, TeamPage
from taskmanager_api.domain.exceptions import NotFoundError
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository

_EPOCH = datetime(2026, 1, 1, tzinfo=UTC)


class InMemoryStore:
    def __init__(self) -> None:
        self.tasks: dict[UUID, Task] = {}
        self.teams: dict[UUID, Team] = {}
        self.next_id = 1

    def stamp(self) -> tuple[int, datetime]:
        ident = self.next_id
        self.next_id += 1
        return ident, _EPOCH + timedelta(seconds=ident)


class InMemoryTaskRepository(TaskRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.list_calls: list[tuple[TaskStatus | None, int, int]] = []

    def _live(self, task_uuid: UUID) -> Task:
        try:
            return self._store.tasks[task_uuid]
        except KeyError:
            raise NotFoundError("task not found") from None

    async def create(self, task: Task) -> Task:
        ident, now = self._store.stamp()
        created = replace(task, id=ident, created_at=now, updated_at=now)
        self._store.tasks[created.uuid] = created
        return created

    async def retrieve_by_uuid(self, task_uuid: UUID) -> Task:
        return self._live(task_uuid)

    async def update(self, task_uuid: UUID, task: Task) -> None:
        current = self._live(task_uuid)
        self._store.tasks[task_uuid] = replace(
            current, title=task.title, description=task.description
        )

    async def delete(self, task_uuid: UUID) -> None:
        self._live(task_uuid)
        del self._store.tasks[task_uuid]

    async def list_paginated(self, status: TaskStatus | None, page: int, limit: int) -> TaskPage:
        self.list_calls.append((status, page, limit))
        rows = sorted(self._store.tasks.values(), key=lambda t: t.id or 0, reverse=True)
        if status is not None:
            rows = [t for t in rows if t.status is status]
        start = (page - 1) * limit
        return TaskPage(
            items=tuple(rows[start : start + limit]),
            page=page,
            limit=limit,
            total_items=len(rows),
        )

    async def update_status(self, task_uuid: UUID, change: StatusChange) -> None:
        current = self._live(task_uuid)
        self._store.tasks[task_uuid] = replace(
            current,
            status=change.status,
            started_at=change.started_at,
            finished_at=change.finished_at,
        )

    async def list_by_team_id(self, team_id: int) -> Sequence[Task]:
        rows = [t for t in self._store.tasks.values() if t.team_id == team_id]
        return sorted(rows, key=lambda t: t.id or 0, reverse=True)


class InMemoryTeamRepository(TeamRepository):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def create(self, team: Team) -> Team:
        ident, now = self._store.stamp()
        created = replace(team, id=ident, created_at=now, updated_at=now)
        self._store.teams[created.uuid] = created
        return created

    async def retrieve_by_uuid(self, team_uuid: UUID) -> Team:
        try:
            return self._store.teams[team_uuid]
        except KeyError:
            raise NotFoundError("team not found") from None

    async def list_paginated(self, page: int, limit: int) -> TeamPage:
        rows = sorted(self._store.teams.values(), key=lambda t: t.id or 0, reverse=True)
        start = (page - 1) * limit
        return TeamPage(
            items=tuple(rows[start : start + limit]),
            page=page,
            limit=limit,
            total_items=len(rows),
        )

    async def retrieve_task_team_id(self, task_uuid: UUID) -> int | None:
        try:
            return self._store.tasks[task_uuid].team_id
        except KeyError:
            raise NotFoundError("task not found") from None

    async def update_task_team_id(self, task_uuid: UUID, team_id: int | None) -> None:
        task = self._store.tasks[task_uuid]
        self._store.tasks[task_uuid] = replace(task, team_id=team_id)


class FakeUoW:
    """Unit of work over the in-memory repositories; counts commits/rollbacks."""

    def __init__(self, store: InMemoryStore) -> None:
        self.tasks = InMemoryTaskRepository(store)
        self.teams = InMemoryTeamRepository(store)
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> FakeUoW:
        return self

    async def __aexit__(self, *exc: object) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1

    def get_repository(self, repo_type: type[Any]) -> Any:
        if repo_type is TaskRepository:
            return self.tasks
        if repo_type is TeamRepository:
            return self.teams
        raise KeyError(repo_type)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow(store: InMemoryStore) -> FakeUoW:
    return FakeUoW(store)
