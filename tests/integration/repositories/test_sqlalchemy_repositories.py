# tests/integration/repositories/test_sqlalchemy_repositories.py
"""SQLAlchemy repositories against in-memory SQLite."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

import pytest
from uuid6 import uuid7

from taskmanager_api.adapters.repositories.task_repository import SqlAlchemyTaskRepository
from taskmanager_api.adapters.repositories.team_repository import SqlAlchemyTeamRepository
from taskmanager_api.domain.entities.task import StatusChange, Task, TaskStatus
from taskmanager_api.domain.entities.team import Team
from taskmanager_api.domain.exceptions import NotFoundError


async def _seed_tasks(session_factory, n: int) -> list[Task]:
    created: list[Task] = []
    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        for i in range(n):
            created.append(await repo.create(Task.new(title=f"task {i}", description="d")))
        await session.commit()
    return created


@pytest.mark.asyncio
async def test_create_assigns_id_and_timestamps(session_factory) -> None:
    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        task = await repo.create(Task.new(title="Write docs", description="API"))
        await session.commit()

    assert task.id is not None
    assert task.created_at is not None
    assert task.status is TaskStatus.TODO


@pytest.mark.asyncio
async def test_retrieve_round_trips_fields(session_factory) -> None:
    (task,) = await _seed_tasks(session_factory, 1)

    async with session_factory() as session:
        found = await SqlAlchemyTaskRepository(session).retrieve_by_uuid(task.uuid)

    assert (found.uuid, found.title, found.description) == (task.uuid, "task 0", "d")
    assert found.created_at is not None and found.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_retrieve_unknown_raises_not_found(session_factory) -> None:
    async with session_factory() as session:
        with pytest.raises(NotFoundError, match="task not found"):
            await SqlAlchemyTaskRepository(session).retrieve_by_uuid(uuid7())


@pytest.mark.asyncio
async def test_list_is_newest_first_and_paginated(session_factory) -> None:
    tasks = await _seed_tasks(session_factory, 5)

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        first = await repo.list_paginated(None, 1, 2)
        last = await repo.list_paginated(None, 3, 2)
        beyond = await repo.list_paginated(None, 4, 2)

    assert first.total_items == 5
    assert [t.uuid for t in first.items] == [tasks[4].uuid, tasks[3].uuid]
    assert [t.uuid for t in last.items] == [tasks[0].uuid]
    assert beyond.items == ()
    assert beyond.total_items == 5


@pytest.mark.asyncio
async def test_equal_created_at_falls_back_to_id_desc(session_factory, monkeypatch) -> None:
    frozen = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
    monkeypatch.setattr(SqlAlchemyTaskRepository, "utc_now", staticmethod(lambda: frozen))

    async with session_factory() as session:
        team = await SqlAlchemyTeamRepository(session).create(Team.new(name="T", description="d"))
        repo = SqlAlchemyTaskRepository(session)
        created = [
            await repo.create(replace(Task.new(title=f"t{i}", description="d"), team_id=team.id))
            for i in range(3)
        ]
        await session.commit()

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        page = await repo.list_paginated(None, 1, 10)
        members = await repo.list_by_team_id(team.id)  # type: ignore[arg-type]

    assert {t.created_at for t in page.items} == {frozen}
    expected = sorted((t.id for t in created), reverse=True)
    assert [t.id for t in page.items] == expected
    assert [t.id for t in members] == expected


@pytest.mark.asyncio
async def test_list_filters_by_status(session_factory) -> None:
    tasks = await _seed_tasks(session_factory, 3)
    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        await repo.update_status(
            tasks[1].uuid,
            StatusChange(
                status=TaskStatus.IN_PROGRESS,
                started_at=datetime(2026, 1, 1, tzinfo=UTC),
                finished_at=None,
            ),
        )
        await session.commit()

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        in_progress = await repo.list_paginated(TaskStatus.IN_PROGRESS, 1, 10)
        todo = await repo.list_paginated(TaskStatus.TODO, 1, 10)

    assert [t.uuid for t in in_progress.items] == [tasks[1].uuid]
    assert in_progress.items[0].started_at == datetime(2026, 1, 1, tzinfo=UTC)
    assert todo.total_items == 2


@pytest.mark.asyncio
async def test_update_changes_title_and_description(session_factory) -> None:
    (task,) = await _seed_tasks(session_factory, 1)

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        await repo.update(task.uuid, task.with_changes(title="new", description="text"))
        await session.commit()

    async with session_factory() as session:
        found = await SqlAlchemyTaskRepository(session).retrieve_by_uuid(task.uuid)
    assert (found.title, found.description) == ("new", "text")


@pytest.mark.asyncio
async def test_soft_deleted_task_is_invisible(session_factory) -> None:
    (task,) = await _seed_tasks(session_factory, 1)

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        await repo.delete(task.uuid)
        await session.commit()

    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        with pytest.raises(NotFoundError):
            await repo.retrieve_by_uuid(task.uuid)
        with pytest.raises(NotFoundError):
            await repo.delete(task.uuid)
        with pytest.raises(NotFoundError):
            await repo.update(task.uuid, task)
        assert (await repo.list_paginated(None, 1, 10)).total_items == 0


@pytest.mark.asyncio
async def test_mutations_on_unknown_uuid_raise(session_factory) -> None:
    change = StatusChange(status=TaskStatus.DONE, started_at=None, finished_at=None)
    async with session_factory() as session:
        repo = SqlAlchemyTaskRepository(session)
        with pytest.raises(NotFoundError):
            await repo.update_status(uuid7(), change)


@pytest.mark.asyncio
async def test_team_create_list_and_retrieve(session_factory) -> None:
    async with session_factory() as session:
        repo = SqlAlchemyTeamRepository(session)
        a = await repo.create(Team.new(name="A", description="first"))
        b = await repo.create(Team.new(name="B", description="second"))
        await session.commit()

    async with session_factory() as session:
        repo = SqlAlchemyTeamRepository(session)
        page = await repo.list_paginated(1, 10)
        found = await repo.retrieve_by_uuid(a.uuid)
        with pytest.raises(NotFoundError, match="team not found"):
            await repo.retrieve_by_uuid(uuid7())

    assert [t.uuid for t in page.items] == [b.uuid, a.uuid]
    assert page.total_items == 2
    assert found.name == "A"


@pytest.mark.asyncio
async def test_task_team_association(session_factory) -> None:
    task, _ = await _seed_tasks(session_factory, 2)
    async with session_factory() as session:
        team = await SqlAlchemyTeamRepository(session).create(Team.new(name="T", description="d"))
        await session.commit()

    async with session_factory() as session:
        teams = SqlAlchemyTeamRepository(session)
        assert await teams.retrieve_task_team_id(task.uuid) is None
        await teams.update_task_team_id(task.uuid, team.id)
        await session.commit()

    async with session_factory() as session:
        teams = SqlAlchemyTeamRepository(session)
        tasks = SqlAlchemyTaskRepository(session)
        assert await teams.retrieve_task_team_id(task.uuid) == team.id
        members = await tasks.list_by_team_id(team.id)  # type: ignore[arg-type]
        assert [t.uuid for t in members] == [task.uuid]
        await teams.update_task_team_id(task.uuid, None)
        await session.commit()

    async with session_factory() as session:
        tasks = SqlAlchemyTaskRepository(session)
        assert await tasks.list_by_team_id(team.id) == []  # type: ignore[arg-type]
        with pytest.raises(NotFoundError):
            await SqlAlchemyTeamRepository(session).retrieve_task_team_id(uuid7())
