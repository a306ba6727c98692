# tests/unit/application/test_team_use_cases.py
from __future__ import annotations

import pytest
from uuid6 import uuid7

from taskmanager_api.application.use_cases.pagination import ListLimits
from taskmanager_api.application.use_cases.tasks.create_task import CreateTask, CreateTaskRequest
from taskmanager_api.application.use_cases.teams.create_team import CreateTeam, CreateTeamRequest
from taskmanager_api.application.use_cases.teams.get_team import GetTeamWithTasks
from taskmanager_api.application.use_cases.teams.list_teams import ListTeams, ListTeamsRequest
from taskmanager_api.application.use_cases.teams.task_membership import (
    AssociateTask,
    DisassociateTask,
    TaskMembershipRequest,
)
from taskmanager_api.domain.entities.team import Team
from taskmanager_api.domain.exceptions import NotFoundError, ValidationError


async def _team(uow, name: str = "Platform"):
    return await CreateTeam(uow).execute(CreateTeamRequest(name=name, description="infra"))


async def _task(uow, title: str = "Ship"):
    return await CreateTask(uow).execute(CreateTaskRequest(title=title, description="d"))


@pytest.mark.asyncio
async def test_create_team_validates(uow) -> None:
    with pytest.raises(ValidationError) as info:
        await CreateTeam(uow).execute(CreateTeamRequest(name=" ", description="d"))

    assert info.value.errors[0].message == "name is required"


@pytest.mark.asyncio
async def test_list_teams_newest_first(uow) -> None:
    a = await _team(uow, "A")
    b = await _team(uow, "B")

    page = await ListTeams(uow, ListLimits(10, 100)).execute(ListTeamsRequest())

    assert [t.uuid for t in page.items] == [b.uuid, a.uuid]
    assert page.total_items == 2


@pytest.mark.asyncio
async def test_associate_then_get_team_with_tasks(uow) -> None:
    team = await _team(uow)
    older = await _task(uow, "older")
    newer = await _task(uow, "newer")
    await _task(uow, "elsewhere")

    for task in (older, newer):
        await AssociateTask(uow).execute(TaskMembershipRequest(team.uuid, task.uuid))

    result = await GetTeamWithTasks(uow).execute(team.uuid)

    assert result.team.uuid == team.uuid
    assert [t.title for t in result.tasks] == ["newer", "older"]


@pytest.mark.asyncio
async def test_get_unknown_team_is_not_found(uow) -> None:
    with pytest.raises(NotFoundError, match="team not found"):
        await GetTeamWithTasks(uow).execute(uuid7())


@pytest.mark.asyncio
async def test_team_without_store_id_lists_no_tasks(uow, store) -> None:
    unsaved = Team.new(name="Draft", description="not persisted")
    store.teams[unsaved.uuid] = unsaved
    await _task(uow, "unassigned")

    result = await GetTeamWithTasks(uow).execute(unsaved.uuid)

    assert result.team.id is None
    assert result.tasks == ()


@pytest.mark.asyncio
async def test_associate_same_team_twice_is_a_noop(uow) -> None:
    team, task = await _team(uow), await _task(uow)
    req = TaskMembershipRequest(team.uuid, task.uuid)

    await AssociateTask(uow).execute(req)
    await AssociateTask(uow).execute(req)

    assert len((await GetTeamWithTasks(uow).execute(team.uuid)).tasks) == 1


@pytest.mark.asyncio
async def test_task_cannot_join_a_second_team(uow) -> None:
    first, second, task = await _team(uow, "A"), await _team(uow, "B"), await _task(uow)
    await AssociateTask(uow).execute(TaskMembershipRequest(first.uuid, task.uuid))

    with pytest.raises(ValidationError) as info:
        await AssociateTask(uow).execute(TaskMembershipRequest(second.uuid, task.uuid))

    assert info.value.errors[0].message == "task is already associated with another team"


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["team", "task"])
async def test_missing_side_is_a_validation_error(uow, missing: str) -> None:
    team, task = await _team(uow), await _task(uow)
    req = TaskMembershipRequest(
        uuid7() if missing == "team" else team.uuid,
        uuid7() if missing == "task" else task.uuid,
    )

    with pytest.raises(ValidationError) as info:
        await AssociateTask(uow).execute(req)

    assert (info.value.errors[0].field, info.value.errors[0].message) == (
        missing,
        f"{missing} not found",
    )


@pytest.mark.asyncio
async def test_disassociate(uow) -> None:
    team, task = await _team(uow), await _task(uow)
    req = TaskMembershipRequest(team.uuid, task.uuid)
    await AssociateTask(uow).execute(req)

    await DisassociateTask(uow).execute(req)

    assert (await GetTeamWithTasks(uow).execute(team.uuid)).tasks == ()
    with pytest.raises(ValidationError) as info:
        await DisassociateTask(uow).execute(req)
    assert info.value.errors[0].message == "task is not associated with this team"
