# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Teams Router.

Summary:
    Team creation, listing, detail (with tasks) and task membership under
    ``/api/teams``.

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Response, status

from taskmanager_api.adapters.presenters.teams_presenter import TeamsPresenter
from taskmanager_api.adapters.routers.base_router import BaseRouter
from taskmanager_api.adapters.schemas.http.envelopes import PageBody, SuccessEnvelope
from taskmanager_api.adapters.schemas.http.teams import (
    TaskAssociationRequest,
    TeamCreateRequest,
    TeamResponse,
    TeamWithTasksResponse,
)
from taskmanager_api.application.use_cases.teams.create_team import (
    CreateTeam,
    CreateTeamRequest,
)
from taskmanager_api.application.use_cases.teams.get_team import GetTeamWithTasks
from taskmanager_api.application.use_cases.teams.list_teams import ListTeams, ListTeamsRequest
from taskmanager_api.application.use_cases.teams.task_membership import (
    AssociateTask,
    DisassociateTask,
    TaskMembershipRequest,
)
from taskmanager_api.dependencies.teams import (
    get_associate_task_uc,
    get_create_team_uc,
    get_disassociate_task_uc,
    get_list_teams_uc,
    get_team_with_tasks_uc,
)

router = BaseRouter(resource="teams", tags=["Teams"])
presenter = TeamsPresenter()


@router.post(
    "",
    response_model=SuccessEnvelope[TeamResponse],
    status_code=status.HTTP_201_CREATED,
    responses=BaseRouter.std_error_responses(400, 422, 500),
    summary="Create a team",
)
async def create_team(
    body: TeamCreateRequest,
    uc: Annotated[CreateTeam, Depends(get_create_team_uc)],
) -> SuccessEnvelope[TeamResponse]:
    team = await uc.execute(CreateTeamRequest(name=body.name, description=body.description))
    return presenter.present_team(team)


@router.get(
    "",
    response_model=SuccessEnvelope[PageBody[TeamResponse]],
    responses=BaseRouter.std_error_responses(400, 500),
    summary="List teams",
)
async def list_teams(
    uc: Annotated[ListTeams, Depends(get_list_teams_uc)],
    page: Annotated[int, Query(description="1-indexed page number.")] = 1,
    limit: Annotated[int, Query(description="Page size; 0 selects the default.")] = 0,
) -> SuccessEnvelope[PageBody[TeamResponse]]:
    result = await uc.execute(ListTeamsRequest(page=page, limit=limit))
    return presenter.present_team_page(result)


@router.get(
    "/{team_uuid}",
    response_model=SuccessEnvelope[TeamWithTasksResponse],
    responses=BaseRouter.std_error_responses(400, 404, 500),
    summary="Get a team with its tasks",
)
async def get_team(
    team_uuid: UUID,
    uc: Annotated[GetTeamWithTasks, Depends(get_team_with_tasks_uc)],
) -> SuccessEnvelope[TeamWithTasksResponse]:
    return presenter.present_team_with_tasks(await uc.execute(team_uuid))


@router.post(
    "/{team_uuid}/tasks",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BaseRouter.std_error_responses(400, 422, 500),
    summary="Associate a task with a team",
)
async def associate_task(
    team_uuid: UUID,
    body: TaskAssociationRequest,
    uc: Annotated[AssociateTask, Depends(get_associate_task_uc)],
) -> Response:
    """Attach a task; a task already on another team is rejected with 422."""
    await uc.execute(TaskMembershipRequest(team_uuid=team_uuid, task_uuid=body.task_uuid))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{team_uuid}/tasks/{task_uuid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BaseRouter.std_error_responses(400, 422, 500),
    summary="Remove a task from a team",
)
async def disassociate_task(
    team_uuid: UUID,
    task_uuid: UUID,
    uc: Annotated[DisassociateTask, Depends(get_disassociate_task_uc)],
) -> Response:
    await uc.execute(TaskMembershipRequest(team_uuid=team_uuid, task_uuid=task_uuid))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
