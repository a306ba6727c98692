# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Presenter: Team entities -> HTTP envelopes.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from taskmanager_api.adapters.presenters.base_presenter import BasePresenter
from taskmanager_api.adapters.presenters.tasks_presenter import to_task_response
from taskmanager_api.adapters.schemas.http.envelopes import PageBody, SuccessEnvelope
from taskmanager_api.adapters.schemas.http.teams import TeamResponse, TeamWithTasksResponse
from taskmanager_api.domain.entities.team import Team, TeamPage, TeamWithTasks


def to_team_response(team: Team) -> TeamResponse:
    return TeamResponse(
        uuid=team.uuid,
        name=team.name,
        description=team.description,
        created_at=team.created_at,
        updated_at=team.updated_at,
    )


class TeamsPresenter(BasePresenter[TeamResponse]):
    """Presenter for the ``/api/teams`` routes."""

    def present_team(self, team: Team) -> SuccessEnvelope[TeamResponse]:
        return self.present_success(to_team_response(team))

    def present_team_with_tasks(
        self, result: TeamWithTasks
    ) -> SuccessEnvelope[TeamWithTasksResponse]:
        team = result.team
        body = TeamWithTasksResponse(
            uuid=team.uuid,
            name=team.name,
            description=team.description,
            created_at=team.created_at,
            updated_at=team.updated_at,
            tasks=[to_task_response(t) for t in result.tasks],
        )
        return SuccessEnvelope(data=body)

    def present_team_page(self, page: TeamPage) -> SuccessEnvelope[PageBody[TeamResponse]]:
        return self.present_page(
            [to_team_response(t) for t in page.items],
            page=page.page,
            limit=page.limit,
            total_items=page.total_items,
        )
