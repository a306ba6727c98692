# src/taskmanager_api/dependencies/teams.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the team use cases."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from taskmanager_api.application.use_cases.pagination import ListLimits
from taskmanager_api.application.use_cases.teams.create_team import CreateTeam
from taskmanager_api.application.use_cases.teams.get_team import GetTeamWithTasks
from taskmanager_api.application.use_cases.teams.list_teams import ListTeams
from taskmanager_api.application.use_cases.teams.task_membership import (
    AssociateTask,
    DisassociateTask,
)
from taskmanager_api.config.settings import Settings
from taskmanager_api.dependencies.core.uow import get_settings_from_app
from taskmanager_api.dependencies.tasks import UowDep


def get_create_team_uc(uow: UowDep) -> CreateTeam:
    return CreateTeam(uow)


def get_team_with_tasks_uc(uow: UowDep) -> GetTeamWithTasks:
    return GetTeamWithTasks(uow)


def get_list_teams_uc(
    uow: UowDep,
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> ListTeams:
    limits = ListLimits(
        default_limit=settings.team_list_default_limit,
        max_limit=settings.team_list_max_limit,
    )
    return ListTeams(uow, limits)


def get_associate_task_uc(uow: UowDep) -> AssociateTask:
    return AssociateTask(uow)


def get_disassociate_task_uc(uow: UowDep) -> DisassociateTask:
    return DisassociateTask(uow)
