# src/taskmanager_api/dependencies/tasks.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Dependency wiring for the task use cases."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.application.use_cases.pagination import ListLimits
from taskmanager_api.application.use_cases.tasks.create_task import CreateTask
from taskmanager_api.application.use_cases.tasks.delete_task import DeleteTask
from taskmanager_api.application.use_cases.tasks.get_task import GetTask
from taskmanager_api.application.use_cases.tasks.list_tasks import ListTasks
from taskmanager_api.application.use_cases.tasks.update_task import UpdateTask
from taskmanager_api.application.use_cases.tasks.update_task_status import UpdateTaskStatus
from taskmanager_api.config.settings import Settings
from taskmanager_api.dependencies.core.uow import get_settings_from_app, get_uow

UowDep = Annotated[UnitOfWork, Depends(get_uow)]


def get_create_task_uc(uow: UowDep) -> CreateTask:
    return CreateTask(uow)


def get_get_task_uc(uow: UowDep) -> GetTask:
    return GetTask(uow)


def get_update_task_uc(uow: UowDep) -> UpdateTask:
    return UpdateTask(uow)


def get_delete_task_uc(uow: UowDep) -> DeleteTask:
    return DeleteTask(uow)


def get_update_task_status_uc(uow: UowDep) -> UpdateTaskStatus:
    return UpdateTaskStatus(uow)


def get_list_tasks_uc(
    uow: UowDep,
    settings: Annotated[Settings, Depends(get_settings_from_app)],
) -> ListTasks:
    limits = ListLimits(
        default_limit=settings.task_list_default_limit,
        max_limit=settings.task_list_max_limit,
    )
    return ListTasks(uow, limits)
