# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Tasks Router.

Summary:
    CRUD, listing and status transitions for tasks under ``/api/tasks``.
    The list endpoint is served through the task list cache when caching is
    enabled; every write invalidates it.

Layer:
    adapters/routers
"""

from __future__ import annotations

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Response, status

from taskmanager_api.adapters.presenters.tasks_presenter import TasksPresenter
from taskmanager_api.adapters.routers.base_router import BaseRouter
from taskmanager_api.adapters.schemas.http.envelopes import PageBody, SuccessEnvelope
from taskmanager_api.adapters.schemas.http.tasks import (
    TaskCreateRequest,
    TaskResponse,
    TaskStatusRequest,
    TaskUpdateRequest,
)
from taskmanager_api.application.use_cases.tasks.create_task import (
    CreateTask,
    CreateTaskRequest,
)
from taskmanager_api.application.use_cases.tasks.delete_task import DeleteTask
from taskmanager_api.application.use_cases.tasks.get_task import GetTask
from taskmanager_api.application.use_cases.tasks.list_tasks import ListTasks, ListTasksRequest
from taskmanager_api.application.use_cases.tasks.update_task import (
    UpdateTask,
    UpdateTaskRequest,
)
from taskmanager_api.application.use_cases.tasks.update_task_status import (
    UpdateTaskStatus,
    UpdateTaskStatusRequest,
)
from taskmanager_api.dependencies.tasks import (
    get_create_task_uc,
    get_delete_task_uc,
    get_get_task_uc,
    get_list_tasks_uc,
    get_update_task_status_uc,
    get_update_task_uc,
)
from taskmanager_api.domain.entities.task import TaskStatus
from taskmanager_api.domain.exceptions import BadRequestError

router = BaseRouter(resource="tasks", tags=["Tasks"])
presenter = TasksPresenter()


def parse_status_filter(raw: str | None) -> TaskStatus | None:
    """Return the status filter; empty means "no filter".

    Raises:
        BadRequestError: If ``raw`` is not a known status value.
    """
    if not raw:
        return None
    try:
        return TaskStatus(raw)
    except ValueError as exc:
        raise BadRequestError("invalid status value", field="status") from exc


@router.post(
    "",
    response_model=SuccessEnvelope[TaskResponse],
    status_code=status.HTTP_201_CREATED,
    responses=BaseRouter.std_error_responses(400, 422, 500),
    summary="Create a task",
)
async def create_task(
    body: TaskCreateRequest,
    uc: Annotated[CreateTask, Depends(get_create_task_uc)],
) -> SuccessEnvelope[TaskResponse]:
    """Create a task in ``to_do``."""
    task = await uc.execute(CreateTaskRequest(title=body.title, description=body.description))
    return presenter.present_task(task)


@router.get(
    "",
    response_model=SuccessEnvelope[PageBody[TaskResponse]],
    responses=BaseRouter.std_error_responses(400, 500),
    summary="List tasks",
)
async def list_tasks(
    uc: Annotated[ListTasks, Depends(get_list_tasks_uc)],
    page: Annotated[int, Query(description="1-indexed page number.")] = 1,
    limit: Annotated[int, Query(description="Page size; 0 selects the default.")] = 0,
    status_filter: Annotated[
        str | None,
        Query(alias="status", description="Optional status filter.", examples=["to_do"]),
    ] = None,
) -> SuccessEnvelope[PageBody[TaskResponse]]:
    """Return one page of tasks, newest first."""
    result = await uc.execute(
        ListTasksRequest(page=page, limit=limit, status=parse_status_filter(status_filter))
    )
    return presenter.present_task_page(result)


@router.get(
    "/{task_uuid}",
    response_model=SuccessEnvelope[TaskResponse],
    responses=BaseRouter.std_error_responses(400, 404, 500),
    summary="Get a task",
)
async def get_task(
    task_uuid: UUID,
    uc: Annotated[GetTask, Depends(get_get_task_uc)],
) -> SuccessEnvelope[TaskResponse]:
    return presenter.present_task(await uc.execute(task_uuid))


@router.put(
    "/{task_uuid}",
    response_model=SuccessEnvelope[TaskResponse],
    responses=BaseRouter.std_error_responses(),
    summary="Update a task's title and description",
)
async def update_task(
    task_uuid: UUID,
    body: TaskUpdateRequest,
    uc: Annotated[UpdateTask, Depends(get_update_task_uc)],
) -> SuccessEnvelope[TaskResponse]:
    task = await uc.execute(
        UpdateTaskRequest(task_uuid=task_uuid, title=body.title, description=body.description)
    )
    return presenter.present_task(task)


@router.delete(
    "/{task_uuid}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=BaseRouter.std_error_responses(400, 404, 500),
    summary="Delete a task",
)
async def delete_task(
    task_uuid: UUID,
    uc: Annotated[DeleteTask, Depends(get_delete_task_uc)],
) -> Response:
    """Soft-delete a task."""
    await uc.execute(task_uuid)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{task_uuid}/status",
    response_model=SuccessEnvelope[TaskResponse],
    responses=BaseRouter.std_error_responses(),
    summary="Move a task to another status",
)
async def update_task_status(
    task_uuid: UUID,
    body: TaskStatusRequest,
    uc: Annotated[UpdateTaskStatus, Depends(get_update_task_status_uc)],
) -> SuccessEnvelope[TaskResponse]:
    """Apply a status transition; invalid values or edges are 422s."""
    task = await uc.execute(UpdateTaskStatusRequest(task_uuid=task_uuid, status=body.status))
    return presenter.present_task(task)
