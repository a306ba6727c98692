# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Presenter: Task entities -> HTTP envelopes.

Layer:
    adapters/presenters
"""

from __future__ import annotations

from taskmanager_api.adapters.presenters.base_presenter import BasePresenter
from taskmanager_api.adapters.schemas.http.envelopes import PageBody, SuccessEnvelope
from taskmanager_api.adapters.schemas.http.tasks import TaskResponse
from taskmanager_api.domain.entities.task import Task, TaskPage


def to_task_response(task: Task) -> TaskResponse:
    """Map a task entity onto its public schema (internal ids stay private)."""
    return TaskResponse(
        uuid=task.uuid,
        title=task.title,
        description=task.description,
        status=task.status.value,
        started_at=task.started_at,
        finished_at=task.finished_at,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


class TasksPresenter(BasePresenter[TaskResponse]):
    """Presenter for the ``/api/tasks`` routes."""

    def present_task(self, task: Task) -> SuccessEnvelope[TaskResponse]:
        return self.present_success(to_task_response(task))

    def present_task_page(self, page: TaskPage) -> SuccessEnvelope[PageBody[TaskResponse]]:
        return self.present_page(
            [to_task_response(t) for t in page.items],
            page=page.page,
            limit=page.limit,
            total_items=page.total_items,
        )
