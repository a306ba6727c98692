# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Aggregate router: mounts every HTTP surface of the service."""

from __future__ import annotations

from fastapi import APIRouter

from taskmanager_api.adapters.routers.health_router import router as health_router
from taskmanager_api.adapters.routers.metrics_router import router as metrics_router
from taskmanager_api.adapters.routers.tasks_router import router as tasks_router
from taskmanager_api.adapters.routers.teams_router import router as teams_router

router = APIRouter()
router.include_router(health_router)
router.include_router(metrics_router)
router.include_router(tasks_router)
router.include_router(teams_router)
