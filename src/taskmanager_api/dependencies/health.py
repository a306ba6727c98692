# src/taskmanager_api/dependencies/health.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""FastAPI dependency wiring for readiness probes (wiring only, no probe logic)."""

from __future__ import annotations

from fastapi import Request

from taskmanager_api.infrastructure.health.probe import DbRedisProbe


def get_health_probe(request: Request) -> DbRedisProbe:
    """Build a probe bound to the handles opened at startup."""
    state = request.app.state
    return DbRedisProbe(database=state.database, redis=getattr(state, "redis", None))
