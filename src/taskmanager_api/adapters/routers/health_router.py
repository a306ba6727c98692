# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""``/healthz`` and ``/readyz``.

Liveness never touches a dependency. Readiness asks the injected probe
about Postgres and Redis at the same time and classifies the pair:

    db down                -> 503, "down"
    db ok, redis down      -> 200, "degraded" (lists fall back to the database)
    both ok                -> 200, "ok"
"""

from __future__ import annotations

import asyncio
import time
import typing as t
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Annotated, Protocol

from fastapi import APIRouter, Depends, Response, status
from pydantic import Field

from taskmanager_api.adapters.schemas.http.base import BaseHTTPSchema
from taskmanager_api.dependencies.health import get_health_probe
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)
router = APIRouter(tags=["Health"])

ProbeFn = Callable[[], Awaitable[tuple[bool, str | None]]]


class HealthState(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    DOWN = "down"


class CheckResult(BaseHTTPSchema):
    """Outcome of probing one dependency."""

    name: str = Field(..., examples=["db", "redis"])
    status: t.Literal["ok", "down"]
    detail: str | None = None
    duration_ms: float


class ReadinessResponse(BaseHTTPSchema):
    """Overall state plus one check per dependency, database first."""

    status: HealthState
    checks: list[CheckResult] = Field(default_factory=list)


class LivenessResponse(BaseHTTPSchema):
    status: t.Literal["ok"] = "ok"


class HealthProbe(Protocol):
    """Read-only checks; each returns ``(ok, detail)`` and never raises."""

    async def db(self) -> tuple[bool, str | None]:
        raise NotImplementedError

    async def redis(self) -> tuple[bool, str | None]:
        raise NotImplementedError


async def _check(name: str, probe_fn: ProbeFn) -> CheckResult:
    began = time.perf_counter()
    ok, detail = await probe_fn()
    return CheckResult(
        name=name,
        status="ok" if ok else "down",
        detail=detail,
        duration_ms=(time.perf_counter() - began) * 1000.0,
    )


def _classify(db: CheckResult, redis: CheckResult) -> HealthState:
    if db.status == "down":
        return HealthState.DOWN
    return HealthState.DEGRADED if redis.status == "down" else HealthState.OK


@router.get(
    "/healthz",
    summary="Liveness",
    operation_id="health_liveness",
    response_model=LivenessResponse,
)
async def liveness() -> LivenessResponse:
    return LivenessResponse()


@router.get(
    "/readyz",
    summary="Readiness",
    operation_id="health_readiness",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unavailable", "model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    probe: Annotated[HealthProbe, Depends(get_health_probe)],
) -> ReadinessResponse:
    """Report whether the service can take traffic."""
    db, redis = await asyncio.gather(_check("db", probe.db), _check("redis", probe.redis))
    state = _classify(db, redis)
    if state is HealthState.DOWN:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    logger.info(
        "readiness_probe",
        extra={"extra": {"overall": state.value, "db": db.status, "redis": redis.status}},
    )
    return ReadinessResponse(status=state, checks=[db, redis])
