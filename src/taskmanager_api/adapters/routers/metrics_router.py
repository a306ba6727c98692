# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""`/metrics` in the Prometheus text format.

Readiness histograms are observed once at 0.0s before rendering so their
``_bucket``/``_count``/``_sum`` series exist on the very first scrape.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Histogram, generate_latest

from taskmanager_api.infrastructure.logging.logger import get_json_logger
from taskmanager_api.infrastructure.observability.metrics import (
    get_readyz_db_latency_seconds,
    get_readyz_redis_latency_seconds,
)

logger = get_json_logger(__name__)
router = APIRouter()

_warmed: set[int] = set()


def _ensure_observed_once(getter: Callable[[], Histogram], name: str) -> None:
    key = id(REGISTRY) ^ hash(name)
    if key in _warmed:
        return
    try:
        getter().observe(0.0)
    except ValueError as exc:  # pragma: no cover
        logger.debug(
            "metrics_router: failed warming histogram",
            extra={"extra": {"metric": name, "error": str(exc)}},
        )
        return
    _warmed.add(key)


@router.get("/metrics", include_in_schema=False)
async def metrics_probe() -> Response:
    """Expose Prometheus metrics in the text exposition format."""
    _ensure_observed_once(get_readyz_db_latency_seconds, "readyz_db_latency_seconds")
    _ensure_observed_once(get_readyz_redis_latency_seconds, "readyz_redis_latency_seconds")
    return Response(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)
