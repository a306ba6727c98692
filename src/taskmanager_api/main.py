# src/taskmanager_api/main.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
Task manager API application factory.

Synopsis:
    FastAPI bootstrap that wires middleware, exception handlers and routers.
    Provides an application factory (`create_app`) for uvicorn (`--factory`)
    and for tests.

Design:
    * Bootstrap only (no business logic).
    * Lifespan opens the database and (when caching is enabled) Redis, and
      closes them on shutdown.
    * Root JSON logging is configured at import time.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRoute

from taskmanager_api.adapters.routers.api_router import router as api_router
from taskmanager_api.config.settings import Settings, get_settings
from taskmanager_api.dependencies.core.bootstrap import bootstrap
from taskmanager_api.infrastructure.http.errors import install_exception_handlers
from taskmanager_api.infrastructure.logging.logger import (
    configure_root_logging,
    get_json_logger,
)
from taskmanager_api.infrastructure.middleware.access_log import AccessLogMiddleware
from taskmanager_api.infrastructure.middleware.request_id import RequestIdMiddleware

configure_root_logging()
logger = get_json_logger(__name__)

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


def _stable_operation_id(route: APIRoute) -> str:
    """Deterministic operationId, e.g. ``get__api_tasks_task_uuid``."""
    methods = ",".join(sorted(route.methods or []))
    path = route.path_format.replace("/", "_").replace("{", "").replace("}", "")
    return f"{methods.lower()}_{path.lower()}"


def runtime_lifespan(settings: Settings) -> Lifespan:
    """Return a lifespan that opens shared infrastructure for the app lifetime."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        async with bootstrap(app, settings=settings):
            yield

    return _lifespan


def _attach_middlewares(app: FastAPI) -> None:
    """Attach middleware. The last one added runs first.

    RequestIdMiddleware must wrap AccessLogMiddleware so access records carry
    the request id.
    """
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)


def create_app(
    settings: Settings | None = None,
    *,
    lifespan: Lifespan | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override (defaults to ``get_settings()``).
        lifespan: Optional lifespan override; tests use it to hand in
            in-memory handles.

    Returns:
        FastAPI: Fully configured application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Taskmanager API",
        version=settings.service_version,
        description="Tasks, teams and a cached task listing.",
        lifespan=lifespan or runtime_lifespan(settings),
        docs_url=settings.docs_url or None,
        generate_unique_id_function=_stable_operation_id,
    )

    install_exception_handlers(app)
    _attach_middlewares(app)
    app.include_router(api_router)

    logger.info(
        "service_startup",
        extra={
            "extra": {
                "service": settings.service_name,
                "env": settings.environment.value,
                "version": settings.service_version,
                "cache_enabled": settings.cache_enabled,
            }
        },
    )
    return app


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(
        "taskmanager_api.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=int(os.getenv("PORT", "8080")),
    )
