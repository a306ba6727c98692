# src/taskmanager_api/infrastructure/middleware/access_log.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Access log middleware: one ``access_log`` record per request.

Logged fields: method, path, query, status (500 when the endpoint raised),
elapsed_ms, client_ip, request_id, ok.
"""

from __future__ import annotations

import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, outcome and latency of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "access_log",
                extra={
                    "extra": {
                        "method": request.method,
                        "path": request.url.path,
                        "query": request.url.query,
                        "status": status_code,
                        "elapsed_ms": round((time.perf_counter() - started) * 1000.0, 2),
                        "client_ip": request.client.host if request.client else None,
                        "request_id": getattr(request.state, "request_id", None),
                        "ok": status_code < 500,
                    }
                },
            )
