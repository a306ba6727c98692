# src/taskmanager_api/infrastructure/middleware/request_id.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Correlation id per request.

A caller-supplied ``X-Request-ID`` is kept when it is a short printable
token; otherwise a UUID4 is minted. The id is stored on ``request.state``,
bound to the log context and echoed on the response. Error envelopes
report it as ``trace_id``.
"""

from __future__ import annotations

import re
import uuid
from typing import Final

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from taskmanager_api.infrastructure.logging.logger import set_request_context

REQUEST_ID_HEADER: Final[str] = "X-Request-ID"
_SAFE_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9\-_.:@]{1,128}$")


def coerce_request_id(raw: str | None) -> str:
    """Return ``raw`` if it is a safe token, else a fresh UUID4 string."""
    if raw and _SAFE_RE.match(raw):
        return raw
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Inject a correlation id onto the request, the log context and the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        req_id = coerce_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = req_id
        set_request_context(request_id=req_id)

        response: Response = await call_next(request)
        response.headers.setdefault(REQUEST_ID_HEADER, req_id)
        return response
