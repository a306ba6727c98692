# src/taskmanager_api/infrastructure/http/errors.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Exception -> ErrorEnvelope mapping for the HTTP boundary.

Mapping:
    NotFoundError            -> 404 NOT_FOUND
    ValidationError          -> 422 VALIDATION_ERROR (details.errors[field, message])
    BadRequestError          -> 400 BAD_REQUEST
    RequestValidationError   -> 400 BAD_REQUEST (malformed body, path or query)
    HTTPException            -> its own status, HTTP_ERROR
    anything else            -> 500 INTERNAL_ERROR with a generic message
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.responses import Response

from taskmanager_api.domain.exceptions import (
    BadRequestError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)

_DOMAIN_STATUS: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, 404),
    (ValidationError, 422),
    (BadRequestError, 400),
)


def _trace_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def error_envelope(
    *,
    code: str,
    http_status: int,
    message: str,
    details: dict[str, Any] | None = None,
    trace_id: str | None = None,
) -> dict[str, Any]:
    err: dict[str, Any] = {
        "code": code,
        "http_status": http_status,
        "message": message,
    }
    if details is not None:
        err["details"] = details
    if trace_id is not None:
        err["trace_id"] = trace_id
    return {"error": err}


def _status_for(exc: DomainError) -> int:
    for kind, status_code in _DOMAIN_STATUS:
        if isinstance(exc, kind):
            return status_code
    return 500


async def handle_domain_error(request: Request, exc: DomainError) -> Response:
    status_code = _status_for(exc)
    if status_code == 500:
        return await handle_unhandled_exception(request, exc)
    payload = error_envelope(
        code=exc.code,
        http_status=status_code,
        message=exc.message,
        details=exc.details or None,
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=status_code, content=payload)


def _field_of(error: dict[str, Any]) -> str:
    loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path")]
    return ".".join(loc)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> Response:
    """Malformed requests (unparseable body, bad UUID, wrong types) are 400s."""
    errors = [
        {"field": _field_of(e), "message": str(e.get("msg", "invalid value"))}
        for e in exc.errors()
    ]
    payload = error_envelope(
        code="BAD_REQUEST",
        http_status=400,
        message="Malformed request",
        details={"errors": errors},
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=400, content=payload)


async def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    payload = error_envelope(
        code="HTTP_ERROR",
        http_status=exc.status_code,
        message=exc.detail if isinstance(exc.detail, str) else "HTTP error",
        details=None if isinstance(exc.detail, str) else {"detail": exc.detail},
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=exc.status_code, content=payload, headers=exc.headers)


async def handle_unhandled_exception(request: Request, exc: Exception) -> Response:
    logger.error(
        "http.unhandled_exception",
        exc_info=exc,
        extra={"extra": {"path": request.url.path, "method": request.method}},
    )
    payload = error_envelope(
        code="INTERNAL_ERROR",
        http_status=500,
        message="Internal server error",
        details=None,
        trace_id=_trace_id(request),
    )
    return JSONResponse(status_code=500, content=payload)


def install_exception_handlers(app: FastAPI) -> None:
    """Register the structured handlers on ``app``."""

    async def _domain_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, DomainError):
            raise exc
        return await handle_domain_error(request, exc)

    async def _http_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, HTTPException):
            raise exc
        return await handle_http_exception(request, exc)

    async def _validation_error_handler(request: Request, exc: Exception) -> Response:
        if not isinstance(exc, RequestValidationError):
            raise exc
        return await handle_validation_error(request, exc)

    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(HTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, handle_unhandled_exception)
