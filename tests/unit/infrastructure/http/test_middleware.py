# tests/unit/infrastructure/http/test_middleware.py
from __future__ import annotations

import logging

import httpx
import pytest
from fastapi import FastAPI, Request

from taskmanager_api.infrastructure.middleware.access_log import AccessLogMiddleware
from taskmanager_api.infrastructure.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIdMiddleware,
    coerce_request_id,
)


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIdMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, str]:
        return {"request_id": request.state.request_id}

    return app


def test_coerce_keeps_safe_tokens_and_replaces_others() -> None:
    assert coerce_request_id("abc-123_x.y:z@w") == "abc-123_x.y:z@w"
    assert coerce_request_id("has space") != "has space"
    assert coerce_request_id("x" * 129) != "x" * 129
    assert len(coerce_request_id(None)) == 36


@pytest.mark.asyncio
async def test_incoming_request_id_is_echoed() -> None:
    transport = httpx.ASGITransport(app=_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/echo", headers={REQUEST_ID_HEADER: "abc-123"})

    assert resp.headers[REQUEST_ID_HEADER] == "abc-123"
    assert resp.json() == {"request_id": "abc-123"}


@pytest.mark.asyncio
async def test_missing_request_id_is_generated() -> None:
    transport = httpx.ASGITransport(app=_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        resp = await client.get("/echo")

    assert resp.headers[REQUEST_ID_HEADER] == resp.json()["request_id"]


@pytest.mark.asyncio
async def test_access_log_record(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="taskmanager_api.infrastructure.middleware.access_log")
    transport = httpx.ASGITransport(app=_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        await client.get("/echo?x=1", headers={REQUEST_ID_HEADER: "log-1"})

    records = [r for r in caplog.records if r.getMessage() == "access_log"]
    assert len(records) == 1
    fields = records[0].extra  # type: ignore[attr-defined]
    assert fields["path"] == "/echo"
    assert fields["query"] == "x=1"
    assert fields["status"] == 200
    assert fields["request_id"] == "log-1"
    assert fields["ok"] is True
