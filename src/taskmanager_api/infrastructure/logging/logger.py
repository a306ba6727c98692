# src/taskmanager_api/infrastructure/logging/logger.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""One-JSON-object-per-line logging.

Every record carries ``ts``, ``level``, ``logger`` and ``message``. The
request id bound by the request-id middleware is attached when present.
Callers add event fields with ``extra={"extra": {...}}``; flat ``extra=``
keys are emitted as well.

Usage:
    configure_root_logging()          # once, at process start
    log = get_json_logger(__name__)
    log.info("bootstrap.start", extra={"extra": {"cache_enabled": True}})
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_request_id",
    "set_request_context",
]

_request_id: ContextVar[str | None] = ContextVar("taskmanager_request_id", default=None)

# Attribute names present on every LogRecord; the rest arrived through `extra=`.
_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def set_request_context(*, request_id: str | None = None) -> None:
    """Bind ``request_id`` to the current context (no-op for ``None``)."""
    if request_id is not None:
        _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def _to_json_safe(value: Any) -> Any:
    if value is None or isinstance(value, str | int | float | bool):
        return value
    if isinstance(value, dict):
        return {str(k): _to_json_safe(v) for k, v in value.items()}
    if isinstance(value, list | tuple | set | frozenset):
        return [_to_json_safe(v) for v in value]
    return str(value)


class _JsonFormatter(logging.Formatter):
    """Render a LogRecord as compact JSON."""

    def format(self, record: logging.LogRecord) -> str:
        out: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = getattr(record, "request_id", None) or _request_id.get()
        if request_id:
            out["request_id"] = request_id

        if record.exc_info and record.exc_info[1] is not None:
            err = record.exc_info[1]
            out["exc_type"] = type(err).__name__
            out["exc_message"] = str(err)

        for name, value in vars(record).items():
            if name not in _STANDARD_ATTRS and name != "extra" and name not in out:
                out[name] = _to_json_safe(value)

        nested = getattr(record, "extra", None)
        if isinstance(nested, dict):
            out.update(_to_json_safe(nested))

        return json.dumps(out, separators=(",", ":"), ensure_ascii=False)


def configure_root_logging(level: str | int | None = None) -> None:
    """Install the JSON handler on the root logger once and set its level.

    Args:
        level: Level or level name; defaults to ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()
    chosen = level if level is not None else os.getenv("LOG_LEVEL") or "INFO"
    root.setLevel(chosen.upper() if isinstance(chosen, str) else chosen)

    # Hot reload re-imports modules; keep a single JSON handler.
    if not any(isinstance(h.formatter, _JsonFormatter) for h in root.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(_JsonFormatter())
        root.addHandler(stream)


def get_json_logger(name: str) -> logging.Logger:
    """Return the named logger; output goes through the root JSON handler.

    Root configuration is not performed here; call
    :func:`configure_root_logging` at startup.
    """
    log = logging.getLogger(name)
    log.propagate = True
    return log
