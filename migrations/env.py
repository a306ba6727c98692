# migrations/env.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Alembic environment for the task and team tables.

Offline runs (``--sql``) render a script; online runs use an async engine.
``.env`` and ``.env.<ENVIRONMENT>`` are read first, without replacing
variables that are already exported.

Variables read:
    ENVIRONMENT       must be set; migrations refuse to run without it
    DATABASE_URL      async URL; falls back to ``sqlalchemy.url`` in alembic.ini
    ECHO_SQL          "1" echoes statements during online runs
    ALEMBIC_SHOW_URL  "1" logs the URL with the password masked

Example:
    ENVIRONMENT=development alembic upgrade head
"""

from __future__ import annotations

import asyncio
import logging
import logging.config
import os
from pathlib import Path
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from taskmanager_api.infrastructure.database.models import metadata as target_metadata
from taskmanager_api.infrastructure.database.models.base import DEFAULT_DB_SCHEMA

config = context.config
if config.config_file_name is not None:
    logging.config.fileConfig(config.config_file_name)

log = logging.getLogger("alembic.env")

_REPO_ROOT = Path(__file__).resolve().parents[1]


def _environment() -> str:
    return (os.getenv("ENVIRONMENT") or "").strip().lower()


for _candidate in (".env", f".env.{_environment()}" if _environment() else None):
    if _candidate and (_REPO_ROOT / _candidate).exists():
        load_dotenv(_REPO_ROOT / _candidate, override=False)


def _redacted(url: str) -> str:
    parts = urlsplit(url)
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    if parts.username:
        netloc = f"{parts.username}:****@{netloc}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


def _database_url() -> str:
    """Return the target URL after checking that ENVIRONMENT is set.

    Raises:
        RuntimeError: ENVIRONMENT is unset, or no URL is configured anywhere.
    """
    if not _environment():
        raise RuntimeError(
            "set ENVIRONMENT before running migrations (e.g. ENVIRONMENT=development)"
        )
    url = os.getenv("DATABASE_URL") or config.get_main_option("sqlalchemy.url")
    if not url:
        raise RuntimeError("no database URL: set DATABASE_URL or sqlalchemy.url")
    if os.getenv("ALEMBIC_SHOW_URL") == "1":
        log.info("migrating %s", _redacted(url))
    return url


def _options() -> dict[str, Any]:
    # alembic_version lives next to the tables when a schema is configured.
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "compare_server_default": True,
        "include_schemas": DEFAULT_DB_SCHEMA is not None,
        "version_table_schema": DEFAULT_DB_SCHEMA,
    }


def _run(connection: Connection | None = None, **extra: Any) -> None:
    context.configure(connection=connection, **_options(), **extra)
    with context.begin_transaction():
        context.run_migrations()


async def _run_online() -> None:
    engine = create_async_engine(
        _database_url(),
        echo=os.getenv("ECHO_SQL") == "1",
        poolclass=pool.NullPool,
    )
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    _run(url=_database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
else:
    asyncio.run(_run_online())
