# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Async SQLAlchemy database handle.

`Database` owns one async engine and its `async_sessionmaker`. It is built
from Settings at startup, shared by reference, and disposed at shutdown.
There is no module-level engine: callers receive the handle explicitly.

Lifecycle:
    async with Database.from_settings(settings) as db:
        uow = SqlAlchemyUnitOfWork(session_factory=db.sessionmaker, ...)

Notes:
    * `pool_pre_ping=True` surfaces dead connections before use.
    * `pool_timeout` bounds how long a request waits for a connection and
      asyncpg's `command_timeout` bounds each statement.
"""

from __future__ import annotations

from types import TracebackType
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taskmanager_api.config.settings import Settings
from taskmanager_api.infrastructure.logging.logger import get_json_logger

logger = get_json_logger(__name__)


def _engine_kwargs(settings: Settings) -> dict[str, Any]:
    """Return engine options appropriate for the configured driver."""
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {"pool_pre_ping": True, "echo": settings.db_echo}
    if url.get_backend_name() == "sqlite":
        return kwargs
    kwargs.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout_s,
    )
    if url.get_driver_name() == "asyncpg":
        kwargs["connect_args"] = {"command_timeout": settings.db_command_timeout_s}
    return kwargs


class Database:
    """Process-wide async engine + session factory with explicit open/close."""

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        if not url:
            raise ValueError("database_url must be configured")
        self._url = url
        self._engine_kwargs = engine_kwargs
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> Database:
        """Build a (not yet opened) handle from application settings."""
        return cls(settings.database_url, **_engine_kwargs(settings))

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database handle is not open (call open() at startup)")
        return self._engine

    @property
    def sessionmaker(self) -> async_sessionmaker[AsyncSession]:
        """Return the session factory.

        Raises:
            RuntimeError: If the handle has not been opened.
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database handle is not open (call open() at startup)")
        return self._sessionmaker

    def open(self) -> None:
        """Create the engine and session factory (idempotent)."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self._url, **self._engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            bind=self._engine, expire_on_commit=False, class_=AsyncSession
        )
        logger.info("database.open", extra={"backend": self._engine.url.get_backend_name()})

    async def dispose(self) -> None:
        """Dispose the engine. Safe to call more than once."""
        engine, self._engine, self._sessionmaker = self._engine, None, None
        if engine is not None:
            await engine.dispose()
            logger.info("database.dispose")

    async def ping(self) -> tuple[bool, str | None]:
        """Readiness probe: run ``SELECT 1``."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            return False, f"{type(exc).__name__}: {exc}"
        return True, None

    async def __aenter__(self) -> Database:
        self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.dispose()
