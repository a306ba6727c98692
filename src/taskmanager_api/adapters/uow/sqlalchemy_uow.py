# src/taskmanager_api/adapters/uow/sqlalchemy_uow.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Unit of work over one SQLAlchemy AsyncSession.

Purpose:
    Own the session for a single request-scoped transaction and hand it to
    repository factories. Repositories get the session as a constructor
    argument; nothing is looked up from ambient state.

Composition:
    ``repo_factories`` maps a repository port to a ``session -> repository``
    callable. The defaults build the plain SQLAlchemy repositories; wiring code
    overrides ``TaskRepository`` to stack the list-cache decorator on top.

Layer:
    adapters/uow
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import TracebackType
from typing import Any, Literal

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskmanager_api.adapters.repositories.task_repository import SqlAlchemyTaskRepository
from taskmanager_api.adapters.repositories.team_repository import SqlAlchemyTeamRepository
from taskmanager_api.application.uow import UnitOfWork
from taskmanager_api.domain.interfaces.repositories.task_repository import TaskRepository
from taskmanager_api.domain.interfaces.repositories.team_repository import TeamRepository

RepoFactory = Callable[[AsyncSession], Any]
SessionFactory = async_sessionmaker[AsyncSession] | Callable[[], AsyncSession]


def default_repo_factories() -> dict[type[Any], RepoFactory]:
    """Return the plain (uncached) port-to-adapter wiring."""
    return {
        TaskRepository: lambda s: SqlAlchemyTaskRepository(session=s),
        TeamRepository: lambda s: SqlAlchemyTeamRepository(session=s),
    }


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Transaction scope bound to one AsyncSession.

    Usage:
        async with SqlAlchemyUnitOfWork(session_factory=db.sessionmaker) as uow:
            tasks = uow.get_repository(TaskRepository)
            ...
            await uow.commit()

    Leaving the block with an exception rolls back unless the caller already
    did; the session is closed either way. The instance may be entered again
    after it exits, which opens a fresh session.
    """

    def __init__(
        self,
        *,
        session_factory: SessionFactory,
        repo_factories: Mapping[type[Any], RepoFactory] | None = None,
    ) -> None:
        """Initialize the unit of work.

        Args:
            session_factory: Callable producing a new AsyncSession per scope.
            repo_factories: Per-port overrides merged over the defaults.
        """
        self._make_session = session_factory
        self._factories: dict[type[Any], RepoFactory] = default_repo_factories()
        if repo_factories:
            self._factories.update(repo_factories)
        self._session: AsyncSession | None = None
        self._built: dict[type[Any], Any] = {}
        self._outcome: Literal["committed", "rolled_back"] | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        """Open the session for this scope.

        Raises:
            RuntimeError: If the scope is already open.
        """
        if self._session is not None:
            raise RuntimeError("unit of work is already open; it cannot be nested")
        self._session = self._make_session()
        self._outcome = None
        self._built = {}
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        session, self._session = self._session, None
        self._built = {}
        if session is None:
            return None
        try:
            if exc_type is not None and self._outcome is None:
                await session.rollback()
                self._outcome = "rolled_back"
        finally:
            await session.close()
        return None

    def _require_session(self, action: str) -> AsyncSession:
        if self._session is None:
            raise RuntimeError(f"{action} requires an open unit of work (use 'async with uow:')")
        return self._session

    async def commit(self) -> None:
        """Commit once; later calls in the same scope do nothing.

        Raises:
            RuntimeError: Outside an open scope.
        """
        session = self._require_session("commit()")
        if self._outcome is not None:
            return
        await session.commit()
        self._outcome = "committed"

    async def rollback(self) -> None:
        """Roll back once; a no-op outside a scope or after commit."""
        if self._session is None or self._outcome is not None:
            return
        await self._session.rollback()
        self._outcome = "rolled_back"

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the repository for ``repo_type``, built lazily per scope.

        Raises:
            RuntimeError: Outside an open scope.
            KeyError: If no factory is registered for ``repo_type``.
        """
        session = self._require_session("get_repository()")
        repo = self._built.get(repo_type)
        if repo is None:
            if repo_type not in self._factories:
                raise KeyError(f"no repository factory registered for {repo_type!r}")
            repo = self._factories[repo_type](session)
            self._built[repo_type] = repo
        return repo
