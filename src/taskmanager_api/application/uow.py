# src/taskmanager_api/application/uow.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Unit of Work port.

Use cases coordinate repository calls inside one transactional scope. This
module names that scope and a helper that commits on success and rolls back
on failure. It knows nothing about SQLAlchemy; the adapter carries the session
and gives it to repositories explicitly.

Layer:
    application
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from contextlib import AbstractAsyncContextManager
from types import TracebackType
from typing import Any, Protocol, TypeVar, runtime_checkable

R = TypeVar("R")


@runtime_checkable
class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """Transactional scope resolving repositories by port type."""

    async def __aenter__(self) -> UnitOfWork:
        raise NotImplementedError

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool | None:
        raise NotImplementedError

    async def commit(self) -> None:
        """Make the scope's writes durable."""
        raise NotImplementedError

    async def rollback(self) -> None:
        """Discard the scope's writes."""
        raise NotImplementedError

    def get_repository(self, repo_type: type[Any]) -> Any:
        """Return the repository registered for ``repo_type`` (e.g. ``TaskRepository``)."""
        raise NotImplementedError


async def run_in_uow(  # noqa: UP047
    uow: UnitOfWork,
    fn: Callable[[UnitOfWork], Awaitable[R]],
) -> R:
    """Run ``fn`` inside ``uow``; commit if it returns, roll back if it raises.

    The exception from ``fn`` is re-raised unchanged after the rollback.
    """
    async with uow as tx:
        try:
            result = await fn(tx)
        except Exception:
            await tx.rollback()
            raise
        await tx.commit()
        return result
