# src/taskmanager_api/adapters/repositories/base_repository.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""
BaseRepository: shared mechanics for SQLAlchemy repositories.

Purpose:
      * Deterministic newest-first ordering (timestamp DESC + PK DESC tie-break).
      * Fetch helpers (optional, all) and a pre-pagination count.
      * Affected-row checks that turn "zero rows" into NotFoundError.

Layer: adapters / repositories

Notes:
    * No business logic, no domain decisions.
    * Repositories never commit; the unit of work owns transactions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.engine import CursorResult
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager_api.domain.exceptions.tasks import NotFoundError

TModel = TypeVar("TModel")


class BaseRepository(Generic[TModel]):  # noqa: UP046
    """Base class for all SQLAlchemy repositories."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: Async SQLAlchemy session owned by the current unit of work.
        """
        self._session: AsyncSession = session

    @staticmethod
    def utc_now() -> datetime:
        """Return current UTC time with timezone info."""
        return datetime.now(UTC)

    @staticmethod
    def order_by_newest(stmt: Select[Any], created_col: Any, pk_col: Any) -> Select[Any]:
        """Apply deterministic newest-first ordering.

        The resulting query orders by:

            created_at DESC, pk DESC

        The PK tie-break gives a total order when timestamps collide.
        """
        return stmt.order_by(created_col.desc(), pk_col.desc())

    @staticmethod
    def paginate(stmt: Select[Any], *, page: int, limit: int) -> Select[Any]:
        """Apply ``OFFSET (page - 1) * limit LIMIT limit``."""
        return stmt.offset((page - 1) * limit).limit(limit)

    async def count(self, stmt: Select[Any]) -> int:
        """Return the number of rows ``stmt`` would yield, ignoring ordering/paging."""
        total = await self._session.scalar(select(func.count()).select_from(stmt.subquery()))
        return int(total or 0)

    async def fetch_optional(self, stmt: Select[Any]) -> TModel | None:
        """Execute a statement and return zero or one row."""
        res = await self._session.execute(stmt)
        return res.scalars().first()

    async def fetch_all(self, stmt: Select[Any]) -> list[TModel]:
        """Execute a statement and return all rows as a list."""
        res = await self._session.execute(stmt)
        return list(res.scalars().all())

    async def execute_expecting_rows(self, stmt: Any, *, not_found: str) -> int:
        """Execute a DML statement and require at least one affected row.

        Args:
            stmt: UPDATE statement.
            not_found: Message for the NotFoundError raised on zero rows.

        Returns:
            The affected row count.

        Raises:
            NotFoundError: If the statement matched no rows.
        """
        result: CursorResult[Any] = await self._session.execute(stmt)  # type: ignore[assignment]
        if result.rowcount == 0:
            raise NotFoundError(not_found)
        return result.rowcount
