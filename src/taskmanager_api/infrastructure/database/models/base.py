# src/taskmanager_api/infrastructure/database/models/base.py
# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Shared ORM declarations for the task and team tables.

``metadata`` carries the constraint naming scheme used by migrations and the
optional ``DB_SCHEMA``. The mixins contribute the columns every row shares:
a store-assigned bigint key, the external UUID, audit timestamps in UTC and
the soft-delete marker.
"""

from __future__ import annotations

import os
import uuid
from datetime import UTC, datetime

from sqlalchemy import BigInteger, Integer, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

__all__ = [
    "DEFAULT_DB_SCHEMA",
    "metadata",
    "BigIntPK",
    "Base",
    "IdMixin",
    "ExternalIdMixin",
    "TimestampMixin",
    "SoftDeleteMixin",
    "now_utc",
]

#: Schema holding the tables; ``None`` uses the connection's search path.
DEFAULT_DB_SCHEMA: str | None = os.getenv("DB_SCHEMA") or None

metadata = MetaData(
    schema=DEFAULT_DB_SCHEMA,
    naming_convention={
        "pk": "pk_%(table_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "ix": "ix_%(column_0_label)s",
    },
)

# BIGSERIAL on PostgreSQL; SQLite only autoincrements INTEGER PRIMARY KEY.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")


def now_utc() -> datetime:
    return datetime.now(UTC)


def _utc_column(*, nullable: bool = False, refresh: bool = False) -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        nullable=nullable,
        default=None if nullable else now_utc,
        onupdate=now_utc if refresh else None,
        server_default=None if nullable else func.now(),
    )


class Base(DeclarativeBase):
    metadata = metadata


class IdMixin:
    """Surrogate key assigned by the database on insert."""

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)


class ExternalIdMixin:
    """UUID generated by the domain and exposed over HTTP."""

    uuid: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, unique=True)


class TimestampMixin:
    created_at: Mapped[datetime] = _utc_column()
    updated_at: Mapped[datetime] = _utc_column(refresh=True)


class SoftDeleteMixin:
    """Rows with ``deleted_at`` set are hidden from every query."""

    deleted_at: Mapped[datetime | None] = _utc_column(nullable=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
