"""ORM models; importing this package registers every table on ``metadata``."""

from __future__ import annotations

from taskmanager_api.infrastructure.database.models.base import Base, metadata
from taskmanager_api.infrastructure.database.models.tasks import TaskRow, TeamRow

__all__ = ["Base", "TaskRow", "TeamRow", "metadata"]
