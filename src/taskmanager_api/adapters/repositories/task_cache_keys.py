# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Key space for cached task listings.

Every list key lives under :data:`LIST_CACHE_PREFIX`, so the whole space can
be dropped with one prefix scan without tracking individual keys::

    tasks:list:status=<status|all>:page=<N>:limit=<N>
"""

from __future__ import annotations

from typing import Final

from taskmanager_api.domain.entities.task import TaskStatus

LIST_CACHE_PREFIX: Final[str] = "tasks:list:"

#: Status segment used when the listing is not filtered.
ALL_STATUSES: Final[str] = "all"


def list_cache_key(status: TaskStatus | None, page: int, limit: int) -> str:
    """Return the cache key for one ``list_paginated`` query.

    Identical arguments always yield the same key; changing any argument
    changes the key.
    """
    status_segment = ALL_STATUSES if status is None else TaskStatus(status).value
    return f"{LIST_CACHE_PREFIX}status={status_segment}:page={int(page)}:limit={int(limit)}"
