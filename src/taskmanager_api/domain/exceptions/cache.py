# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Cache tier exceptions."""

from __future__ import annotations

from taskmanager_api.domain.exceptions.base import DomainError


class CacheUnavailableError(DomainError):
    """Talking to the cache tier failed (network, timeout, or serialization)."""

    code = "CACHE_UNAVAILABLE"
