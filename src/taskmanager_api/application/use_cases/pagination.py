# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Page/limit normalization shared by the list use cases."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ListLimits:
    """Configured page-size policy for one listing."""

    default_limit: int
    max_limit: int

    def normalize(self, page: int, limit: int) -> tuple[int, int]:
        """Return ``(page, limit)`` with policy applied.

        ``page < 1`` becomes 1, ``limit <= 0`` becomes the default, and a limit
        above the maximum is clamped to it.
        """
        if page < 1:
            page = 1
        if limit <= 0:
            limit = self.default_limit
        if limit > self.max_limit:
            limit = self.max_limit
        return page, limit
