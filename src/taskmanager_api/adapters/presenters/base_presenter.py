# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Presenter utilities and canonical envelope helpers.

Purpose:
    Thin helpers used by routers to shape HTTP bodies consistently.

Responsibilities:
    * Build SuccessEnvelope instances.
    * Build PageBody instances, computing ``total_pages`` from the total and
      the effective page size.

Layer:
    adapters/presenters
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from taskmanager_api.adapters.schemas.http.envelopes import PageBody, SuccessEnvelope


def total_pages(total_items: int, items_per_page: int) -> int:
    """Return ``ceil(total_items / items_per_page)``, never less than 1."""
    if items_per_page <= 0:
        return 1
    return max(1, math.ceil(total_items / items_per_page))


class BasePresenter[T]:
    """Base presenter for HTTP response shaping.

    Business decisions stay in the use cases; presenters only map entities
    onto schemas and wrap them in envelopes.
    """

    def present_success(self, data: T) -> SuccessEnvelope[T]:
        """Wrap ``data`` in ``{"data": ...}``."""
        return SuccessEnvelope(data=data)

    def present_page(
        self,
        items: Sequence[T],
        *,
        page: int,
        limit: int,
        total_items: int,
    ) -> SuccessEnvelope[PageBody[T]]:
        """Wrap one page of items, with totals, in the success envelope."""
        body = PageBody(
            page=page,
            items_per_page=limit,
            total_items=total_items,
            total_pages=total_pages(total_items, limit),
            items=list(items),
        )
        return SuccessEnvelope(data=body)
