# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Root of the domain exception tree.

Each subclass pins a stable ``code``; the HTTP layer picks the status from
the class and copies ``code``, ``message`` and ``details`` into the error
envelope.
"""
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details or {}
