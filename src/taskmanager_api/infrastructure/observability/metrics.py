# Copyright (c) Taskmanager.
# SPDX-License-Identifier: MIT
"""Prometheus collectors for readiness and the task list cache.

Collectors are fetched through ``get_*`` accessors instead of module
globals. Each accessor returns the collector registered on whatever
``prometheus_client.REGISTRY`` is active at call time, so a test that swaps
the registry, or a reloader that re-imports this module, never hits a
duplicate-registration error. Histograms share one explicit bucket set.

Example:
    get_cache_operations_total().labels(operation="get", result="hit").inc()
    get_readyz_db_latency_seconds().observe(0.012)
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final, TypeVar

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_log = logging.getLogger(__name__)

# Seconds; 1ms to 2.5s covers a local Redis and a pooled Postgres.
_BUCKETS: Final[tuple[float, ...]] = (
    0.001,
    0.0025,
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
)

TCollector = TypeVar("TCollector", Counter, Histogram)

# Collectors keyed by metric name within the currently-active registry.
_registry_id: int | None = None
_collectors: dict[str, Counter | Histogram] = {}
_lock = threading.RLock()




def _ensure_registry() -> None:
    """Drop cached collectors if the active registry changed (common in tests)."""
    global _registry_id
    with _lock:
        rid = id(prom.REGISTRY)
        if _registry_id != rid:
            _collectors.clear()
            _registry_id = rid


def _lookup_existing(name: str, kind: type[TCollector]) -> TCollector | None:
    """Return a collector already registered on the active registry, if any."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            col = mapping.get(name)
            if isinstance(col, kind):
                return col
    return None


def _get_or_create(
    kind: type[TCollector],
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
    buckets: tuple[float, ...] | None = None,
) -> TCollector:
    """Return the collector called ``name`` on the active registry, creating it once.

    A name already registered elsewhere (e.g. by a previous import) is
    adopted rather than re-registered.
    """
    _ensure_registry()
    with _lock:
        cached = _collectors.get(name)
        if isinstance(cached, kind):
            return cached

        existing = _lookup_existing(name, kind)
        if existing is not None:
            _collectors[name] = existing
            return existing

        try:
            if kind is Histogram:
                created = Histogram(
                    name,
                    help_text,
                    labelnames,
                    buckets=buckets or _BUCKETS,
                    registry=prom.REGISTRY,
                )
            else:
                created = Counter(name, help_text, labelnames, registry=prom.REGISTRY)
        except ValueError as exc:
            if "Duplicated timeseries" in str(exc):
                again = _lookup_existing(name, kind)
                if again is not None:
                    _collectors[name] = again
                    return again
            _log.exception("Failed to register Prometheus collector %s", name)
            raise

        _collectors[name] = created
        return created  # type: ignore[return-value]


# readiness


def get_readyz_db_latency_seconds() -> Histogram:
    """Return the DB readiness latency histogram."""
    return _get_or_create(
        Histogram,
        "readyz_db_latency_seconds",
        "Latency of database readiness probe (seconds).",
    )


def get_readyz_redis_latency_seconds() -> Histogram:
    """Return the Redis readiness latency histogram."""
    return _get_or_create(
        Histogram,
        "readyz_redis_latency_seconds",
        "Latency of Redis readiness probe (seconds).",
    )


# cache


def get_cache_operation_duration_seconds() -> Histogram:
    """Return histogram for cache store round-trips.

    Labels:
        operation: ``get`` / ``set`` / ``delete`` / ``delete_by_prefix``.
        result: ``hit`` / ``miss`` / ``ok`` / ``error``.
    """
    return _get_or_create(
        Histogram,
        "cache_operation_duration_seconds",
        "Latency (seconds) of cache store operations.",
        labelnames=("operation", "result"),
    )


def get_cache_operations_total() -> Counter:
    """Return counter for cache store operations (same labels as the histogram)."""
    return _get_or_create(
        Counter,
        "cache_operations_total",
        "Total cache store operations by type and result.",
        labelnames=("operation", "result"),
    )


def get_task_list_cache_events_total() -> Counter:
    """Return counter for decisions taken by the task list cache.

    Labels:
        event: ``hit`` / ``miss`` / ``get_error`` / ``set_error`` /
            ``invalidated`` / ``invalidate_error``.
    """
    return _get_or_create(
        Counter,
        "task_list_cache_events_total",
        "Task list cache decisions (hits, misses, invalidations, failures).",
        labelnames=("event",),
    )
