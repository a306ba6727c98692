# tests/unit/adapters/repositories/test_task_cache_keys.py
from __future__ import annotations

from taskmanager_api.adapters.repositories.task_cache_keys import (
    LIST_CACHE_PREFIX,
    list_cache_key,
)
from taskmanager_api.domain.entities.task import TaskStatus


def test_key_format() -> None:
    assert list_cache_key(None, 1, 10) == "tasks:list:status=all:page=1:limit=10"
    assert (
        list_cache_key(TaskStatus.IN_PROGRESS, 3, 25)
        == "tasks:list:status=in_progress:page=3:limit=25"
    )


def test_key_is_deterministic() -> None:
    assert list_cache_key(TaskStatus.DONE, 2, 5) == list_cache_key(TaskStatus.DONE, 2, 5)


def test_any_argument_changes_the_key() -> None:
    base = list_cache_key(TaskStatus.TODO, 1, 10)

    assert list_cache_key(None, 1, 10) != base
    assert list_cache_key(TaskStatus.DONE, 1, 10) != base
    assert list_cache_key(TaskStatus.TODO, 2, 10) != base
    assert list_cache_key(TaskStatus.TODO, 1, 20) != base


def test_every_key_shares_the_prefix() -> None:
    for status in (None, *TaskStatus):
        assert list_cache_key(status, 1, 10).startswith(LIST_CACHE_PREFIX)
