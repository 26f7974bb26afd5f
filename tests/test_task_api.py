# tests/test_task_api.py

from __future__ import annotations

import pytest

from tasklist.tasks import task_api
from tasklist.tasks.task_models import Priority
from tasklist.tasks.task_provider import TaskProvider


def test_add_list_get(provider: TaskProvider) -> None:
    low = task_api.add_task(provider, description="  sweep  ", priority=3)
    high = task_api.add_task(provider, description="call mom", priority=Priority.HIGH)
    mid = task_api.add_task(provider, description="read")

    tasks = task_api.list_tasks(provider)
    assert [t.id for t in tasks] == [high, mid, low]
    assert tasks[-1].description == "sweep"
    assert tasks[1].priority is Priority.MEDIUM

    only_urgent = task_api.list_tasks(provider, max_priority=Priority.HIGH)
    assert [t.id for t in only_urgent] == [high]

    got = task_api.get_task(provider, mid)
    assert got is not None and got.description == "read"
    assert task_api.get_task(provider, 999) is None


def test_add_task_validates_input(provider: TaskProvider) -> None:
    with pytest.raises(ValueError):
        task_api.add_task(provider, description="   ", priority=1)
    with pytest.raises(ValueError, match="priority must be one of"):
        task_api.add_task(provider, description="x", priority=5)
    with pytest.raises(ValueError):
        task_api.add_task(provider, description="x", priority="urgent")
    assert task_api.list_tasks(provider) == []


def test_update_helpers_and_delete(provider: TaskProvider) -> None:
    task_id = task_api.add_task(provider, description="draft", priority=2)

    assert task_api.set_priority(provider, task_id, 1) is True
    assert task_api.set_description(provider, task_id, "final") is True
    task = task_api.get_task(provider, task_id)
    assert task is not None
    assert (task.description, task.priority) == ("final", Priority.HIGH)

    assert task_api.set_priority(provider, 404, 1) is False
    assert task_api.delete_task(provider, task_id) is True
    assert task_api.delete_task(provider, task_id) is False


def test_clear_tasks(provider: TaskProvider) -> None:
    for i in range(4):
        task_api.add_task(provider, description=f"t{i}", priority=2)
    assert task_api.clear_tasks(provider) == 4
    assert task_api.clear_tasks(provider) == 0
