# src/tasklist/tasks/task_api.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import TaskResourcePort
from .task_models import Priority, Task, TaskColumns

logger = logging.getLogger(__name__)

DEFAULT_SORT = f"{TaskColumns.PRIORITY} ASC, {TaskColumns.ID} ASC"


def add_task(provider: TaskResourcePort, *, description: str, priority: Any = Priority.MEDIUM) -> int:
    """
    Convenience helper: insert one task and return its id.
    Validates input before it reaches the store.
    """
    if not description or not description.strip():
        raise ValueError("description is required")
    prio = Priority.coerce(priority)

    uri = provider.insert(
        provider.content_uri(),
        {
            TaskColumns.DESCRIPTION: description.strip(),
            TaskColumns.PRIORITY: prio,
        },
    )
    task_id = uri.parse_id()
    logger.info("Task added id=%s priority=%s", task_id, int(prio))
    return task_id


def list_tasks(provider: TaskResourcePort, *, max_priority: Any = None) -> list[Task]:
    """All tasks, most urgent first. max_priority=Priority.HIGH keeps only high-priority ones."""
    selection: str | None = None
    args: tuple[Any, ...] = ()
    if max_priority is not None:
        selection = f"{TaskColumns.PRIORITY} <= ?"
        args = (int(Priority.coerce(max_priority)),)

    with provider.query(
        provider.content_uri(),
        projection=TaskColumns.ALL,
        selection=selection,
        selection_args=args,
        sort_order=DEFAULT_SORT,
    ) as cursor:
        return cursor.tasks()


def get_task(provider: TaskResourcePort, task_id: int) -> Task | None:
    with provider.query(provider.content_uri().with_appended_id(task_id)) as cursor:
        row = cursor.fetchone()
        return Task.from_row(row) if row is not None else None


def set_priority(provider: TaskResourcePort, task_id: int, priority: Any) -> bool:
    uri = provider.content_uri().with_appended_id(task_id)
    return provider.update(uri, {TaskColumns.PRIORITY: Priority.coerce(priority)}) > 0


def set_description(provider: TaskResourcePort, task_id: int, description: str) -> bool:
    if not description or not description.strip():
        raise ValueError("description is required")
    uri = provider.content_uri().with_appended_id(task_id)
    return provider.update(uri, {TaskColumns.DESCRIPTION: description.strip()}) > 0


def delete_task(provider: TaskResourcePort, task_id: int) -> bool:
    return provider.delete(provider.content_uri().with_appended_id(task_id)) > 0


def clear_tasks(provider: TaskResourcePort) -> int:
    """Delete every task. Returns the number of rows removed."""
    count = provider.delete(provider.content_uri())
    logger.info("Tasks cleared rows=%d", count)
    return count
