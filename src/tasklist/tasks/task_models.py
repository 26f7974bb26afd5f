# src/tasklist/tasks/task_models.py

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Any

TABLE_NAME = "tasks"


class TaskColumns:
    """Column names of the tasks table."""

    ID = "id"
    DESCRIPTION = "description"
    PRIORITY = "priority"

    ALL: tuple[str, ...] = (ID, DESCRIPTION, PRIORITY)
    # Columns a caller may write; the id is assigned by the store.
    WRITABLE: frozenset[str] = frozenset({DESCRIPTION, PRIORITY})


class Priority(IntEnum):
    """
    Task priority.

    Lower number = more urgent; the store enforces the same range with a CHECK constraint.
    """

    HIGH = 1
    MEDIUM = 2
    LOW = 3

    @classmethod
    def coerce(cls, raw: Any) -> Priority:
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            valid = ", ".join(str(p.value) for p in cls)
            raise ValueError(f"priority must be one of {valid}, got {raw!r}") from None


class ConnectionMode(StrEnum):
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    description: str
    priority: Priority

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Task:
        return cls(
            id=int(row[TaskColumns.ID]),
            description=str(row[TaskColumns.DESCRIPTION] or ""),
            priority=Priority(int(row[TaskColumns.PRIORITY])),
        )
