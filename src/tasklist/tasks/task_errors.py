# src/tasklist/tasks/task_errors.py

"""
Errors raised by the task data layer.

- UnsupportedResource: the URI does not address anything the requested operation accepts.
  Always a caller bug; the data layer never catches it.
- StoreError: SQLite failed. ConstraintViolation covers integrity failures (NOT NULL, CHECK,
  unknown or read-only columns); StoreUnavailable covers everything else (I/O, locking,
  corruption, missing schema). The sqlite3 exception is chained as __cause__.
"""

from __future__ import annotations

import sqlite3


class TaskListError(Exception):
    """Base class for tasklist errors."""


class UnsupportedResource(TaskListError, ValueError):
    def __init__(self, uri: object) -> None:
        super().__init__(f"Unknown uri: {uri}")
        self.uri = uri


class StoreError(TaskListError):
    """The underlying store rejected or failed the statement."""


class ConstraintViolation(StoreError):
    pass


class StoreUnavailable(StoreError):
    pass


def translate_store_error(exc: BaseException, action: str) -> StoreError:
    """Map a sqlite3/OS error onto the StoreError hierarchy (caller does `raise ... from exc`)."""
    if isinstance(exc, sqlite3.IntegrityError):
        return ConstraintViolation(f"{action} failed: {exc}")
    return StoreUnavailable(f"{action} failed: {exc}")
