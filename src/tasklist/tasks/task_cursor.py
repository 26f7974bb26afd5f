# src/tasklist/tasks/task_cursor.py

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator, Sequence
from typing import Any

from ..core.ports import ChangeNotifierPort, ChangeObserver
from .task_errors import translate_store_error
from .task_models import ConnectionMode, Task
from .task_store import TaskDatabase
from .task_uris import TaskUri

logger = logging.getLogger(__name__)


class TaskCursor:
    """
    Result set returned by TaskProvider.query().

    Rows are pulled from SQLite lazily. The cursor remembers the URI it was produced for
    (notification_uri); observers registered through it hear about changes to that URI and
    anything below it. requery() re-runs the same statement to pick up the new state.
    """

    def __init__(
        self,
        database: TaskDatabase,
        sql: str,
        params: Sequence[Any],
        *,
        notification_uri: TaskUri,
        notifier: ChangeNotifierPort,
    ) -> None:
        self._database = database
        self._sql = sql
        self._params = tuple(params)
        self._notifier = notifier
        self._observers: list[ChangeObserver] = []
        self._closed = False
        self.notification_uri = notification_uri
        self._cursor = self._execute()

    def _execute(self) -> sqlite3.Cursor:
        conn = self._database.get_connection(ConnectionMode.READ)
        try:
            return conn.execute(self._sql, self._params)
        except sqlite3.Error as exc:
            raise translate_store_error(exc, f"query {self.notification_uri}") from exc

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"cursor for {self.notification_uri} is closed")

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def columns(self) -> tuple[str, ...]:
        return tuple(d[0] for d in (self._cursor.description or ()))

    def fetchone(self) -> sqlite3.Row | None:
        self._check_open()
        try:
            return self._cursor.fetchone()
        except sqlite3.Error as exc:
            raise translate_store_error(exc, f"fetch {self.notification_uri}") from exc

    def fetchall(self) -> list[sqlite3.Row]:
        self._check_open()
        try:
            return self._cursor.fetchall()
        except sqlite3.Error as exc:
            raise translate_store_error(exc, f"fetch {self.notification_uri}") from exc

    def __iter__(self) -> Iterator[sqlite3.Row]:
        while True:
            row = self.fetchone()
            if row is None:
                return
            yield row

    def tasks(self) -> list[Task]:
        """Remaining rows as Task objects (needs all columns in the projection)."""
        return [Task.from_row(r) for r in self.fetchall()]

    def requery(self) -> None:
        self._check_open()
        old, self._cursor = self._cursor, self._execute()
        old.close()

    def register_observer(self, observer: ChangeObserver) -> None:
        self._check_open()
        self._notifier.register_observer(
            self.notification_uri, observer, notify_for_descendants=True
        )
        self._observers.append(observer)

    def unregister_observer(self, observer: ChangeObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)
            self._notifier.unregister_observer(observer)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        for observer in self._observers:
            self._notifier.unregister_observer(observer)
        self._observers.clear()
        try:
            self._cursor.close()
        except sqlite3.Error:
            logger.debug("Cursor close failed uri=%s", self.notification_uri, exc_info=True)

    def __enter__(self) -> TaskCursor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
