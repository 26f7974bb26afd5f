# src/tasklist/tasks/task_provider.py

"""
URI-addressed access to the tasks table.

TaskProvider turns (operation, URI) into a SQL statement:
- the URI is classified once (task_uris.classify),
- the handler is looked up in a table keyed by (operation, resource kind),
- a missing entry means the operation does not apply to that URI -> UnsupportedResource.

Item URIs always win over caller filters: query/update/delete on tasks/<id> replace
the selection with "id = ?", whatever the caller passed.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable, Mapping, Sequence
from enum import Enum, StrEnum
from typing import Any

from ..core.ports import ChangeNotifierPort, ChangeObserver
from .task_cursor import TaskCursor
from .task_errors import ConstraintViolation, UnsupportedResource, translate_store_error
from .task_models import TABLE_NAME, TaskColumns
from .task_store import TaskDatabase, WriteResult
from .task_uris import (
    DEFAULT_AUTHORITY,
    PATH_TASKS,
    ResourceKind,
    TaskUri,
    UriMatch,
    classify,
    content_uri,
)

logger = logging.getLogger(__name__)

MIME_DIR_PREFIX = "vnd.cursor.dir"
MIME_ITEM_PREFIX = "vnd.cursor.item"


class Operation(StrEnum):
    INSERT = "insert"
    QUERY = "query"
    UPDATE = "update"
    DELETE = "delete"
    GET_TYPE = "get_type"


Handler = Callable[..., Any]


class TaskProvider:
    """CRUD over the tasks table, addressed by TaskUri, with change notifications."""

    def __init__(
        self,
        database: TaskDatabase,
        notifier: ChangeNotifierPort,
        *,
        authority: str = DEFAULT_AUTHORITY,
    ) -> None:
        self._database = database
        self._notifier = notifier
        self._authority = authority

        # Absent pairs are unsupported on purpose (no insert on an item, no bulk update).
        self._handlers: dict[tuple[Operation, ResourceKind], Handler] = {
            (Operation.INSERT, ResourceKind.DIR): self._insert_dir,
            (Operation.QUERY, ResourceKind.DIR): self._query_dir,
            (Operation.QUERY, ResourceKind.ITEM): self._query_item,
            (Operation.UPDATE, ResourceKind.ITEM): self._update_item,
            (Operation.DELETE, ResourceKind.DIR): self._delete_dir,
            (Operation.DELETE, ResourceKind.ITEM): self._delete_item,
            (Operation.GET_TYPE, ResourceKind.DIR): self._type_dir,
            (Operation.GET_TYPE, ResourceKind.ITEM): self._type_item,
        }

    @property
    def authority(self) -> str:
        return self._authority

    def content_uri(self) -> TaskUri:
        return content_uri(self._authority)

    def item_uri(self, task_id: int) -> TaskUri:
        return self.content_uri().with_appended_id(task_id)

    def parse_uri(self, raw: TaskUri | str) -> TaskUri:
        return TaskUri.parse(raw, authority=self._authority)

    # ---- public API ----

    def insert(self, uri: TaskUri | str, values: Mapping[str, Any]) -> TaskUri:
        handler, parsed, match = self._route(Operation.INSERT, uri)
        return handler(parsed, match, values)

    def query(
        self,
        uri: TaskUri | str,
        projection: Sequence[str] | None = None,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
        sort_order: str | None = None,
    ) -> TaskCursor:
        handler, parsed, match = self._route(Operation.QUERY, uri)
        return handler(parsed, match, projection, selection, selection_args, sort_order)

    def update(
        self,
        uri: TaskUri | str,
        values: Mapping[str, Any],
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        handler, parsed, match = self._route(Operation.UPDATE, uri)
        return handler(parsed, match, values, selection, selection_args)

    def delete(
        self,
        uri: TaskUri | str,
        selection: str | None = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        handler, parsed, match = self._route(Operation.DELETE, uri)
        return handler(parsed, match, selection, selection_args)

    def get_type(self, uri: TaskUri | str) -> str:
        handler, parsed, match = self._route(Operation.GET_TYPE, uri)
        return handler(parsed, match)

    def register_observer(
        self,
        uri: TaskUri | str,
        observer: ChangeObserver,
        *,
        notify_for_descendants: bool = True,
    ) -> None:
        self._notifier.register_observer(
            self.parse_uri(uri), observer, notify_for_descendants=notify_for_descendants
        )

    def unregister_observer(self, observer: ChangeObserver) -> bool:
        return self._notifier.unregister_observer(observer)

    # ---- routing ----

    def _route(self, op: Operation, raw: TaskUri | str) -> tuple[Handler, TaskUri, UriMatch]:
        uri = self.parse_uri(raw)
        match = classify(uri, authority=self._authority)
        handler = self._handlers.get((op, match.kind)) if match is not None else None
        if handler is None or match is None:
            logger.debug("Unsupported %s on uri=%s match=%s", op.value, uri, match)
            raise UnsupportedResource(uri)
        return handler, uri, match

    # ---- handlers ----

    def _insert_dir(self, uri: TaskUri, match: UriMatch, values: Mapping[str, Any]) -> TaskUri:
        row = self._prepare_values(values)
        if row:
            cols = ", ".join(row)
            placeholders = ", ".join("?" for _ in row)
            sql = f"INSERT INTO {TABLE_NAME} ({cols}) VALUES ({placeholders})"
        else:
            sql = f"INSERT INTO {TABLE_NAME} DEFAULT VALUES"

        result = self._write(sql, list(row.values()), f"insert into {uri}")
        rowid = result.lastrowid
        if rowid is None:
            raise RuntimeError("SQLite did not return lastrowid for tasks insert")

        item = uri.with_appended_id(rowid)
        logger.debug("Task inserted uri=%s", item)
        self._notifier.notify_change(item, uri)
        return item

    def _query_dir(
        self,
        uri: TaskUri,
        match: UriMatch,
        projection: Sequence[str] | None,
        selection: str | None,
        selection_args: Sequence[Any],
        sort_order: str | None,
    ) -> TaskCursor:
        return self._select(uri, projection, selection, selection_args, sort_order)

    def _query_item(
        self,
        uri: TaskUri,
        match: UriMatch,
        projection: Sequence[str] | None,
        selection: str | None,
        selection_args: Sequence[Any],
        sort_order: str | None,
    ) -> TaskCursor:
        selection, selection_args = self._id_selection(match)
        return self._select(uri, projection, selection, selection_args, sort_order)

    def _update_item(
        self,
        uri: TaskUri,
        match: UriMatch,
        values: Mapping[str, Any],
        selection: str | None,
        selection_args: Sequence[Any],
    ) -> int:
        row = self._prepare_values(values)
        if not row:
            raise ValueError(f"update of {uri} needs at least one column value")

        selection, selection_args = self._id_selection(match)
        assignments = ", ".join(f"{col} = ?" for col in row)
        sql = f"UPDATE {TABLE_NAME} SET {assignments} WHERE {selection}"
        result = self._write(sql, [*row.values(), *selection_args], f"update {uri}")

        count = max(0, result.rowcount)
        logger.debug("Task update uri=%s rows=%d", uri, count)
        if count:
            self._notifier.notify_change(uri)
        return count

    def _delete_dir(
        self,
        uri: TaskUri,
        match: UriMatch,
        selection: str | None,
        selection_args: Sequence[Any],
    ) -> int:
        return self._delete_where(uri, selection, selection_args)

    def _delete_item(
        self,
        uri: TaskUri,
        match: UriMatch,
        selection: str | None,
        selection_args: Sequence[Any],
    ) -> int:
        selection, selection_args = self._id_selection(match)
        return self._delete_where(uri, selection, selection_args)

    def _type_dir(self, uri: TaskUri, match: UriMatch) -> str:
        return f"{MIME_DIR_PREFIX}/{self._authority}/{PATH_TASKS}"

    def _type_item(self, uri: TaskUri, match: UriMatch) -> str:
        return f"{MIME_ITEM_PREFIX}/{self._authority}/{PATH_TASKS}"

    # ---- low-level helpers ----

    @staticmethod
    def _id_selection(match: UriMatch) -> tuple[str, tuple[Any, ...]]:
        return f"{TaskColumns.ID} = ?", (int(match.task_id or 0),)

    @staticmethod
    def _prepare_values(values: Mapping[str, Any] | None) -> dict[str, Any]:
        values = dict(values or {})
        if TaskColumns.ID in values:
            raise ConstraintViolation(f"{TaskColumns.ID} is assigned by the store and cannot be written")
        unknown = sorted(k for k in values if k not in TaskColumns.WRITABLE)
        if unknown:
            raise ConstraintViolation(f"unknown task columns: {', '.join(unknown)}")
        return {k: (v.value if isinstance(v, Enum) else v) for k, v in values.items()}

    def _select(
        self,
        uri: TaskUri,
        projection: Sequence[str] | None,
        selection: str | None,
        selection_args: Sequence[Any],
        sort_order: str | None,
    ) -> TaskCursor:
        cols = ", ".join(projection) if projection else "*"
        sql = f"SELECT {cols} FROM {TABLE_NAME}"
        if selection:
            sql += f" WHERE {selection}"
        if sort_order:
            sql += f" ORDER BY {sort_order}"
        return TaskCursor(
            self._database,
            sql,
            selection_args,
            notification_uri=uri,
            notifier=self._notifier,
        )

    def _delete_where(
        self, uri: TaskUri, selection: str | None, selection_args: Sequence[Any]
    ) -> int:
        # "WHERE 1" keeps rowcount exact when the caller deletes everything.
        where = selection if selection else "1"
        sql = f"DELETE FROM {TABLE_NAME} WHERE {where}"
        result = self._write(sql, list(selection_args), f"delete {uri}")

        count = max(0, result.rowcount)
        logger.debug("Task delete uri=%s rows=%d", uri, count)
        if count:
            self._notifier.notify_change(uri)
        return count

    def _write(self, sql: str, params: Sequence[Any], action: str) -> WriteResult:
        try:
            return self._database.execute_write(sql, params)
        except sqlite3.Error as exc:
            logger.info("%s failed: %s", action, exc)
            raise translate_store_error(exc, action) from exc
