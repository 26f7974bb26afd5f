# src/tasklist/core/ports.py

"""
Ports (interfaces) used by the task layer.

The provider depends on Protocols instead of concrete implementations,
so tests can swap in a recording notifier and the CLI can talk to any provider.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from ..tasks.task_cursor import TaskCursor
    from ..tasks.task_uris import TaskUri

ChangeObserver = Callable[["TaskUri"], None]
# Called with the changed URI; no payload, observers re-query.


class ChangeNotifierPort(Protocol):
    def register_observer(
            self,
            uri: TaskUri,
            observer: ChangeObserver,
            *,
            notify_for_descendants: bool = True,
    ) -> None: ...

    def unregister_observer(self, observer: ChangeObserver) -> bool: ...

    def notify_change(self, *uris: TaskUri) -> int: ...


class TaskResourcePort(Protocol):
    """URI-addressed CRUD surface (implemented by TaskProvider)."""

    def insert(self, uri: TaskUri | str, values: Mapping[str, Any]) -> TaskUri: ...

    def query(
            self,
            uri: TaskUri | str,
            projection: Sequence[str] | None = None,
            selection: str | None = None,
            selection_args: Sequence[Any] = (),
            sort_order: str | None = None,
    ) -> TaskCursor: ...

    def update(
            self,
            uri: TaskUri | str,
            values: Mapping[str, Any],
            selection: str | None = None,
            selection_args: Sequence[Any] = (),
    ) -> int: ...

    def delete(
            self,
            uri: TaskUri | str,
            selection: str | None = None,
            selection_args: Sequence[Any] = (),
    ) -> int: ...

    def get_type(self, uri: TaskUri | str) -> str: ...

    def content_uri(self) -> TaskUri: ...

    def register_observer(
            self,
            uri: TaskUri | str,
            observer: ChangeObserver,
            *,
            notify_for_descendants: bool = True,
    ) -> None: ...
