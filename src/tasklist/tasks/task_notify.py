# src/tasklist/tasks/task_notify.py

"""
Change notifications.

Observers register on a URI and are told *that* something under it changed; they get
no diff and must re-query. Matching rules for an observer registered at U and a change at N:
- U == N                                   -> notified
- N is below U (tasks -> tasks/7)          -> notified if the observer asked for descendants
- U is below N (tasks/7 <- tasks)          -> notified

Observer exceptions never reach the mutation that caused them; they are logged and dropped.
Only executor delivery keeps a slow observer from delaying the mutation.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor
from dataclasses import dataclass

from ..core.ports import ChangeObserver
from .task_uris import TaskUri

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class _Registration:
    uri: TaskUri
    observer: ChangeObserver
    notify_for_descendants: bool

    def matches(self, changed: TaskUri) -> bool:
        if changed == self.uri:
            return True
        if self.uri.is_ancestor_of(changed):
            return self.notify_for_descendants
        return changed.is_ancestor_of(self.uri)


class ChangeNotifier:
    """
    Observer registry keyed by TaskUri.

    With an executor, observers run on the executor's threads and notify_change() returns
    at once. Without one (the default) they run inline on the mutating thread, so a slow
    observer delays the insert/update/delete that triggered it. Applications should pass an
    executor, as cli.bootstrap does; inline delivery is meant for tests and scripts.
    """

    def __init__(self, executor: Executor | None = None) -> None:
        self._executor = executor
        self._lock = threading.Lock()
        self._registrations: list[_Registration] = []

    def register_observer(
        self,
        uri: TaskUri,
        observer: ChangeObserver,
        *,
        notify_for_descendants: bool = True,
    ) -> None:
        reg = _Registration(uri=uri, observer=observer, notify_for_descendants=notify_for_descendants)
        with self._lock:
            self._registrations.append(reg)
        logger.debug("Observer registered uri=%s descendants=%s", uri, notify_for_descendants)

    def unregister_observer(self, observer: ChangeObserver) -> bool:
        """Drop every registration of `observer`. Returns True if anything was removed."""
        with self._lock:
            before = len(self._registrations)
            self._registrations = [r for r in self._registrations if r.observer != observer]
            removed = before - len(self._registrations)
        return removed > 0

    def observer_count(self) -> int:
        with self._lock:
            return len(self._registrations)

    def notify_change(self, *uris: TaskUri) -> int:
        """
        Broadcast one change covering `uris`.

        Each observer is called at most once per call, with the first URI that matched it.
        Returns the number of observers scheduled.
        """
        with self._lock:
            regs = list(self._registrations)

        targets: list[tuple[ChangeObserver, TaskUri]] = []
        for reg in regs:
            if any(obs == reg.observer for obs, _ in targets):
                continue
            for uri in uris:
                if reg.matches(uri):
                    targets.append((reg.observer, uri))
                    break

        logger.debug(
            "notify_change uris=%s observers=%d", [str(u) for u in uris], len(targets)
        )
        for observer, uri in targets:
            self._deliver(observer, uri)
        return len(targets)

    def shutdown(self, *, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)

    def _deliver(self, observer: ChangeObserver, uri: TaskUri) -> None:
        if self._executor is None:
            self._call(observer, uri)
            return
        try:
            self._executor.submit(self._call, observer, uri)
        except RuntimeError:
            # Executor already shut down (process exit); drop the signal.
            logger.warning("Change notification dropped uri=%s (notifier shut down)", uri)

    @staticmethod
    def _call(observer: ChangeObserver, uri: TaskUri) -> None:
        try:
            observer(uri)
        except Exception:
            logger.exception("Change observer failed uri=%s", uri)
