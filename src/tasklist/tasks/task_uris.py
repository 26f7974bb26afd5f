# src/tasklist/tasks/task_uris.py

"""
Resource identifiers for the task store.

A TaskUri addresses either the whole collection (content://<authority>/tasks)
or one task (content://<authority>/tasks/<id>). The short forms "tasks" and
"tasks/<id>" are accepted and resolved against the provider's authority.

classify() is the only place that decides what a URI means.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

SCHEME = "content"
DEFAULT_AUTHORITY = "tasklist"
PATH_TASKS = "tasks"

# Largest value SQLite stores as INTEGER; longer digit runs cannot name a row.
MAX_ID = 2**63 - 1


def _parse_key(segment: str) -> int | None:
    if not (segment.isascii() and segment.isdigit()):
        return None
    key = int(segment)
    return key if key <= MAX_ID else None


@dataclass(frozen=True, slots=True)
class TaskUri:
    scheme: str
    authority: str
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str | TaskUri, *, authority: str = DEFAULT_AUTHORITY) -> TaskUri:
        if isinstance(raw, TaskUri):
            return raw

        parts = urlsplit(str(raw).strip())
        # Empty segments are dropped, so "tasks/" and "/tasks" both mean the collection.
        segments = tuple(s for s in parts.path.split("/") if s)
        if not parts.scheme and not parts.netloc:
            return cls(SCHEME, authority, segments)
        return cls(parts.scheme, parts.netloc, segments)

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def parent(self) -> TaskUri:
        return TaskUri(self.scheme, self.authority, self.segments[:-1])

    def parse_id(self) -> int:
        """Id in the last path segment (tasks/7 -> 7); ValueError if there is none."""
        key = _parse_key(self.segments[-1]) if self.segments else None
        if key is None:
            raise ValueError(f"no id in {self}")
        return key

    def with_appended_id(self, item_id: int) -> TaskUri:
        return TaskUri(self.scheme, self.authority, (*self.segments, str(int(item_id))))

    def is_ancestor_of(self, other: TaskUri) -> bool:
        """True if `other` lives strictly below this URI (tasks -> tasks/7)."""
        return (
            self.scheme == other.scheme
            and self.authority == other.authority
            and len(other.segments) > len(self.segments)
            and other.segments[: len(self.segments)] == self.segments
        )

    def __str__(self) -> str:
        return f"{self.scheme}://{self.authority}/{self.path}"


def content_uri(authority: str = DEFAULT_AUTHORITY) -> TaskUri:
    """URI of the task collection."""
    return TaskUri(SCHEME, authority, (PATH_TASKS,))


class ResourceKind(StrEnum):
    DIR = "dir"
    ITEM = "item"


@dataclass(frozen=True, slots=True)
class UriMatch:
    kind: ResourceKind
    task_id: int | None = None


def classify(uri: TaskUri, *, authority: str = DEFAULT_AUTHORITY) -> UriMatch | None:
    """
    Classify a URI as the task collection, a single task, or nothing (None).

    Recognized shapes:
    - content://<authority>/tasks        -> DIR
    - content://<authority>/tasks/<int>  -> ITEM (ASCII digits, at most MAX_ID)
    """
    if uri.scheme != SCHEME or uri.authority != authority:
        return None

    segs = uri.segments
    if segs == (PATH_TASKS,):
        return UriMatch(ResourceKind.DIR)

    if len(segs) == 2 and segs[0] == PATH_TASKS:
        key = _parse_key(segs[1])
        if key is not None:
            return UriMatch(ResourceKind.ITEM, task_id=key)

    return None
