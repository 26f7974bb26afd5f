# tests/test_task_uris.py

from __future__ import annotations

import pytest

from tasklist.tasks.task_uris import (
    MAX_ID,
    ResourceKind,
    TaskUri,
    UriMatch,
    classify,
    content_uri,
)


def test_short_and_full_forms_are_equal() -> None:
    assert TaskUri.parse("tasks") == content_uri()
    assert TaskUri.parse("/tasks/") == content_uri()
    assert TaskUri.parse("content://tasklist/tasks") == content_uri()
    assert TaskUri.parse("tasks/3") == content_uri().with_appended_id(3)
    assert str(TaskUri.parse("tasks/3")) == "content://tasklist/tasks/3"


def test_parse_uses_given_authority_for_short_form() -> None:
    uri = TaskUri.parse("tasks/1", authority="org.example.todo")
    assert uri.authority == "org.example.todo"
    # Full URIs keep their own authority.
    assert TaskUri.parse("content://a.b/tasks", authority="org.example.todo").authority == "a.b"


def test_parse_passes_task_uri_through() -> None:
    uri = content_uri()
    assert TaskUri.parse(uri) is uri


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("tasks", UriMatch(ResourceKind.DIR)),
        ("tasks/42", UriMatch(ResourceKind.ITEM, task_id=42)),
        ("tasks/007", UriMatch(ResourceKind.ITEM, task_id=7)),
        ("content://tasklist/tasks/1?x=y", UriMatch(ResourceKind.ITEM, task_id=1)),
        ("tasks/abc", None),
        ("tasks/4.5", None),
        ("tasks/1/2", None),
        ("notes", None),
        ("notes/1", None),
        ("", None),
        ("content://elsewhere/tasks", None),
        ("file://tasklist/tasks", None),
    ],
)
def test_classify(raw: str, expected: UriMatch | None) -> None:
    assert classify(TaskUri.parse(raw)) == expected


def test_classify_rejects_non_ascii_digits() -> None:
    assert classify(TaskUri.parse("tasks/١٢")) is None


def test_classify_rejects_ids_beyond_sqlite_integer_range() -> None:
    assert classify(TaskUri.parse(f"tasks/{MAX_ID}")) == UriMatch(ResourceKind.ITEM, task_id=MAX_ID)
    assert classify(TaskUri.parse(f"tasks/{MAX_ID + 1}")) is None
    assert classify(TaskUri.parse("tasks/99999999999999999999")) is None


def test_parse_id_and_parent() -> None:
    item = TaskUri.parse("tasks/12")
    assert item.parse_id() == 12
    assert item.parent == content_uri()
    with pytest.raises(ValueError):
        content_uri().parse_id()


@pytest.mark.parametrize("raw", ["tasks/١٢", "tasks/99999999999999999999", "tasks/-1"])
def test_parse_id_uses_same_rules_as_classify(raw: str) -> None:
    with pytest.raises(ValueError):
        TaskUri.parse(raw).parse_id()


def test_is_ancestor_of() -> None:
    coll = content_uri()
    item = coll.with_appended_id(1)
    assert coll.is_ancestor_of(item)
    assert not item.is_ancestor_of(coll)
    assert not coll.is_ancestor_of(coll)
    assert not content_uri("other").is_ancestor_of(item)
