# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasklist.core.state import AppState
from tasklist.tasks.task_notify import ChangeNotifier
from tasklist.tasks.task_provider import TaskProvider
from tasklist.tasks.task_store import TaskDatabase

from .fakes import RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap helpers.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasklist-test",
        log_level="DEBUG",
        console_enabled=False,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        db_timeout=5.0,
        authority="tasklist",
        # Inline delivery keeps notification assertions deterministic.
        notify_async=False,
    )


@pytest.fixture()
def database(settings: SimpleNamespace) -> Iterator[TaskDatabase]:
    db = TaskDatabase(settings.tasks_db_path, timeout=settings.db_timeout)
    yield db
    db.close()


@pytest.fixture()
def notifier() -> ChangeNotifier:
    return ChangeNotifier()


@pytest.fixture()
def provider(database: TaskDatabase, notifier: ChangeNotifier) -> TaskProvider:
    return TaskProvider(database, notifier)


@pytest.fixture()
def recorder() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def recorded_provider(database: TaskDatabase, recorder: RecordingNotifier) -> TaskProvider:
    """Provider whose notifications are captured instead of delivered."""
    return TaskProvider(database, recorder)


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    database: TaskDatabase,
    notifier: ChangeNotifier,
    provider: TaskProvider,
) -> AppState:
    """AppState wired with a real SQLite store in tmp_path and inline notifications."""
    return AppState(settings=settings, database=database, notifier=notifier, provider=provider)
