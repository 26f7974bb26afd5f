# src/tasklist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires TaskDatabase + ChangeNotifier into a TaskProvider,
- tears them down again on exit.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_notify import ChangeNotifier
from ..tasks.task_provider import TaskProvider
from ..tasks.task_store import MEMORY_PATH, TaskDatabase
from ..tasks.task_uris import DEFAULT_AUTHORITY

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if str(settings.tasks_db_path) != MEMORY_PATH:
        settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    The database is not opened here; the first request opens it.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    executor = None
    if getattr(settings, "notify_async", True):
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tasklist-notify")

    notifier = ChangeNotifier(executor)
    database = TaskDatabase(settings.tasks_db_path, timeout=getattr(settings, "db_timeout", 30.0))
    provider = TaskProvider(
        database,
        notifier,
        authority=getattr(settings, "authority", DEFAULT_AUTHORITY),
    )
    logger.debug("State wired db=%s async_notify=%s", settings.tasks_db_path, executor is not None)
    return AppState(settings=settings, database=database, notifier=notifier, provider=provider)


def shutdown_state(state: AppState) -> None:
    """Drain pending notifications, then close the connection."""
    try:
        state.notifier.shutdown(wait=True)
    except Exception:
        logger.exception("Notifier shutdown failed.")
    state.database.close()
