# src/tasklist/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_notify import ChangeNotifier
from ..tasks.task_provider import TaskProvider
from ..tasks.task_store import TaskDatabase


@dataclass
class AppState:
    # Settings object (tasklist.config.Settings or a test namespace).
    settings: object

    database: TaskDatabase
    notifier: ChangeNotifier
    provider: TaskProvider
