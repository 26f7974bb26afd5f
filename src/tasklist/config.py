# src/tasklist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Settings are read once, by the entry point; library code gets them injected.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_uris import DEFAULT_AUTHORITY

ENV_PREFIX = "TASKLIST"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connectors ----
    console_enabled: bool

    # ---- Store ----
    data_dir: Path
    tasks_db_path: Path
    db_timeout: float
    authority: str

    # ---- Notifications ----
    notify_async: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tasklist").strip() or "tasklist"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tasklist"))
        tasks_db_path = _env_path(_k("DB_PATH"), data_dir / "tasks.sqlite3")
        db_timeout = max(0.0, _env_float(_k("DB_TIMEOUT"), 30.0))
        authority = _env(_k("AUTHORITY"), DEFAULT_AUTHORITY).strip() or DEFAULT_AUTHORITY

        notify_async = _env_bool(_k("NOTIFY_ASYNC"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            db_timeout=db_timeout,
            authority=authority,
            notify_async=notify_async,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    load_dotenv(override=False)
    return Settings.from_env()
