# src/tasklist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_uris import TaskUri

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def _on_tasks_changed(uri: TaskUri) -> None:
    # Runs on the notifier thread; only a staleness signal.
    logger.debug("Tasks changed uri=%s", uri)
    _print_ts(f"[CHANGE] {uri}")


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (db=%s).", state.database.db_path)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    state.provider.register_observer(state.provider.content_uri(), _on_tasks_changed)
    try:
        while True:
            try:
                user_input = input(">>> ").strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                print()
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is None:
                reply = "Commands start with '/'. Use /help to list available commands."
            _print_ts(reply)
    finally:
        state.provider.unregister_observer(_on_tasks_changed)

    logger.info("Console connector finished.")
