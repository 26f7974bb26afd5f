# src/tasklist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the console REPL,
then drains notifications and closes the database.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s... (log file: %s)", settings.app_name, log_file)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        shutdown_state(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
