# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "tasklist.log"
NOTIFY_THREAD_PREFIX = "tasklist-notify"

# Per-statement chatter from the data layer. The console REPL already prints the outcome
# of every command, so these stay in the file unless console_level is DEBUG.
_TASK_LAYER_LOGGERS = (
    "tasklist.tasks.task_store",
    "tasklist.tasks.task_provider",
    "tasklist.tasks.task_cursor",
    "tasklist.tasks.task_notify",
)


class _ConsoleFilter(logging.Filter):
    """
    Keep the console REPL readable.

    - task-layer loggers: only WARNING+ unless the console runs at DEBUG
    - records emitted on the notifier thread: only WARNING+ (they would land in the
      middle of the ">>> " prompt); the console prints change signals itself
    - py.warnings and third-party loggers: only ERROR+
    """

    def __init__(self, *, verbose: bool) -> None:
        super().__init__()
        self._verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if record.threadName.startswith(NOTIFY_THREAD_PREFIX):
            return record.levelno >= logging.WARNING

        name = record.name
        if name.startswith(_TASK_LAYER_LOGGERS):
            return self._verbose or record.levelno >= logging.WARNING
        if name.startswith("tasklist."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console (stderr, filtered) + file (<log_dir>/tasklist.log, everything at file_level).

    The file format carries the thread name, so notifier-thread records can be told apart
    from the REPL thread. Returns the log file path. Call once, from the entry point.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    console.addFilter(_ConsoleFilter(verbose=console_level <= logging.DEBUG))
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d %(levelname)s [%(threadName)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
