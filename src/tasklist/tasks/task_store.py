# src/tasklist/tasks/task_store.py

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .task_errors import StoreUnavailable
from .task_models import TABLE_NAME, ConnectionMode, TaskColumns

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"

_CREATE_TABLE_SQL = f"""
    CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
        {TaskColumns.ID} INTEGER PRIMARY KEY AUTOINCREMENT,
        {TaskColumns.DESCRIPTION} TEXT NOT NULL,
        {TaskColumns.PRIORITY} INTEGER NOT NULL CHECK ({TaskColumns.PRIORITY} IN (1, 2, 3))
    )
"""


@dataclass(frozen=True, slots=True)
class WriteResult:
    lastrowid: int | None
    rowcount: int


class TaskDatabase:
    """
    Owner of the single SQLite connection used by the task provider.

    The connection is opened on the first get_connection() call, not in __init__.
    Opening is guarded by a lock, so concurrent first use still yields one connection.

    Durability:
    - autocommit (isolation_level=None): every statement is its own transaction
    - synchronous=FULL: a write is on disk before execute() returns

    Writes go through execute_write(), which holds a write lock across the statement and
    the read of lastrowid/rowcount. Both values are connection-wide in SQLite, so without the
    lock a concurrent writer on another thread could overwrite them in between.
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3", *, timeout: float = 30.0) -> None:
        self._db_path = db_path if str(db_path) == MEMORY_PATH else Path(db_path)
        self._timeout = float(timeout)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()

    @property
    def db_path(self) -> str | Path:
        return self._db_path

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def get_connection(self, mode: ConnectionMode = ConnectionMode.WRITE) -> sqlite3.Connection:
        """
        Return the shared connection, opening it and ensuring the schema on first use.

        READ and WRITE return the same handle: SQLite in WAL mode lets readers run while
        a writer holds the lock, so one connection serves both.
        """
        conn = self._conn
        if conn is not None:
            return conn

        with self._lock:
            if self._conn is None:
                self._conn = self._open()
                logger.info("TaskDatabase opened db=%s mode=%s", self._db_path, mode.value)
            return self._conn

    def execute_write(self, sql: str, params: Sequence[Any] = ()) -> WriteResult:
        """Run one INSERT/UPDATE/DELETE; sqlite3 errors propagate to the caller."""
        conn = self.get_connection(ConnectionMode.WRITE)
        with self._write_lock:
            cur = conn.execute(sql, params)
            try:
                return WriteResult(lastrowid=cur.lastrowid, rowcount=cur.rowcount)
            finally:
                cur.close()

    def close(self) -> None:
        with self._lock:
            conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except sqlite3.Error:
            logger.warning("TaskDatabase close failed db=%s", self._db_path, exc_info=True)
        else:
            logger.info("TaskDatabase closed db=%s", self._db_path)

    # ---- low-level helpers ----

    def _open(self) -> sqlite3.Connection:
        try:
            if isinstance(self._db_path, Path):
                self._db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                str(self._db_path),
                timeout=self._timeout,
                isolation_level=None,
                check_same_thread=False,
            )
        except (OSError, sqlite3.Error) as exc:
            raise StoreUnavailable(f"cannot open task database {self._db_path}: {exc}") from exc

        conn.row_factory = sqlite3.Row
        try:
            self._configure_conn(conn)
            self._ensure_schema(conn)
        except BaseException:
            conn.close()
            raise
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        try:
            # :memory: databases answer "memory" here; that is fine.
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("PRAGMA synchronous=FULL")
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"cannot configure task database: {exc}") from exc

    def _ensure_schema(self, conn: sqlite3.Connection) -> None:
        try:
            conn.execute(_CREATE_TABLE_SQL)
            cols = {row["name"] for row in conn.execute(f"PRAGMA table_info({TABLE_NAME})")}
        except sqlite3.Error as exc:
            raise StoreUnavailable(f"cannot create table {TABLE_NAME}: {exc}") from exc

        missing = [c for c in TaskColumns.ALL if c not in cols]
        if missing:
            raise StoreUnavailable(
                f"table {TABLE_NAME} in {self._db_path} is missing columns: {', '.join(missing)}"
            )
        logger.debug("TaskDatabase schema ok db=%s columns=%s", self._db_path, sorted(cols))
