from __future__ import annotations

# studentapp/db.py
import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator

from .config import read_config_yaml, is_test_env
from .errors import StorageError

logger = logging.getLogger(__name__)

# DB path resolution order:
# 1) env STUDENTAPP_DB_PATH (highest priority)
# 2) config.yaml test_db_path (when running under test)
# 3) config.yaml db_path (production default)
# 4) fallback: studentapp.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_ROOT_DB = os.path.join(_PROJECT_ROOT, "studentapp.db")

MEMORY_DB = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS students (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    course TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""


def get_db_path() -> str:
    env_path = os.environ.get("STUDENTAPP_DB_PATH")
    cfg = read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = _ROOT_DB

    if path == MEMORY_DB:
        return path
    # make sure the parent directory exists
    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def ensure_schema(conn: sqlite3.Connection):
    conn.execute(SCHEMA)


class StorageHandle:
    """
    Process-wide SQLite connection for the students store.

    The schema is created on construction; any failure to open the file or
    create the table raises StorageError and the caller is expected to stop.
    Access goes through `connection()`, which serializes use of the shared
    connection across the server's worker threads.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()
        try:
            self._conn = sqlite3.connect(
                path,
                check_same_thread=False,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            raise StorageError(f"cannot open store at {path}: {e}") from e
        self._conn.row_factory = sqlite3.Row
        try:
            ensure_schema(self._conn)
        except sqlite3.Error as e:
            self._conn.close()
            raise StorageError(f"cannot create schema in {path}: {e}") from e

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            yield self._conn

    def close(self):
        with self._lock:
            self._conn.close()


def open_storage(path: str | None = None) -> StorageHandle:
    try:
        path = path or get_db_path()
    except OSError as e:
        raise StorageError(f"cannot prepare store directory: {e}") from e
    handle = StorageHandle(path)
    logger.info("student store ready at %s", path)
    return handle
