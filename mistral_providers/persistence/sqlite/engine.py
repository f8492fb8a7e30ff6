"""SQLite engine helpers for the credential store.

Purpose
-------
Open SQLite connections with consistent PRAGMA settings and ensure the
``credentials`` table exists.

External dependencies
---------------------
- Standard library only (``sqlite3``). No side effects at import time.

Timeout and reliability strategy
--------------------------------
- ``busy_timeout`` from ``mistral_providers.config.defaults`` mitigates lock
  contention between processes sharing the file.
- WAL journaling with NORMAL synchronous mode.
"""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path
from typing import Optional

from ...config.defaults import (
    DEFAULT_DB_PATH,
    SQLITE_BUSY_TIMEOUT_MS,
    SQLITE_JOURNAL_MODE,
    SQLITE_SYNCHRONOUS,
)


def get_db_path(db_path: Optional[str] = None) -> Path:
    """Return the database file path.

    Precedence: explicit ``db_path``, then ``PROVIDERS_DB_PATH``, then
    ``DEFAULT_DB_PATH``. ``~`` is expanded.
    """
    raw = db_path or os.getenv("PROVIDERS_DB_PATH")
    return Path(raw).expanduser() if raw else DEFAULT_DB_PATH.expanduser()


def create_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Open a SQLite connection and apply PRAGMA settings.

    The connection may be used from worker threads (``check_same_thread`` is
    off); callers serialize access.
    """
    path = get_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute(f"PRAGMA journal_mode={SQLITE_JOURNAL_MODE};")
    conn.execute(f"PRAGMA synchronous={SQLITE_SYNCHRONOUS};")
    conn.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS};")
    return conn


def init_schema(conn: sqlite3.Connection) -> None:
    """Create the ``credentials`` table if missing, then commit."""
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS credentials (
            url        TEXT PRIMARY KEY,
            username   TEXT NOT NULL,
            password   BLOB NOT NULL,
            updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """
    )
    conn.commit()


__all__ = ["get_db_path", "create_connection", "init_schema"]
