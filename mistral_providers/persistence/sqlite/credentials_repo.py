"""SQLite-backed implementation of ``ICredentialStore``.

Secrets are keyed by service URL, so two deployments of the same API (for
example a proxy and the public endpoint) keep separate keys.
"""

from __future__ import annotations

import sqlite3
import threading
from typing import List, Optional

from ..interfaces.repos import Credential, ICredentialStore


class CredentialStoreSqlite(ICredentialStore):
    """SQLite repository for URL-keyed credentials.

    Every write commits immediately; a lock serializes access because the
    connection is shared with worker threads.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        """Initialize the store.

        Parameters
        ----------
        conn:
            Open connection with the ``credentials`` table in place
            (see ``engine.init_schema``).
        """
        self.conn = conn
        self._lock = threading.Lock()

    def read_credentials(self, url: str) -> Optional[Credential]:
        """Return the credential stored for ``url`` or ``None``."""
        with self._lock:
            row = self.conn.execute(
                "SELECT url, username, password FROM credentials WHERE url = ?", (url,)
            ).fetchone()
        if row is None:
            return None
        return Credential(url=row["url"], username=row["username"], password=bytes(row["password"]))

    def write_credentials(self, url: str, username: str, password: bytes) -> None:
        """Insert or replace the credential for ``url``."""
        with self._lock:
            self.conn.execute(
                "INSERT INTO credentials(url, username, password, updated_at) VALUES(?, ?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(url) DO UPDATE SET username=excluded.username, password=excluded.password, "
                "updated_at=CURRENT_TIMESTAMP",
                (url, username, sqlite3.Binary(password)),
            )
            self.conn.commit()

    def delete_credentials(self, url: str) -> None:
        """Delete the credential for ``url`` (idempotent)."""
        with self._lock:
            self.conn.execute("DELETE FROM credentials WHERE url = ?", (url,))
            self.conn.commit()

    def list_urls(self) -> List[str]:
        """Return the URLs with stored credentials in ascending order."""
        with self._lock:
            cur = self.conn.execute("SELECT url FROM credentials ORDER BY url")
            return [r[0] for r in cur.fetchall()]

    def close(self) -> None:
        with self._lock:
            self.conn.close()
