from __future__ import annotations

from typing import Optional

from .credentials_repo import CredentialStoreSqlite
from .engine import create_connection, get_db_path, init_schema


def open_credential_store(db_path: Optional[str] = None) -> CredentialStoreSqlite:
    """Open (creating if needed) the SQLite credential store."""
    conn = create_connection(db_path)
    init_schema(conn)
    return CredentialStoreSqlite(conn)


__all__ = [
    "CredentialStoreSqlite",
    "create_connection",
    "get_db_path",
    "init_schema",
    "open_credential_store",
]
