"""Credential store protocol and DTO for the persistence layer.

Authentication depends only on :class:`ICredentialStore`; concrete
implementations live under ``persistence/sqlite/`` (or future backends such
as an OS keychain).

Failure / Error Semantics:
- Reads return ``None`` when nothing is stored.
- Backend failures (I/O, integrity) propagate as backend exceptions; the
  authentication layer decides which ones are fatal.

Timeout Strategy:
- Implementations are synchronous and short-lived; async callers run them via
  ``asyncio.to_thread`` so the event loop never blocks on disk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class Credential:
    """A stored secret keyed by service URL.

    Attributes
    ----------
    url: Service base URL the secret belongs to.
    username: Scheme/user label stored with the secret (``"Bearer"`` for API keys).
    password: Raw secret bytes.
    """

    url: str
    username: str
    password: bytes


@runtime_checkable
class ICredentialStore(Protocol):
    """Read/write/delete secrets keyed by URL."""

    def read_credentials(self, url: str) -> Optional[Credential]: ...

    def write_credentials(self, url: str, username: str, password: bytes) -> None: ...

    def delete_credentials(self, url: str) -> None: ...

    def list_urls(self) -> List[str]: ...


__all__ = ["Credential", "ICredentialStore"]
