"""
Keys Repository

Purpose
- Resolve a provider API key from its two sources in strict priority order:
  1) the provider's environment variable (authoritative),
  2) the credential store entry keyed by the provider's base URL.
- Report where the key came from so callers can tell an env-provided key
  (which cannot be reset from the application) from a stored one.

Design
- Synchronous and side-effect free; async callers run it in a worker thread.
- A stored secret that is not valid UTF-8 raises ``ProviderError(AUTH)``.

Usage
- repo = KeysRepository(store)
- res = repo.get_resolution("mistral", "https://api.mistral.ai/v1")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ...config.env import resolve_provider_key
from ...persistence.interfaces import ICredentialStore
from ..constants import INVALID_API_KEY_ERROR
from ..errors import ErrorCode, ProviderError


@dataclass
class KeyResolution:
    provider: str
    api_key: Optional[str]
    source: str  # "env", "credential_store", "none"
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def from_env(self) -> bool:
        return self.source == "env"


class KeysRepository:
    """Resolve provider credentials: environment first, then the credential store."""

    def __init__(self, store: Optional[ICredentialStore] = None) -> None:
        self._store = store

    def get_api_key(self, provider: str, url: Optional[str] = None) -> Optional[str]:
        return self.get_resolution(provider, url).api_key

    def get_resolution(self, provider: str, url: Optional[str] = None) -> KeyResolution:
        p = (provider or "").lower().strip()
        val, used = resolve_provider_key(p)
        if val:
            return KeyResolution(provider=p, api_key=val, source="env", extra={"env_var": used})

        if self._store is None or not url:
            return KeyResolution(provider=p, api_key=None, source="none", extra={"store": "absent" if self._store is None else "no_url"})

        cred = self._store.read_credentials(url)
        if cred is None:
            return KeyResolution(provider=p, api_key=None, source="none", extra={"url": url})
        try:
            key = cred.password.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=INVALID_API_KEY_ERROR,
                provider=p,
                raw=exc,
            ) from exc
        return KeyResolution(
            provider=p,
            api_key=key,
            source="credential_store",
            extra={"url": url, "username": cred.username},
        )


__all__ = ["KeyResolution", "KeysRepository"]
