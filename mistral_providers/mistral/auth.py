"""Mistral authentication state.

Holds the API key used by every streaming call of one provider instance and
where it came from. The key resolves from ``MISTRAL_API_KEY`` first and the
credential store entry for the provider's base URL second.

Only :meth:`MistralAuthState.authenticate`, :meth:`set_api_key` and
:meth:`reset_api_key` write the state; streaming calls just read it at call
setup. Store access is synchronous, so it runs via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..base.constants import CREDENTIALS_NOT_FOUND_ERROR
from ..base.errors import ErrorCode, ProviderError
from ..base.logging import LogContext, get_logger, log_event
from ..base.repositories.keys import KeysRepository
from ..config.defaults import MISTRAL_CREDENTIAL_USERNAME, MISTRAL_PROVIDER_ID
from ..persistence.interfaces import ICredentialStore


class MistralAuthState:
    def __init__(
        self,
        api_url: str,
        store: Optional[ICredentialStore] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.api_url = api_url
        self.api_key: Optional[str] = None
        self.api_key_from_env = False
        self._store = store
        self._keys = KeysRepository(store)
        self._logger = logger or get_logger("providers.mistral.auth")

    def is_authenticated(self) -> bool:
        return self.api_key is not None

    async def authenticate(self) -> None:
        """Load the API key unless one is already set.

        Raises ``ProviderError(AUTH)`` when neither the environment nor the
        credential store has a key.
        """
        if self.is_authenticated():
            return
        resolution = await asyncio.to_thread(self._keys.get_resolution, MISTRAL_PROVIDER_ID, self.api_url)
        if not resolution.api_key:
            raise ProviderError(
                code=ErrorCode.AUTH,
                message=CREDENTIALS_NOT_FOUND_ERROR,
                provider=MISTRAL_PROVIDER_ID,
            )
        self.api_key = resolution.api_key
        self.api_key_from_env = resolution.from_env

    async def set_api_key(self, api_key: str) -> None:
        """Persist ``api_key`` for this base URL and make it current."""
        if self._store is not None:
            await asyncio.to_thread(
                self._store.write_credentials,
                self.api_url,
                MISTRAL_CREDENTIAL_USERNAME,
                api_key.encode("utf-8"),
            )
        self.api_key = api_key
        self.api_key_from_env = False

    async def reset_api_key(self) -> None:
        """Forget the current key and delete the stored one.

        A failed delete is logged; the in-memory state is cleared either way.
        """
        if self._store is not None:
            try:
                await asyncio.to_thread(self._store.delete_credentials, self.api_url)
            except Exception as exc:  # noqa: BLE001 - backend failures are reported, not fatal
                log_event(
                    self._logger,
                    "auth.reset.error",
                    LogContext(provider=MISTRAL_PROVIDER_ID),
                    level=logging.ERROR,
                    api_url=self.api_url,
                    error=str(exc),
                )
        self.api_key = None
        self.api_key_from_env = False


__all__ = ["MistralAuthState"]
