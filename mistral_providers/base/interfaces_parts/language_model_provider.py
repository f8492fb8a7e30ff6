"""LanguageModelProvider Protocol (single-class module).

Contract of a provider: identity, model listing and credential management.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from .language_model import LanguageModel


@runtime_checkable
class LanguageModelProvider(Protocol):
    """A model vendor with its authentication state."""

    @property
    def id(self) -> str:
        """Canonical provider identifier, e.g. ``"mistral"``."""
        ...

    @property
    def name(self) -> str:
        """Human-readable provider name."""
        ...

    def default_model(self) -> Optional[LanguageModel]: ...

    def default_fast_model(self) -> Optional[LanguageModel]: ...

    def provided_models(self) -> List[LanguageModel]: ...

    def is_authenticated(self) -> bool: ...

    async def authenticate(self) -> None: ...

    async def reset_credentials(self) -> None: ...
