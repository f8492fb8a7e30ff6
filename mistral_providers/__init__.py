"""mistral_providers package

Streaming adapter for Mistral's chat-completions API behind a vendor-neutral
request/event model.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Provider surface: :class:`MistralProvider`, :class:`MistralLanguageModel`
    - Factory: :func:`create`

Example::

    provider = create()
    await provider.authenticate()
    events = await provider.default_model().stream_completion(request)
    result = await accumulate_events(events)
"""

from typing import Any, Dict, Optional

from .base.errors import ErrorCode, ProviderError
from .base.streaming import CompletionResult, accumulate_events
from .mistral import MistralLanguageModel, MistralProvider, create_provider

__version__ = "0.1.0"


def create(overrides: Optional[Dict[str, Any]] = None, db_path: Optional[str] = None) -> MistralProvider:
    """Return a Mistral provider backed by the SQLite credential store."""
    return create_provider(overrides=overrides, db_path=db_path)


__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "CompletionResult",
    "accumulate_events",
    "MistralLanguageModel",
    "MistralProvider",
    "create",
]
