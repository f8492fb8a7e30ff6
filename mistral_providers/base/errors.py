"""Unified provider error taxonomy public surface.

Re-exports the one-class-per-file implementations under
``mistral_providers.base.errors_parts`` and adds `provider_error_from`, the
single place where foreign exceptions are wrapped.
"""

from __future__ import annotations

from typing import Optional

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.classification import classify_exception, is_retryable


def provider_error_from(
    exc: BaseException,
    *,
    provider: str,
    model: Optional[str] = None,
    message: Optional[str] = None,
) -> ProviderError:
    """Wrap ``exc`` into a classified :class:`ProviderError`.

    ``ProviderError`` instances are returned unchanged.
    """
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=message or str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=is_retryable(code),
        raw=exc,
    )


__all__ = [
    "ErrorCode",
    "ProviderError",
    "classify_exception",
    "is_retryable",
    "provider_error_from",
]
