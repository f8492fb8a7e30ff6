"""
ProviderError: every failure of a Mistral call.

There are two ways one reaches the caller. ``stream_completion`` raises it
when the call cannot start: no key, a refused connection, or a non-2xx reply
whose body ends up in ``message``. After the first chunk it arrives inside an
``ErrorEvent`` instead, and the event stream stops there.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """A classified failure.

    ``retryable`` is only a hint. The adapter never retries on its own; a
    caller that does retry can read this flag. ``raw`` holds the ``httpx``
    or ``pydantic`` exception behind the failure, when there is one.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[BaseException] = None

    def __str__(self) -> str:
        return f"{self.provider}/{self.model or '-'} [{self.code.value}] {self.message}"


__all__ = ["ProviderError"]
