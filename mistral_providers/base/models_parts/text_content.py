"""
Text-like content kinds.

``ThinkingContent`` is reasoning text produced by a model on an earlier turn;
``RedactedThinkingContent`` is an opaque reasoning blob that can only be
replayed to the provider that produced it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TextContent:
    """Plain text."""

    text: str


@dataclass(frozen=True)
class ThinkingContent:
    """Model reasoning text, optionally signed by the producing provider."""

    text: str
    signature: Optional[str] = None


@dataclass(frozen=True)
class RedactedThinkingContent:
    """Opaque, provider-encrypted reasoning payload."""

    data: str


__all__ = ["TextContent", "ThinkingContent", "RedactedThinkingContent"]
