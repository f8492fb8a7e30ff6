"""Vendor-neutral completion events.

A streaming completion is an ordered sequence of these events. Recoverable
anomalies are events too (``ErrorEvent``, ``ToolUseJsonParseErrorEvent``);
only failures before the first event are raised as exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..errors import ProviderError
from ..models import ToolUse


class StopReason(str, Enum):
    """Why the model stopped generating."""

    END_TURN = "end_turn"
    TOOL_USE = "tool_use"


@dataclass(frozen=True)
class TokenUsage:
    """Token accounting reported by the provider.

    Cache counters are zero for providers that do not report them.
    """

    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class TextEvent:
    text: str


@dataclass(frozen=True)
class UsageUpdateEvent:
    usage: TokenUsage


@dataclass(frozen=True)
class ToolUseEvent:
    tool_use: ToolUse


@dataclass(frozen=True)
class ToolUseJsonParseErrorEvent:
    """A tool call whose streamed arguments are not valid JSON.

    Non-fatal: the caller decides how to present the malformed call.
    """

    id: str
    tool_name: str
    raw_input: str
    json_parse_error: str


@dataclass(frozen=True)
class StopEvent:
    """End of the current turn.

    ``unexpected_finish_reason`` holds the provider's raw finish reason when it
    was not one the adapter recognizes; the reason is then ``END_TURN``.
    """

    reason: StopReason
    unexpected_finish_reason: Optional[str] = None


@dataclass(frozen=True)
class ErrorEvent:
    error: ProviderError


CompletionEvent = Union[
    TextEvent,
    UsageUpdateEvent,
    ToolUseEvent,
    ToolUseJsonParseErrorEvent,
    StopEvent,
    ErrorEvent,
]


__all__ = [
    "StopReason",
    "TokenUsage",
    "TextEvent",
    "UsageUpdateEvent",
    "ToolUseEvent",
    "ToolUseJsonParseErrorEvent",
    "StopEvent",
    "ErrorEvent",
    "CompletionEvent",
]
