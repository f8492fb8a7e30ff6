"""Fold a completion event stream into a single result.

Convenience for callers that do not render incrementally (CLI, tests).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterable, List, Optional

from ..errors import ProviderError
from ..models import ToolUse
from .events import (
    ErrorEvent,
    StopEvent,
    StopReason,
    TextEvent,
    TokenUsage,
    ToolUseEvent,
    ToolUseJsonParseErrorEvent,
    UsageUpdateEvent,
)


@dataclass
class CompletionResult:
    """Everything a finished stream produced."""

    text: str = ""
    tool_uses: List[ToolUse] = field(default_factory=list)
    parse_errors: List[ToolUseJsonParseErrorEvent] = field(default_factory=list)
    errors: List[ProviderError] = field(default_factory=list)
    usage: Optional[TokenUsage] = None
    stop_reason: Optional[StopReason] = None
    event_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors


async def accumulate_events(events: AsyncIterable[object]) -> CompletionResult:
    """Consume ``events`` and return the aggregated :class:`CompletionResult`.

    Text deltas are concatenated in order; the last usage update and the last
    stop reason win.
    """
    result = CompletionResult()
    parts: List[str] = []
    async for event in events:
        result.event_count += 1
        if isinstance(event, TextEvent):
            parts.append(event.text)
        elif isinstance(event, ToolUseEvent):
            result.tool_uses.append(event.tool_use)
        elif isinstance(event, ToolUseJsonParseErrorEvent):
            result.parse_errors.append(event)
        elif isinstance(event, UsageUpdateEvent):
            result.usage = event.usage
        elif isinstance(event, StopEvent):
            result.stop_reason = event.reason
        elif isinstance(event, ErrorEvent):
            result.errors.append(event.error)
    result.text = "".join(parts)
    return result


__all__ = ["CompletionResult", "accumulate_events"]
