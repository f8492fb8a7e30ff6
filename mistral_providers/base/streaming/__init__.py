"""Streaming primitives: events, metrics, finalize logging, accumulation."""

from .accumulate import CompletionResult, accumulate_events
from .events import (
    CompletionEvent,
    ErrorEvent,
    StopEvent,
    StopReason,
    TextEvent,
    TokenUsage,
    ToolUseEvent,
    ToolUseJsonParseErrorEvent,
    UsageUpdateEvent,
)
from .streaming_finalize import finalize_stream
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage

__all__ = [
    "CompletionEvent",
    "CompletionResult",
    "ErrorEvent",
    "StopEvent",
    "StopReason",
    "StreamMetrics",
    "TextEvent",
    "TokenUsage",
    "ToolUseEvent",
    "ToolUseJsonParseErrorEvent",
    "UsageUpdateEvent",
    "accumulate_events",
    "apply_token_usage",
    "build_token_usage",
    "finalize_stream",
]
