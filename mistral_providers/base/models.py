"""
Vendor-neutral request model used by provider adapters.

This module re-exports the single-concern modules under
``mistral_providers.base.models_parts`` to keep imports stable.
"""
from __future__ import annotations

from .models_parts import (
    CompletionRequest,
    ImageContent,
    MessageContent,
    RedactedThinkingContent,
    RequestMessage,
    Role,
    TextContent,
    ThinkingContent,
    ToolChoice,
    ToolDefinition,
    ToolResultContent,
    ToolUse,
)

__all__ = [
    "CompletionRequest",
    "ImageContent",
    "MessageContent",
    "RedactedThinkingContent",
    "RequestMessage",
    "Role",
    "TextContent",
    "ThinkingContent",
    "ToolChoice",
    "ToolDefinition",
    "ToolResultContent",
    "ToolUse",
]
