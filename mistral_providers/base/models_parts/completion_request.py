"""
CompletionRequest: the vendor-neutral input of a streaming completion.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .request_message import RequestMessage
from .tool_definition import ToolChoice, ToolDefinition


@dataclass
class CompletionRequest:
    """Normalized completion request handed to a language model.

    Attributes:
        messages: Conversation turns in order.
        tools: Tools offered to the model.
        tool_choice: Optional tool policy; adapters pick a default when unset.
        temperature: Optional sampling temperature.
        max_output_tokens: Optional cap on generated tokens; when unset the
            model's own output ceiling (if any) is sent.
    """

    messages: List[RequestMessage] = field(default_factory=list)
    tools: List[ToolDefinition] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None


__all__ = ["CompletionRequest"]
