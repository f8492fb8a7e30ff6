"""
Tool invocation requested by a model.

The same type is used as assistant message content (replaying an earlier
call) and as the payload of a completed tool-use stream event.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolUse:
    """A model's request to run a tool.

    Attributes:
        id: Provider-assigned call id, echoed back by the matching tool result.
        name: Tool name as declared in the request's tool definitions.
        input: Parsed JSON arguments.
        raw_input: Argument text exactly as streamed by the provider.
        is_input_complete: False only for partial, still-streaming input.
    """

    id: str
    name: str
    input: Any
    raw_input: str = ""
    is_input_complete: bool = True


__all__ = ["ToolUse"]
