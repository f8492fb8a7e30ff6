"""
RequestMessage: one turn of a vendor-neutral conversation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from .image_content import ImageContent
from .role import Role
from .text_content import RedactedThinkingContent, TextContent, ThinkingContent
from .tool_result_content import ToolResultContent
from .tool_use import ToolUse

# Closed union of content kinds. Adapters must handle every member for every role.
MessageContent = Union[
    TextContent,
    ThinkingContent,
    RedactedThinkingContent,
    ImageContent,
    ToolUse,
    ToolResultContent,
]


@dataclass
class RequestMessage:
    """A role-tagged, ordered list of content parts.

    Attributes:
        role: Author of the turn.
        content: Ordered content parts.
        cache: Prompt-cache hint; providers without caching ignore it.
    """

    role: Role
    content: List[MessageContent] = field(default_factory=list)
    cache: bool = False

    def string_contents(self) -> str:
        """Concatenate the textual parts (text, thinking, text tool results)."""
        out: List[str] = []
        for part in self.content:
            if isinstance(part, (TextContent, ThinkingContent)):
                out.append(part.text)
            elif isinstance(part, ToolResultContent) and isinstance(part.content, str):
                out.append(part.content)
        return "".join(out)


__all__ = ["RequestMessage", "MessageContent"]
