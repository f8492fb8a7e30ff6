"""
Result of a tool run, sent back to the model on the next turn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .image_content import ImageContent


@dataclass(frozen=True)
class ToolResultContent:
    """Output of a tool call.

    Attributes:
        tool_use_id: Id of the :class:`ToolUse` this result answers.
        tool_name: Name of the tool that ran.
        content: Text output, or an image for tools that render pictures.
        is_error: True when the tool failed and ``content`` describes why.
    """

    tool_use_id: str
    tool_name: str
    content: Union[str, ImageContent]
    is_error: bool = False


__all__ = ["ToolResultContent"]
