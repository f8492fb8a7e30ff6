"""Vendor-neutral request model parts (one concern per module)."""

from .completion_request import CompletionRequest
from .image_content import ImageContent
from .request_message import MessageContent, RequestMessage
from .role import Role
from .text_content import RedactedThinkingContent, TextContent, ThinkingContent
from .tool_definition import ToolChoice, ToolDefinition
from .tool_result_content import ToolResultContent
from .tool_use import ToolUse

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
