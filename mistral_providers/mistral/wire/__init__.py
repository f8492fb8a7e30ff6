"""Mistral wire format: request body and streamed response chunks."""

from .request import (
    AssistantMessage,
    FunctionContent,
    FunctionDefinition,
    ImageUrlPart,
    MessagePart,
    MistralRequest,
    RequestMessage,
    SystemMessage,
    TextPart,
    ToolCall,
    ToolDefinition,
    ToolMessage,
    UserContent,
    UserMessage,
    WireToolChoice,
    is_empty_content,
    push_part,
)
from .response import (
    ChoiceDelta,
    FunctionChunk,
    StreamChoice,
    StreamResponse,
    ToolCallChunk,
    Usage,
)

__all__ = [
    "AssistantMessage",
    "ChoiceDelta",
    "FunctionChunk",
    "FunctionContent",
    "FunctionDefinition",
    "ImageUrlPart",
    "MessagePart",
    "MistralRequest",
    "RequestMessage",
    "StreamChoice",
    "StreamResponse",
    "SystemMessage",
    "TextPart",
    "ToolCall",
    "ToolCallChunk",
    "ToolDefinition",
    "ToolMessage",
    "Usage",
    "UserContent",
    "UserMessage",
    "WireToolChoice",
    "is_empty_content",
    "push_part",
]
