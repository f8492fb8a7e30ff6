"""Mistral chat-completions request wire models.

Pydantic models mirroring the JSON body of ``POST /chat/completions``.
``MistralRequest.to_payload`` produces the exact dict sent on the wire:
``None`` optionals are omitted, as are an empty ``tools`` list and empty
assistant ``tool_calls``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_serializer


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class TextPart(_WireModel):
    type: Literal["text"] = "text"
    text: str


class ImageUrlPart(_WireModel):
    type: Literal["image_url"] = "image_url"
    image_url: str


MessagePart = Union[TextPart, ImageUrlPart]

# Plain text or a multipart list; see ``push_part``.
UserContent = Union[str, List[MessagePart]]


def push_part(content: UserContent, part: MessagePart) -> UserContent:
    """Append ``part`` to user content and return the new content value.

    Text onto plain content concatenates. Any other part turns plain content
    into a multipart list, keeping existing text as the first part. Multipart
    content is appended to in place.
    """
    if isinstance(content, list):
        content.append(part)
        return content
    if isinstance(part, TextPart):
        return content + part.text
    parts: List[MessagePart] = [TextPart(text=content)] if content else []
    parts.append(part)
    return parts


def is_empty_content(content: UserContent) -> bool:
    """True for empty plain content, the only content never sent."""
    return isinstance(content, str) and not content


class FunctionContent(_WireModel):
    name: str
    arguments: str


class ToolCall(_WireModel):
    id: str
    type: Literal["function"] = "function"
    function: FunctionContent


class SystemMessage(_WireModel):
    role: Literal["system"] = "system"
    content: str


class UserMessage(_WireModel):
    role: Literal["user"] = "user"
    content: UserContent


class AssistantMessage(_WireModel):
    role: Literal["assistant"] = "assistant"
    content: Optional[str] = None
    tool_calls: List[ToolCall] = Field(default_factory=list)

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        if data.get("content") is None:
            data.pop("content", None)
        if not data.get("tool_calls"):
            data.pop("tool_calls", None)
        return data


class ToolMessage(_WireModel):
    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str


RequestMessage = Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage]

WireToolChoice = Literal["auto", "any", "none"]


class FunctionDefinition(_WireModel):
    name: str
    description: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class ToolDefinition(_WireModel):
    type: Literal["function"] = "function"
    function: FunctionDefinition


class MistralRequest(_WireModel):
    """Body of a streaming chat-completions call."""

    model: str
    messages: List[RequestMessage] = Field(default_factory=list)
    stream: bool = True
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    tool_choice: Optional[WireToolChoice] = None
    parallel_tool_calls: Optional[bool] = None
    tools: List[ToolDefinition] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready request body."""
        data = self.model_dump(mode="json", exclude_none=True)
        if not data.get("tools"):
            data.pop("tools", None)
        return data


__all__ = [
    "AssistantMessage",
    "FunctionContent",
    "FunctionDefinition",
    "ImageUrlPart",
    "MessagePart",
    "MistralRequest",
    "RequestMessage",
    "SystemMessage",
    "TextPart",
    "ToolCall",
    "ToolDefinition",
    "ToolMessage",
    "UserContent",
    "UserMessage",
    "WireToolChoice",
    "is_empty_content",
    "push_part",
]
