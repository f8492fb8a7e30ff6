"""Mistral streaming response wire models.

One :class:`StreamResponse` per ``data:`` line of the server-sent event
stream. Unknown fields are ignored so additive API changes never break
decoding.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ChunkModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class FunctionChunk(_ChunkModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallChunk(_ChunkModel):
    """A fragment of one tool call; fragments share ``index`` across chunks."""

    index: int = 0
    id: Optional[str] = None
    type: Optional[str] = None
    function: Optional[FunctionChunk] = None


class ChoiceDelta(_ChunkModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallChunk]] = None


class StreamChoice(_ChunkModel):
    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None


class Usage(_ChunkModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: Optional[int] = None


class StreamResponse(_ChunkModel):
    id: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    model: Optional[str] = None
    choices: List[StreamChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None


__all__ = [
    "ChoiceDelta",
    "FunctionChunk",
    "StreamChoice",
    "StreamResponse",
    "ToolCallChunk",
    "Usage",
]
