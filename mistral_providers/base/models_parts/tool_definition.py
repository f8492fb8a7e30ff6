"""
Tool definitions and the tool-choice policy offered to a model.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


@dataclass(frozen=True)
class ToolDefinition:
    """A tool the model may call.

    Attributes:
        name: Unique tool name.
        description: Natural language description shown to the model.
        input_schema: JSON Schema of the tool arguments.
    """

    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=dict)


class ToolChoice(str, Enum):
    """How the model may use the offered tools."""

    AUTO = "auto"
    ANY = "any"
    NONE = "none"


__all__ = ["ToolDefinition", "ToolChoice"]
