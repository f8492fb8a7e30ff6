"""
Message author roles of the vendor-neutral request model.
"""
from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Closed set of roles a request message can carry."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


__all__ = ["Role"]
