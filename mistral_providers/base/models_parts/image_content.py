"""
Image content part.

Images travel as base64-encoded PNG data; adapters decide how to reference
them on the wire.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ImageContent:
    """A base64 PNG image.

    Attributes:
        source: Base64 PNG bytes, without any ``data:`` prefix.
        width: Optional pixel width, informational only.
        height: Optional pixel height, informational only.
    """

    source: str
    width: Optional[int] = None
    height: Optional[int] = None

    def to_base64_url(self) -> str:
        """Return the image as a ``data:image/png;base64,...`` URL."""
        return f"data:image/png;base64,{self.source}"


__all__ = ["ImageContent"]
