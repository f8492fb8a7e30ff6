"""Structured logging context object.

:class:`LogContext` carries the fields shared by every event of one call
(provider, model, request id, response id) plus free-form ``extra`` data.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for provider logging events."""

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}

    def with_response_id(self, response_id: Optional[str]) -> "LogContext":
        """Return a copy bound to the provider-assigned response id."""
        return replace(self, response_id=response_id, extra=dict(self.extra))


__all__ = ["LogContext"]
