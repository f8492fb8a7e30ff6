"""Streaming metrics data structures.

One :class:`StreamMetrics` instance follows one streaming call and feeds the
finalize log event.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .events import CompletionEvent, ErrorEvent, UsageUpdateEvent


@dataclass
class StreamMetrics:
    """Collected streaming metrics for a single provider invocation.

    Attributes:
        emitted: Number of events yielded to the caller.
        time_to_first_token_ms: Delay between the call start and the first event.
        total_duration_ms: Call start to end of stream.
        prompt_tokens / completion_tokens / total_tokens: Last reported usage.
        errors: Number of ``ErrorEvent`` seen.
    """

    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    errors: int = 0
    started_at: float = field(default_factory=time.monotonic, repr=False)

    def observe(self, event: CompletionEvent) -> None:
        """Account for one event about to be yielded."""
        if self.emitted == 0:
            self.time_to_first_token_ms = (time.monotonic() - self.started_at) * 1000.0
        self.emitted += 1
        if isinstance(event, UsageUpdateEvent):
            apply_token_usage(
                self,
                prompt=event.usage.input_tokens,
                completion=event.usage.output_tokens,
            )
        elif isinstance(event, ErrorEvent):
            self.errors += 1

    def finish(self) -> None:
        self.total_duration_ms = (time.monotonic() - self.started_at) * 1000.0

    @property
    def tokens(self) -> Dict[str, Any]:
        return build_token_usage(self.prompt_tokens, self.completion_tokens, self.total_tokens)


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, *, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    usage = build_token_usage(prompt, completion, total)
    metrics.prompt_tokens = usage["prompt"]
    metrics.completion_tokens = usage["completion"]
    metrics.total_tokens = usage["total"]


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]
