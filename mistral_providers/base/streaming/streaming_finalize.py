"""Finalize-stream logging.

Emits the single consolidated end-of-stream event for a streaming call.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..logging import LogContext, normalized_log_event
from .streaming_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
    error_code: Optional[str] = None,
    cancelled: bool = False,
) -> None:
    """Close ``metrics`` and log ``stream.adapter.end`` or ``stream.adapter.error``."""
    metrics.finish()
    failed = error_code is not None or metrics.errors > 0
    normalized_log_event(
        logger,
        "stream.adapter.error" if failed else "stream.adapter.end",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        error_code=error_code,
        emitted_count=metrics.emitted,
        error_events=metrics.errors or None,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        cancelled=cancelled or None,
        level=logging.WARNING if failed else logging.INFO,
    )


__all__ = ["finalize_stream"]
