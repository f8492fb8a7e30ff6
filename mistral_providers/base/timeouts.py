"""Centralized timeout configuration for the provider layer.

Key Components
--------------
TimeoutConfig
    Normalized timeout values in seconds.

get_timeout_config()
    Returns a process-cached configuration parsed from the environment. The
    cache is refreshed when any of the supported variables changes:
        PROVIDERS_TIMEOUT_START_SECONDS
        PROVIDERS_TIMEOUT_STREAM_SECONDS
        PROVIDERS_TIMEOUT_HTTP_SECONDS

Timeouts are enforced by ``httpx`` (see ``base.http``); there is no
signal-based guard since every I/O path here is asynchronous.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import (
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    DEFAULT_START_TIMEOUT_SECONDS,
    DEFAULT_STREAM_TIMEOUT_SECONDS,
)

_ENV_NAMES = (
    "PROVIDERS_TIMEOUT_START_SECONDS",
    "PROVIDERS_TIMEOUT_STREAM_SECONDS",
    "PROVIDERS_TIMEOUT_HTTP_SECONDS",
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Connecting and receiving response headers of a
            streaming call.
        stream_timeout_seconds: Idle time allowed between two streamed lines.
        http_timeout_seconds: Writes and pool acquisition.
    """

    start_timeout_seconds: float = DEFAULT_START_TIMEOUT_SECONDS
    stream_timeout_seconds: float = DEFAULT_STREAM_TIMEOUT_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS


_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float(_ENV_NAMES[0], DEFAULT_START_TIMEOUT_SECONDS),
        stream_timeout_seconds=_parse_env_float(_ENV_NAMES[1], DEFAULT_STREAM_TIMEOUT_SECONDS),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[2], DEFAULT_HTTP_TIMEOUT_SECONDS),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
