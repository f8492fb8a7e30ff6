"""Shared async HTTP client pool for providers.

Purpose:
    Keep one ``httpx.AsyncClient`` per ``(base_url, purpose)`` so streaming
    calls reuse connections instead of paying a TLS handshake each time.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Timeout strategy:
    - Timeouts derive from :func:`get_timeout_config` when the client is first
      created: ``connect`` uses the start timeout, ``read`` the stream idle
      timeout, ``write``/``pool`` the HTTP timeout.

Lifecycle & cleanup:
    - An ``AsyncClient`` is bound to the event loop it first runs on, so pools
      are kept per running loop (weakly referenced); a new loop, for example a
      new ``asyncio.run``, gets fresh clients.
    - :func:`aclose_all_clients` closes the pooled clients of the running loop;
      callers own the shutdown point since closing requires that loop.
"""

from __future__ import annotations

import asyncio
import threading
import weakref
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_PoolKey = Tuple[Optional[str], str]

_POOLS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[_PoolKey, httpx.AsyncClient]]" = (
    weakref.WeakKeyDictionary()
)
_LOCK = threading.RLock()


def build_timeout() -> httpx.Timeout:
    """Return an ``httpx.Timeout`` built from the centralized configuration."""
    cfg = get_timeout_config()
    return httpx.Timeout(
        connect=cfg.start_timeout_seconds,
        read=cfg.stream_timeout_seconds,
        write=cfg.http_timeout_seconds,
        pool=cfg.http_timeout_seconds,
    )


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the base URL and purpose.

    Must be called from a running event loop.

    Parameters:
        base_url: Optional API base URL set on the client so relative paths
            can be used by callers.
        purpose: Short discriminator for separate pools (e.g.
            ``"mistral.stream"``). Keep stable to maximize reuse.
    """
    loop = asyncio.get_running_loop()
    key = (base_url, purpose)
    with _LOCK:
        pool = _POOLS.setdefault(loop, {})
        client = pool.get(key)
        if client is None or client.is_closed:
            timeout = build_timeout()
            client = httpx.AsyncClient(base_url=base_url, timeout=timeout) if base_url else httpx.AsyncClient(timeout=timeout)
            pool[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close and forget the pooled clients of the running loop."""
    loop = asyncio.get_running_loop()
    with _LOCK:
        pool = _POOLS.pop(loop, {})
    for c in pool.values():
        await c.aclose()


__all__ = ["get_httpx_client", "aclose_all_clients", "build_timeout"]
