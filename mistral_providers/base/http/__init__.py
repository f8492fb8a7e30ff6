"""HTTP utilities package for providers.

Exposes pooled async httpx clients.
"""

from .client import aclose_all_clients, build_timeout, get_httpx_client

__all__ = ["get_httpx_client", "aclose_all_clients", "build_timeout"]
