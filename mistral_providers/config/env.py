"""mistral_providers.config.env
============================

Environment variable mapping and helpers for provider credentials.

Purpose
-------
- Single source of truth for the provider -> API key variable mapping.
- Small lookup helpers shared by authentication, the keys repository and the
  CLI hint output.

Failure Modes
-------------
- Helpers return ``None`` for unknown providers or unset variables and never
  raise; callers decide how to proceed (credential store, error, hint).
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

# Canonical provider -> env var mapping
ENV_MAP: Dict[str, str] = {
    "mistral": "MISTRAL_API_KEY",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_name(provider: str) -> Optional[str]:
    """Return the API key environment variable name for a provider, if known."""
    return ENV_MAP.get(provider.lower()) if provider else None


def resolve_provider_key(provider: str) -> Tuple[Optional[str], Optional[str]]:
    """Resolve an API key for a provider from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        ``(value, env_var_used)``; ``(None, None)`` when unset or empty.
    """
    name = get_env_var_name(provider)
    if name and (val := os.environ.get(name)):
        return val, name
    return None, None


__all__ = [
    "ENV_MAP",
    "is_placeholder",
    "get_env_var_name",
    "resolve_provider_key",
]
