"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (base URL, default models, model overrides).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) named by PROVIDERS_CONFIG_FILE
    3. Environment variables (MISTRAL_MODEL, MISTRAL_FAST_MODEL, MISTRAL_BASE_URL)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_provider_config(provider)``.

External Config File
--------------------
JSON is tried first, YAML second. Example::

    mistral:
      base_url: https://api.mistral.ai/v1
      model: mistral-large-latest
      available_models:
        - name: my-finetune
          display_name: My Finetune
          max_tokens: 32000
          supports_tools: true

API keys are deliberately not part of this configuration; they are resolved
by ``MistralAuthState`` from ``MISTRAL_API_KEY`` or the credential store.

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
* reset_config_cache() -> None
"""
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    MISTRAL_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_FAST_MODEL,
    MISTRAL_DEFAULT_MODEL,
)
from .env import is_placeholder


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "mistral": {
        "base_url": MISTRAL_DEFAULT_BASE_URL,
        "model": MISTRAL_DEFAULT_MODEL,
        "fast_model": MISTRAL_DEFAULT_FAST_MODEL,
        "available_models": [],
    },
}

ENV_FIELD_MAP = {
    "model": "MODEL",
    "fast_model": "FAST_MODEL",
    "base_url": "BASE_URL",
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Load ``KEY=VALUE`` lines from the dotenv file once per process.

    The path comes from ``DOTENV_FILE`` (default ``.env``). Existing variables
    are only replaced when their current value looks like a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _parse_config_text(text: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            data = None
    return data if isinstance(data, dict) else {}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    _FILE_CACHE = _parse_config_text(Path(path).read_text(encoding="utf-8"))
    return _FILE_CACHE


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    prefix = provider.upper()
    for field, suffix in ENV_FIELD_MAP.items():
        val = os.getenv(f"{prefix}_{suffix}")
        if val:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    The returned dict is a fresh copy; mutating it never leaks into defaults.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS.get(name, {}))

    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= copy.deepcopy(file_cfg)

    cfg |= _env_overrides(name)

    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}

    if isinstance(cfg.get("base_url"), str):
        cfg["base_url"] = cfg["base_url"].rstrip("/")
    return cfg


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


def reset_config_cache() -> None:
    """Forget the cached config file and dotenv state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = [
    "get_provider_config",
    "get_model",
    "reset_config_cache",
    "DEFAULTS",
]
