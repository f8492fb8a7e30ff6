"""mistral_providers.config.defaults
=================================

Small, stable default values used across the package. Everything here can be
overridden through ``get_provider_config`` (config file, environment, explicit
overrides) or dedicated environment variables; these are the fallbacks.

Only plain constants live here so any module may import this one without
creating a cycle.
"""

from __future__ import annotations

from pathlib import Path

# ---- Mistral provider ----
MISTRAL_PROVIDER_ID = "mistral"
MISTRAL_PROVIDER_NAME = "Mistral"
MISTRAL_DEFAULT_BASE_URL = "https://api.mistral.ai/v1"
MISTRAL_DEFAULT_MODEL = "mistral-small-latest"
MISTRAL_DEFAULT_FAST_MODEL = "mistral-small-latest"
# Concurrent in-flight streaming calls per model instance; extra calls queue.
MISTRAL_MAX_CONCURRENT_REQUESTS = 4
# Username recorded alongside the API key in the credential store.
MISTRAL_CREDENTIAL_USERNAME = "Bearer"

# ---- Token counting ----
# Mistral publishes no tokenizer for tiktoken; counts use the gpt-4 encoding.
TOKEN_COUNT_MODEL = "gpt-4"

# ---- Timeouts (seconds) ----
DEFAULT_START_TIMEOUT_SECONDS = 30.0
DEFAULT_STREAM_TIMEOUT_SECONDS = 60.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

# ---- CLI ----
PROVIDER_CLI_PROG = "mistral-providers"

# ---- SQLite credential store ----
DEFAULT_DB_PATH = Path("~/.mistral_providers/credentials.db")
SQLITE_BUSY_TIMEOUT_MS = 5000
SQLITE_JOURNAL_MODE = "WAL"
SQLITE_SYNCHRONOUS = "NORMAL"


__all__ = [
    "MISTRAL_PROVIDER_ID",
    "MISTRAL_PROVIDER_NAME",
    "MISTRAL_DEFAULT_BASE_URL",
    "MISTRAL_DEFAULT_MODEL",
    "MISTRAL_DEFAULT_FAST_MODEL",
    "MISTRAL_MAX_CONCURRENT_REQUESTS",
    "MISTRAL_CREDENTIAL_USERNAME",
    "TOKEN_COUNT_MODEL",
    "DEFAULT_START_TIMEOUT_SECONDS",
    "DEFAULT_STREAM_TIMEOUT_SECONDS",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "PROVIDER_CLI_PROG",
    "DEFAULT_DB_PATH",
    "SQLITE_BUSY_TIMEOUT_MS",
    "SQLITE_JOURNAL_MODE",
    "SQLITE_SYNCHRONOUS",
]
