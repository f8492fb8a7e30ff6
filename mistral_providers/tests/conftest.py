"""Pytest configuration for the mistral_providers test suite.

Every test starts from a clean configuration: no API key in the
environment, no config or dotenv file, and a throwaway credential database.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from mistral_providers.config import reset_config_cache
from mistral_providers.config.env import ENV_MAP

from mistral_providers.tests.utils import MemoryCredentialStore

_CONFIG_VARS = (
    "MISTRAL_MODEL",
    "MISTRAL_FAST_MODEL",
    "MISTRAL_BASE_URL",
    "PROVIDERS_CONFIG_FILE",
    "PROVIDERS_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    for name in (*ENV_MAP.values(), *_CONFIG_VARS):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("PROVIDERS_DB_PATH", str(tmp_path / "credentials.db"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def memory_store() -> MemoryCredentialStore:
    return MemoryCredentialStore()
