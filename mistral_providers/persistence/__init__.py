"""Persistence layer: credential store protocol and SQLite implementation."""

from .interfaces import Credential, ICredentialStore

__all__ = ["Credential", "ICredentialStore"]
