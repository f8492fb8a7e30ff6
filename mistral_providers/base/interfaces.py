"""
Provider-agnostic interfaces (Protocols) for the providers layer.

Re-exports the single-class modules under
``mistral_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import LanguageModel, LanguageModelProvider

__all__ = ["LanguageModel", "LanguageModelProvider"]
