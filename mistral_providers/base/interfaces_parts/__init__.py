"""Provider-facing Protocols, one per module."""

from .language_model import LanguageModel
from .language_model_provider import LanguageModelProvider

__all__ = ["LanguageModel", "LanguageModelProvider"]
