"""Mistral provider adapter.

Request translation, stream event mapping, transport and the provider/model
surface for Mistral's chat-completions API.
"""

from .auth import MistralAuthState
from .catalog import AvailableModel, BUILTIN_MODELS, MistralModel, default_fast_model, default_model, merge_models
from .client import EventStream, MistralLanguageModel, MistralProvider, create_provider
from .event_mapper import MistralEventMapper
from .transport import parse_sse_line, stream_completion
from .translate import insert_placeholder_assistants, into_mistral, translate_tool_choice

__all__ = [
    "AvailableModel",
    "BUILTIN_MODELS",
    "EventStream",
    "MistralAuthState",
    "MistralEventMapper",
    "MistralLanguageModel",
    "MistralModel",
    "MistralProvider",
    "create_provider",
    "default_fast_model",
    "default_model",
    "insert_placeholder_assistants",
    "into_mistral",
    "merge_models",
    "parse_sse_line",
    "stream_completion",
    "translate_tool_choice",
]
