"""Base shared constants for provider adapters.

Central location for message strings that callers and tests match on.

Security
--------
Only generic sentinel strings live here; no credentials.

# pragma: allowlist secret
"""
from __future__ import annotations

# Missing credential
MISSING_API_KEY_ERROR = "Missing Mistral API Key"  # pragma: allowlist secret - message text, not a secret
CREDENTIALS_NOT_FOUND_ERROR = "credentials not found"
INVALID_API_KEY_ERROR = "invalid Mistral API key"

# Stream shape anomalies
NO_CHOICES_ERROR = "Response contained no choices"
INCOMPLETE_TOOL_CALL_ERROR = "Received incomplete tool call: missing id or name"

# Substituted for image tool results, which the provider cannot receive.
TOOL_IMAGE_RESULT_PLACEHOLDER = (
    "[Tool responded with an image, but this client doesn't support these in Mistral models yet]"
)

# Content of the assistant message spliced between a tool result and a user turn.
PLACEHOLDER_ASSISTANT_CONTENT = " "

# Server-sent events framing
SSE_DATA_PREFIX = "data:"
SSE_DONE_SENTINEL = "[DONE]"

__all__ = [
    "MISSING_API_KEY_ERROR",
    "CREDENTIALS_NOT_FOUND_ERROR",
    "INVALID_API_KEY_ERROR",
    "NO_CHOICES_ERROR",
    "INCOMPLETE_TOOL_CALL_ERROR",
    "TOOL_IMAGE_RESULT_PLACEHOLDER",
    "PLACEHOLDER_ASSISTANT_CONTENT",
    "SSE_DATA_PREFIX",
    "SSE_DONE_SENTINEL",
]
