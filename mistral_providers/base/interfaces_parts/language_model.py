"""LanguageModel Protocol (single-class module).

Contract of one streaming-capable model exposed by a provider.
"""

from __future__ import annotations

from typing import AsyncIterator, Optional, Protocol, runtime_checkable

from ..models import CompletionRequest, ToolChoice
from ..streaming import CompletionEvent


@runtime_checkable
class LanguageModel(Protocol):
    """A single model of a provider.

    ``stream_completion`` raises ``ProviderError`` for failures that happen
    before the first event (missing key, rejected request); later anomalies
    arrive as events.
    """

    @property
    def id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def provider_id(self) -> str: ...

    @property
    def provider_name(self) -> str: ...

    def supports_tools(self) -> bool: ...

    def supports_tool_choice(self, choice: ToolChoice) -> bool: ...

    def supports_images(self) -> bool: ...

    def telemetry_id(self) -> str: ...

    def max_token_count(self) -> int: ...

    def max_output_tokens(self) -> Optional[int]: ...

    async def count_tokens(self, request: CompletionRequest) -> int: ...

    async def stream_completion(self, request: CompletionRequest) -> AsyncIterator[CompletionEvent]: ...
