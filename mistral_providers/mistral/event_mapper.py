"""Stream event mapping: Mistral stream chunks -> vendor-neutral events.

Purpose:
    Turn the decoded ``StreamResponse`` chunks of one streaming call into
    :mod:`mistral_providers.base.streaming.events`, in arrival order.

State:
    A mapper instance belongs to exactly one call. Tool-call fragments are
    accumulated by their stream index and only emitted when a
    ``tool_calls`` finish signal drains the accumulator; draining is the only
    removal path.

Failure modes:
    - A chunk without choices yields a single ``ErrorEvent``.
    - An accumulated call missing its id or name yields an ``ErrorEvent``;
      arguments that are not valid JSON yield a
      ``ToolUseJsonParseErrorEvent``. Neither stops the stream.
    - An unknown finish reason is logged at error level and still ends the
      turn normally; the raw value rides on ``StopEvent``.
    - A transport failure while pulling the next chunk (``map_stream``) ends
      the sequence with a terminal ``ErrorEvent``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Dict, List, Optional

import httpx

from ..base.constants import INCOMPLETE_TOOL_CALL_ERROR, NO_CHOICES_ERROR
from ..base.errors import ErrorCode, ProviderError, provider_error_from
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ToolUse
from ..base.streaming import (
    CompletionEvent,
    ErrorEvent,
    StopEvent,
    StopReason,
    TextEvent,
    TokenUsage,
    ToolUseEvent,
    ToolUseJsonParseErrorEvent,
    UsageUpdateEvent,
)
from ..config.defaults import MISTRAL_PROVIDER_ID
from .wire import StreamResponse, ToolCallChunk


@dataclass
class RawToolCall:
    """Fragments of one tool call collected so far."""

    id: str = ""
    name: str = ""
    arguments: str = ""


class MistralEventMapper:
    """Stateful chunk-to-event mapper for a single streaming call."""

    def __init__(self, model: Optional[str] = None, logger: Optional[logging.Logger] = None) -> None:
        self._model = model
        self._logger = logger or get_logger("providers.mistral.events")
        self._ctx = LogContext(provider=MISTRAL_PROVIDER_ID, model=model)
        self._tool_calls: Dict[int, RawToolCall] = {}

    @property
    def pending_tool_calls(self) -> int:
        return len(self._tool_calls)

    def _error(self, message: str) -> ErrorEvent:
        return ErrorEvent(
            ProviderError(
                code=ErrorCode.VALIDATION,
                message=message,
                provider=MISTRAL_PROVIDER_ID,
                model=self._model,
            )
        )

    def map_event(self, chunk: StreamResponse) -> List[CompletionEvent]:
        """Map one chunk to the ordered events it produces."""
        if not chunk.choices:
            return [self._error(NO_CHOICES_ERROR)]

        choice = chunk.choices[0]
        events: List[CompletionEvent] = []

        if choice.delta.content is not None:
            events.append(TextEvent(choice.delta.content))

        for fragment in choice.delta.tool_calls or ():
            self._accumulate(fragment)

        if chunk.usage is not None:
            events.append(
                UsageUpdateEvent(
                    TokenUsage(
                        input_tokens=chunk.usage.prompt_tokens,
                        output_tokens=chunk.usage.completion_tokens,
                    )
                )
            )

        reason = choice.finish_reason
        if reason == "stop":
            events.append(StopEvent(StopReason.END_TURN))
        elif reason == "tool_calls":
            events.extend(self._process_tool_calls())
            events.append(StopEvent(StopReason.TOOL_USE))
        elif reason is not None:
            log_event(
                self._logger,
                "stream.unexpected_finish_reason",
                self._ctx.with_response_id(chunk.id),
                level=logging.ERROR,
                finish_reason=reason,
            )
            events.append(StopEvent(StopReason.END_TURN, unexpected_finish_reason=reason))

        return events

    def _accumulate(self, fragment: ToolCallChunk) -> None:
        entry = self._tool_calls.setdefault(fragment.index, RawToolCall())
        if fragment.id:
            entry.id = fragment.id
        if fragment.function is not None:
            if fragment.function.name is not None:
                entry.name = fragment.function.name
            if fragment.function.arguments is not None:
                entry.arguments += fragment.function.arguments

    def _process_tool_calls(self) -> List[CompletionEvent]:
        calls, self._tool_calls = self._tool_calls, {}
        events: List[CompletionEvent] = []
        for call in calls.values():
            if not call.id or not call.name:
                events.append(self._error(INCOMPLETE_TOOL_CALL_ERROR))
                continue
            try:
                parsed = json.loads(call.arguments)
            except json.JSONDecodeError as exc:
                events.append(
                    ToolUseJsonParseErrorEvent(
                        id=call.id,
                        tool_name=call.name,
                        raw_input=call.arguments,
                        json_parse_error=str(exc),
                    )
                )
                continue
            events.append(
                ToolUseEvent(
                    ToolUse(
                        id=call.id,
                        name=call.name,
                        input=parsed,
                        raw_input=call.arguments,
                        is_input_complete=True,
                    )
                )
            )
        return events

    async def map_stream(self, chunks: AsyncIterator[StreamResponse]) -> AsyncIterator[CompletionEvent]:
        """Map ``chunks`` lazily; a failure pulling a chunk ends the sequence."""
        iterator = chunks.__aiter__()
        while True:
            try:
                chunk = await iterator.__anext__()
            except StopAsyncIteration:
                return
            except (ProviderError, httpx.HTTPError) as exc:
                yield ErrorEvent(provider_error_from(exc, provider=MISTRAL_PROVIDER_ID, model=self._model))
                return
            for event in self.map_event(chunk):
                yield event


__all__ = ["MistralEventMapper", "RawToolCall"]
