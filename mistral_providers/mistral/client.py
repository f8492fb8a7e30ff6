"""Mistral provider adapter.

Purpose:
    Expose Mistral chat models as vendor-neutral streaming language models:
    translate the request, open the streaming call, map chunks to events.

External dependencies:
    - ``httpx`` (pooled async client from ``base.http``) for transport.
    - ``tiktoken`` for approximate prompt token counts.
    - The SQLite credential store for persisted API keys.

Concurrency:
    Each model instance admits at most ``MISTRAL_MAX_CONCURRENT_REQUESTS``
    streaming calls at once; further calls wait for a permit. A permit is held
    from before the HTTP request until the returned event stream is exhausted,
    fails, is closed, or is garbage collected without being closed.

Failure modes:
    - Missing key, connection failure or a non-2xx status raise
      ``ProviderError`` from :meth:`MistralLanguageModel.stream_completion`
      (logged as ``stream.error``).
    - Anything after the first chunk arrives as an ``ErrorEvent``.

Metrics:
    Each stream ends with one ``stream.adapter.end``/``stream.adapter.error``
    event carrying emitted count, time to first token, duration and tokens.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from typing import Any, Dict, List, Optional, Set

import httpx

from ..base.errors import provider_error_from
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionRequest, ToolChoice
from ..base.streaming import CompletionEvent, ErrorEvent, StreamMetrics, finalize_stream
from ..config import get_provider_config
from ..config.defaults import (
    MISTRAL_DEFAULT_BASE_URL,
    MISTRAL_MAX_CONCURRENT_REQUESTS,
    MISTRAL_PROVIDER_ID,
    MISTRAL_PROVIDER_NAME,
)
from ..persistence.interfaces import ICredentialStore
from .auth import MistralAuthState
from .catalog import MistralModel, merge_models
from .event_mapper import MistralEventMapper
from .tokens import count_tokens as _count_tokens
from .transport import ChunkStream, stream_completion as _open_stream
from .translate import into_mistral


# Close tasks for abandoned streams; the loop only keeps weak references.
_CLOSING: Set["asyncio.Task[None]"] = set()


def _release_abandoned(
    semaphore: asyncio.Semaphore,
    chunks: ChunkStream,
    logger: logging.Logger,
    ctx: LogContext,
    metrics: StreamMetrics,
) -> None:
    # Runs when an EventStream is collected without being closed.
    semaphore.release()
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None
    if loop is not None and not loop.is_closed():
        task = loop.create_task(chunks.aclose())
        _CLOSING.add(task)
        task.add_done_callback(_CLOSING.discard)
    finalize_stream(logger=logger, ctx=ctx, metrics=metrics, error_code=None, cancelled=True)


class EventStream:
    """Async iterator of the completion events of one streaming call.

    Closing (explicitly, by exhaustion or by failure) closes the HTTP
    response, returns the concurrency permit and logs the finalize event,
    exactly once. A stream dropped unclosed gives its permit back when it is
    collected and logs the finalize event as cancelled.
    """

    def __init__(
        self,
        chunks: ChunkStream,
        mapper: MistralEventMapper,
        semaphore: asyncio.Semaphore,
        *,
        logger: logging.Logger,
        ctx: LogContext,
        metrics: StreamMetrics,
    ) -> None:
        self._chunks = chunks
        self._events = mapper.map_stream(chunks)
        self._semaphore = semaphore
        self._logger = logger
        self._ctx = ctx
        self._metrics = metrics
        self._error_code: Optional[str] = None
        self._closed = False
        self._finalizer = weakref.finalize(self, _release_abandoned, semaphore, chunks, logger, ctx, metrics)

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> CompletionEvent:
        if self._closed:
            raise StopAsyncIteration
        try:
            event = await self._events.__anext__()
        except StopAsyncIteration:
            await self.aclose()
            raise
        except asyncio.CancelledError:
            await self._close(cancelled=True)
            raise
        self._metrics.observe(event)
        if isinstance(event, ErrorEvent) and self._error_code is None:
            self._error_code = event.error.code.value
        return event

    async def __aenter__(self) -> "EventStream":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._close(cancelled=False)

    async def _close(self, *, cancelled: bool) -> None:
        if self._closed:
            return
        self._closed = True
        self._finalizer.detach()
        try:
            await self._events.aclose()
            await self._chunks.aclose()
        finally:
            self._semaphore.release()
            finalize_stream(
                logger=self._logger,
                ctx=self._ctx,
                metrics=self._metrics,
                error_code=self._error_code,
                cancelled=cancelled,
            )


class MistralLanguageModel:
    """One Mistral model bound to its provider's authentication state."""

    def __init__(
        self,
        model: MistralModel,
        state: MistralAuthState,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.model = model
        self._state = state
        self._http_client = http_client
        self._logger = logger or get_logger("providers.mistral")
        self._semaphore = asyncio.Semaphore(MISTRAL_MAX_CONCURRENT_REQUESTS)

    @property
    def id(self) -> str:
        return self.model.id

    @property
    def name(self) -> str:
        return self.model.display_name

    @property
    def provider_id(self) -> str:
        return MISTRAL_PROVIDER_ID

    @property
    def provider_name(self) -> str:
        return MISTRAL_PROVIDER_NAME

    def supports_tools(self) -> bool:
        return self.model.supports_tools

    def supports_tool_choice(self, choice: ToolChoice) -> bool:
        return self.model.supports_tools

    def supports_images(self) -> bool:
        return self.model.supports_images

    def telemetry_id(self) -> str:
        return f"{MISTRAL_PROVIDER_ID}/{self.model.id}"

    def max_token_count(self) -> int:
        return self.model.max_tokens

    def max_output_tokens(self) -> Optional[int]:
        return self.model.max_output_tokens

    async def count_tokens(self, request: CompletionRequest) -> int:
        return await _count_tokens(request)

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(None, purpose="mistral.stream")

    async def stream_completion(self, request: CompletionRequest) -> EventStream:
        """Start a streaming completion and return its event stream.

        Waits for a concurrency permit first. Raises ``ProviderError`` when
        the call cannot start; the permit is released in that case.
        """
        wire = into_mistral(request, self.model.id, self.max_output_tokens())
        ctx = LogContext(provider=MISTRAL_PROVIDER_ID, model=self.model.id)
        metrics = StreamMetrics()
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            attempt=None,
            emitted=False,
            tokens=None,
            messages=len(wire.messages),
            tools=len(wire.tools) or None,
        )
        await self._semaphore.acquire()
        try:
            chunks = await _open_stream(self._client(), self._state.api_url, self._state.api_key, wire)
        except asyncio.CancelledError:
            self._semaphore.release()
            raise
        except Exception as exc:
            self._semaphore.release()
            err = provider_error_from(exc, provider=MISTRAL_PROVIDER_ID, model=self.model.id)
            normalized_log_event(
                self._logger,
                "stream.error",
                ctx,
                phase="start",
                attempt=None,
                error_code=err.code.value,
                emitted=False,
                tokens=None,
                error=err.message,
                level=logging.ERROR,
            )
            if err is exc:
                raise
            raise err from exc
        return EventStream(
            chunks,
            MistralEventMapper(model=self.model.id, logger=self._logger),
            self._semaphore,
            logger=self._logger,
            ctx=ctx,
            metrics=metrics,
        )


class MistralProvider:
    """Mistral provider: model catalog plus credential management."""

    def __init__(
        self,
        overrides: Optional[Dict[str, Any]] = None,
        store: Optional[ICredentialStore] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        cfg = get_provider_config(MISTRAL_PROVIDER_ID, overrides)
        self._config = cfg
        self._state = MistralAuthState(cfg.get("base_url") or MISTRAL_DEFAULT_BASE_URL, store)
        self._http_client = http_client
        self._logger = get_logger("providers.mistral")
        self._models: Dict[str, MistralLanguageModel] = {}

    @property
    def id(self) -> str:
        return MISTRAL_PROVIDER_ID

    @property
    def name(self) -> str:
        return MISTRAL_PROVIDER_NAME

    @property
    def api_url(self) -> str:
        return self._state.api_url

    @property
    def state(self) -> MistralAuthState:
        return self._state

    def _language_model(self, model: MistralModel) -> MistralLanguageModel:
        # One instance per id so concurrent callers share its permits.
        existing = self._models.get(model.id)
        if existing is None or existing.model != model:
            existing = MistralLanguageModel(
                model,
                self._state,
                http_client=self._http_client,
                logger=self._logger,
            )
            self._models[model.id] = existing
        return existing

    def _catalog(self) -> Dict[str, MistralModel]:
        return {m.id: m for m in merge_models(self._config.get("available_models") or [])}

    def provided_models(self) -> List[MistralLanguageModel]:
        return [self._language_model(m) for m in self._catalog().values()]

    def model(self, model_id: str) -> Optional[MistralLanguageModel]:
        found = self._catalog().get(model_id)
        return self._language_model(found) if found is not None else None

    def default_model(self) -> Optional[MistralLanguageModel]:
        return self.model(self._config.get("model"))

    def default_fast_model(self) -> Optional[MistralLanguageModel]:
        return self.model(self._config.get("fast_model"))

    def is_authenticated(self) -> bool:
        return self._state.is_authenticated()

    async def authenticate(self) -> None:
        await self._state.authenticate()

    async def set_api_key(self, api_key: str) -> None:
        await self._state.set_api_key(api_key)

    async def reset_credentials(self) -> None:
        await self._state.reset_api_key()


def create_provider(
    overrides: Optional[Dict[str, Any]] = None,
    db_path: Optional[str] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> MistralProvider:
    """Build a provider backed by the SQLite credential store."""
    from ..persistence.sqlite import open_credential_store

    return MistralProvider(overrides=overrides, store=open_credential_store(db_path), http_client=http_client)


__all__ = ["EventStream", "MistralLanguageModel", "MistralProvider", "create_provider"]
