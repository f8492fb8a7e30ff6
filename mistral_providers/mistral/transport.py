"""Mistral streaming transport.

Purpose:
    Send one chat-completions request and yield the decoded server-sent event
    chunks as :class:`StreamResponse` objects.

External dependencies:
    - ``httpx`` async client (pooled by the caller) for the streaming POST.
    - ``pydantic`` for chunk decoding.

Failure modes:
    - Missing API key: ``ProviderError(AUTH)`` before any network I/O.
    - Connection failures and non-2xx statuses: a classified ``ProviderError``
      raised before the first chunk. Non-2xx messages carry the status and the
      response body.
    - A ``data:`` payload that does not decode: ``ProviderError(VALIDATION)``
      raised from the iterator.

Lifecycle:
    The HTTP response is closed when the iterator finishes, fails or is
    closed early (``aclose``).
"""

from __future__ import annotations

from typing import Optional, Union

import httpx
from pydantic import ValidationError

from ..base.constants import MISSING_API_KEY_ERROR, SSE_DATA_PREFIX, SSE_DONE_SENTINEL
from ..base.errors import ErrorCode, ProviderError, classify_exception, is_retryable, provider_error_from
from ..config.defaults import MISTRAL_PROVIDER_ID
from .wire import MistralRequest, StreamResponse

# Returned by ``parse_sse_line`` for the end-of-stream marker.
DONE = object()


def parse_sse_line(line: str) -> Union[StreamResponse, None, object]:
    """Decode one line of the event stream.

    Returns ``None`` for lines that carry no chunk (blank lines, comments,
    non-``data:`` fields), :data:`DONE` for ``data: [DONE]`` and the decoded
    chunk otherwise.
    """
    line = line.strip()
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    data = line[len(SSE_DATA_PREFIX):].strip()
    if not data:
        return None
    if data == SSE_DONE_SENTINEL:
        return DONE
    try:
        return StreamResponse.model_validate_json(data)
    except ValidationError as exc:
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message=f"Failed to parse Mistral stream chunk: {data[:200]}",
            provider=MISTRAL_PROVIDER_ID,
            raw=exc,
        ) from exc


def _status_error(response: httpx.Response, body: str, model: Optional[str]) -> ProviderError:
    exc = httpx.HTTPStatusError(
        f"{response.status_code} {body}",
        request=response.request,
        response=response,
    )
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=f"Failed to connect to Mistral API: {response.status_code} {body}",
        provider=MISTRAL_PROVIDER_ID,
        model=model,
        retryable=is_retryable(code),
        raw=exc,
    )


async def _open(client: httpx.AsyncClient, api_url: str, api_key: str, request: MistralRequest) -> httpx.Response:
    http_request = client.build_request(
        "POST",
        f"{api_url.rstrip('/')}/chat/completions",
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        json=request.to_payload(),
    )
    try:
        response = await client.send(http_request, stream=True)
    except httpx.HTTPError as exc:
        raise provider_error_from(exc, provider=MISTRAL_PROVIDER_ID, model=request.model) from exc
    if not response.is_success:
        try:
            body = (await response.aread()).decode("utf-8", errors="replace")
        finally:
            await response.aclose()
        raise _status_error(response, body, request.model)
    return response


class ChunkStream:
    """Async iterator of the decoded chunks of one open response.

    ``aclose`` is idempotent and releases the connection whether or not
    iteration ever started.
    """

    def __init__(self, response: httpx.Response, model: Optional[str] = None) -> None:
        self._response = response
        self._model = model
        self._lines = response.aiter_lines()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> "ChunkStream":
        return self

    async def __anext__(self) -> StreamResponse:
        if self._closed:
            raise StopAsyncIteration
        try:
            while True:
                line = await self._lines.__anext__()
                parsed = parse_sse_line(line)
                if parsed is None:
                    continue
                if parsed is DONE:
                    raise StopAsyncIteration
                return parsed
        except StopAsyncIteration:
            await self.aclose()
            raise
        except ProviderError:
            await self.aclose()
            raise
        except httpx.HTTPError as exc:
            await self.aclose()
            raise provider_error_from(exc, provider=MISTRAL_PROVIDER_ID, model=self._model) from exc

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()


async def stream_completion(
    client: httpx.AsyncClient,
    api_url: str,
    api_key: Optional[str],
    request: MistralRequest,
) -> ChunkStream:
    """Open a streaming completion and return its chunk stream.

    Everything that can fail before the first chunk (missing key, connection,
    non-2xx status) raises here rather than from the iterator.
    """
    if not api_key:
        raise ProviderError(
            code=ErrorCode.AUTH,
            message=MISSING_API_KEY_ERROR,
            provider=MISTRAL_PROVIDER_ID,
            model=request.model,
        )
    response = await _open(client, api_url, api_key, request)
    return ChunkStream(response, request.model)


__all__ = ["ChunkStream", "DONE", "parse_sse_line", "stream_completion"]
