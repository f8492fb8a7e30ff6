"""Tests for the streaming transport (httpx.MockTransport, no network).

Covers:
- request shape (URL, headers, body)
- missing key rejected before I/O
- non-2xx raised before any chunk
- SSE line handling, [DONE] termination, malformed payloads
- response closing
"""
from __future__ import annotations

import json

import httpx
import pytest

from mistral_providers.base.constants import MISSING_API_KEY_ERROR
from mistral_providers.base.errors import ErrorCode, ProviderError
from mistral_providers.mistral.transport import DONE, parse_sse_line, stream_completion
from mistral_providers.mistral.wire import MistralRequest, StreamResponse, UserMessage
from mistral_providers.tests.utils import chunk, mock_client, sse_body, sse_response

API_URL = "https://api.mistral.ai/v1"


def _request() -> MistralRequest:
    return MistralRequest(model="mistral-small-latest", messages=[UserMessage(content="Hi")])


def test_parse_sse_line_variants():
    assert parse_sse_line("") is None  # nosec B101
    assert parse_sse_line(": keep-alive") is None  # nosec B101
    assert parse_sse_line("event: message") is None  # nosec B101
    assert parse_sse_line("data: [DONE]") is DONE  # nosec B101
    parsed = parse_sse_line("data: " + json.dumps(chunk("hi")))
    assert isinstance(parsed, StreamResponse)  # nosec B101
    assert parsed.choices[0].delta.content == "hi"  # nosec B101


def test_parse_sse_line_ignores_unknown_fields():
    data = chunk("hi")
    data["choices"][0]["logprobs"] = None
    data["system_fingerprint"] = "fp"
    parsed = parse_sse_line("data:" + json.dumps(data))
    assert parsed.choices[0].delta.content == "hi"  # nosec B101


def test_parse_sse_line_malformed_raises_validation():
    with pytest.raises(ProviderError) as info:
        parse_sse_line("data: {not json")
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101


@pytest.mark.asyncio
async def test_missing_key_raises_without_io():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return sse_response([])

    async with mock_client(handler) as client:
        with pytest.raises(ProviderError) as info:
            await stream_completion(client, API_URL, None, _request())

    assert info.value.code is ErrorCode.AUTH  # nosec B101
    assert info.value.message == MISSING_API_KEY_ERROR  # nosec B101
    assert calls == []  # nosec B101


@pytest.mark.asyncio
async def test_request_shape_and_chunks():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["content_type"] = request.headers["Content-Type"]
        seen["body"] = json.loads(request.content)
        return sse_response([chunk("Hel"), chunk("lo"), chunk(finish_reason="stop")])

    async with mock_client(handler) as client:
        chunks = await stream_completion(client, API_URL + "/", "sk-test", _request())
        received = [c async for c in chunks]

    assert seen["url"] == "https://api.mistral.ai/v1/chat/completions"  # nosec B101
    assert seen["auth"] == "Bearer sk-test"  # nosec B101
    assert seen["content_type"] == "application/json"  # nosec B101
    assert seen["body"] == {  # nosec B101
        "model": "mistral-small-latest",
        "messages": [{"role": "user", "content": "Hi"}],
        "stream": True,
    }
    assert [c.choices[0].delta.content for c in received] == ["Hel", "lo", None]  # nosec B101
    assert chunks.closed  # nosec B101


@pytest.mark.asyncio
async def test_done_ends_stream_before_trailing_data():
    body = sse_body([chunk("a")]) + sse_body([chunk("after done")], done=False)

    async with mock_client(lambda r: httpx.Response(200, content=body)) as client:
        chunks = await stream_completion(client, API_URL, "k", _request())
        received = [c async for c in chunks]

    assert [c.choices[0].delta.content for c in received] == ["a"]  # nosec B101


@pytest.mark.asyncio
async def test_stream_without_done_ends_at_eof():
    body = sse_body([chunk("a"), chunk("b")], done=False)

    async with mock_client(lambda r: httpx.Response(200, content=body)) as client:
        chunks = await stream_completion(client, API_URL, "k", _request())
        received = [c async for c in chunks]

    assert len(received) == 2  # nosec B101


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, code",
    [
        (401, ErrorCode.AUTH),
        (422, ErrorCode.VALIDATION),
        (429, ErrorCode.RATE_LIMIT),
        (500, ErrorCode.SERVER_ERROR),
        (503, ErrorCode.UNAVAILABLE),
    ],
)
async def test_non_success_status_raises_before_chunks(status, code):
    async with mock_client(lambda r: httpx.Response(status, text="nope")) as client:
        with pytest.raises(ProviderError) as info:
            await stream_completion(client, API_URL, "k", _request())

    assert info.value.code is code  # nosec B101
    assert info.value.message == f"Failed to connect to Mistral API: {status} nope"  # nosec B101


@pytest.mark.asyncio
async def test_connection_error_is_classified():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    async with mock_client(handler) as client:
        with pytest.raises(ProviderError) as info:
            await stream_completion(client, API_URL, "k", _request())

    assert info.value.code is ErrorCode.TRANSIENT  # nosec B101
    assert info.value.retryable is True  # nosec B101


@pytest.mark.asyncio
async def test_malformed_chunk_raises_from_iterator_and_closes():
    body = sse_body([chunk("ok")], done=False) + b"data: {broken\n\n"

    async with mock_client(lambda r: httpx.Response(200, content=body)) as client:
        chunks = await stream_completion(client, API_URL, "k", _request())
        first = await chunks.__anext__()
        with pytest.raises(ProviderError) as info:
            await chunks.__anext__()

    assert first.choices[0].delta.content == "ok"  # nosec B101
    assert info.value.code is ErrorCode.VALIDATION  # nosec B101
    assert chunks.closed  # nosec B101


@pytest.mark.asyncio
async def test_aclose_before_iteration_closes_response():
    async with mock_client(lambda r: sse_response([chunk("a")])) as client:
        chunks = await stream_completion(client, API_URL, "k", _request())
        await chunks.aclose()
        await chunks.aclose()
        remaining = [c async for c in chunks]

    assert chunks.closed and remaining == []  # nosec B101
