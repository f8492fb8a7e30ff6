"""Shared helpers for the test suite: stream bodies, mock HTTP, fake stores."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from mistral_providers.persistence.interfaces import Credential


class MemoryCredentialStore:
    """In-memory ``ICredentialStore``."""

    def __init__(self, fail_delete: bool = False) -> None:
        self.items: Dict[str, Credential] = {}
        self.fail_delete = fail_delete

    def read_credentials(self, url: str) -> Optional[Credential]:
        return self.items.get(url)

    def write_credentials(self, url: str, username: str, password: bytes) -> None:
        self.items[url] = Credential(url=url, username=username, password=password)

    def delete_credentials(self, url: str) -> None:
        if self.fail_delete:
            raise OSError("keychain unavailable")
        self.items.pop(url, None)

    def list_urls(self) -> List[str]:
        return sorted(self.items)


class ListHandler(logging.Handler):
    """Capture log records into a list for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def events(self) -> List[Dict[str, Any]]:
        return [json.loads(m) for m in self.messages]


def sse_body(chunks: Iterable[Dict[str, Any]], done: bool = True) -> bytes:
    """Encode chunk dicts as a server-sent event stream."""
    lines = [f"data: {json.dumps(c)}\n\n" for c in chunks]
    if done:
        lines.append("data: [DONE]\n\n")
    return "".join(lines).encode("utf-8")


def chunk(
    content: Optional[str] = None,
    *,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    finish_reason: Optional[str] = None,
    usage: Optional[Dict[str, int]] = None,
    chunk_id: str = "cmpl-1",
) -> Dict[str, Any]:
    """Build one streamed chunk dict with a single choice."""
    delta: Dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if tool_calls is not None:
        delta["tool_calls"] = tool_calls
    data: Dict[str, Any] = {
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": 1,
        "model": "mistral-small-latest",
        "choices": [{"index": 0, "delta": delta, "finish_reason": finish_reason}],
    }
    if usage is not None:
        data["usage"] = usage
    return data


def tool_fragment(index: int, *, id: Optional[str] = None, name: Optional[str] = None, arguments: Optional[str] = None) -> Dict[str, Any]:
    function: Dict[str, Any] = {}
    if name is not None:
        function["name"] = name
    if arguments is not None:
        function["arguments"] = arguments
    frag: Dict[str, Any] = {"index": index, "function": function}
    if id is not None:
        frag["id"] = id
    return frag


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def sse_response(chunks: Iterable[Dict[str, Any]], done: bool = True) -> httpx.Response:
    return httpx.Response(200, content=sse_body(chunks, done), headers={"content-type": "text/event-stream"})
