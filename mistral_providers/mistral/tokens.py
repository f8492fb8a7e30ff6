"""Approximate prompt token counting.

Mistral's tokenizer is not available through tiktoken, so counts use the
gpt-4 encoding with the chat framing overhead of the OpenAI cookbook: three
tokens per message plus three priming the reply.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Iterable, Tuple

import tiktoken

from ..base.models import CompletionRequest
from ..config.defaults import TOKEN_COUNT_MODEL

TOKENS_PER_MESSAGE = 3
REPLY_PRIMER_TOKENS = 3


@lru_cache(maxsize=4)
def _encoding(model: str) -> "tiktoken.Encoding":
    return tiktoken.encoding_for_model(model)


def num_tokens_from_messages(messages: Iterable[Tuple[str, str]], model: str = TOKEN_COUNT_MODEL) -> int:
    """Count tokens for ``(role, content)`` pairs."""
    enc = _encoding(model)
    total = 0
    for role, content in messages:
        total += TOKENS_PER_MESSAGE
        total += len(enc.encode(role))
        total += len(enc.encode(content))
    return total + REPLY_PRIMER_TOKENS


async def count_tokens(request: CompletionRequest) -> int:
    """Count the prompt tokens of ``request`` off the event loop."""
    messages = [(m.role.value, m.string_contents()) for m in request.messages]
    return await asyncio.to_thread(num_tokens_from_messages, messages)


__all__ = ["count_tokens", "num_tokens_from_messages"]
