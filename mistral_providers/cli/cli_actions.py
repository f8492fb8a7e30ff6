"""CLI action handlers.

Purpose
-------
Subcommand handlers for the mistral-providers CLI. No top-level side effects;
safe to import in tests.

Fallback & Error Semantics
--------------------------
- ``models`` and ``plan`` never touch the network or the credential store.
- ``run`` without a resolvable API key returns ``2`` and prints a JSON hint
  naming the environment variable to stderr.
- Failures while running print ``{"error": ...}`` to stderr and return ``1``.
- Every printed result is JSON so the output can be piped.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from ..base.constants import CREDENTIALS_NOT_FOUND_ERROR
from ..base.errors import ErrorCode, ProviderError
from ..base.http import aclose_all_clients
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import CompletionRequest, RequestMessage, Role, TextContent
from ..base.streaming import CompletionEvent, ErrorEvent, StopEvent, ToolUseEvent
from ..config.defaults import MISTRAL_PROVIDER_ID
from ..config.env import get_env_var_name
from ..mistral import MistralProvider, create_provider, into_mistral


def build_request(
    prompt: str,
    system: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> CompletionRequest:
    """Return a one-turn request, optionally preceded by a system message."""
    messages: List[RequestMessage] = []
    if system:
        messages.append(RequestMessage(role=Role.SYSTEM, content=[TextContent(system)]))
    messages.append(RequestMessage(role=Role.USER, content=[TextContent(prompt)]))
    return CompletionRequest(messages=messages, temperature=temperature, max_output_tokens=max_tokens)


def event_to_dict(event: CompletionEvent) -> Dict[str, Any]:
    """Return a JSON-serializable view of one completion event."""
    if isinstance(event, ErrorEvent):
        err = event.error
        return {
            "type": "error",
            "code": err.code.value,
            "message": err.message,
            "retryable": err.retryable,
        }
    if isinstance(event, StopEvent):
        data: Dict[str, Any] = {"type": "stop", "reason": event.reason.value}
        if event.unexpected_finish_reason is not None:
            data["unexpected_finish_reason"] = event.unexpected_finish_reason
        return data
    if isinstance(event, ToolUseEvent):
        return {"type": "tool_use", **asdict(event.tool_use)}
    name = type(event).__name__.replace("Event", "")
    return {"type": _snake(name), **asdict(event)}


def _snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name).lstrip("_")


def _missing_key_hint() -> Dict[str, Any]:
    return {
        "error": f"missing API key for provider '{MISTRAL_PROVIDER_ID}'",
        "set_env": get_env_var_name(MISTRAL_PROVIDER_ID),
        "or_run": "login --api-key <key>",
    }


def handle_models(args: argparse.Namespace) -> int:
    provider = MistralProvider()
    models = provider.provided_models()
    if args.json:
        rows = [
            {
                "id": m.id,
                "name": m.name,
                "max_tokens": m.max_token_count(),
                "max_output_tokens": m.max_output_tokens(),
                "supports_tools": m.supports_tools(),
                "supports_images": m.supports_images(),
            }
            for m in models
        ]
        print(json.dumps({"provider": provider.id, "models": rows}))
        return 0
    for m in models:
        print(f"{m.id}\t{m.max_token_count()}")
    return 0


def _select_model(provider: MistralProvider, model_id: Optional[str]):
    return provider.model(model_id) if model_id else provider.default_model()


def plan_run(args: argparse.Namespace) -> Dict[str, Any]:
    """Compute the request body for ``args`` without any I/O."""
    provider = MistralProvider()
    model = _select_model(provider, args.model)
    model_id = model.id if model is not None else args.model
    request = build_request(args.prompt, args.system, args.temperature, args.max_tokens)
    wire = into_mistral(request, model_id, model.max_output_tokens() if model is not None else None)
    return {
        "provider": provider.id,
        "url": f"{provider.api_url}/chat/completions",
        "model_known": model is not None,
        "payload": wire.to_payload(),
    }


def handle_plan(args: argparse.Namespace) -> int:
    print(json.dumps(plan_run(args)))
    return 0


async def _run(args: argparse.Namespace) -> int:
    provider = create_provider(db_path=args.db_path)
    model = _select_model(provider, args.model)
    if model is None:
        print(json.dumps({"error": f"unknown model '{args.model}'"}), file=sys.stderr)
        return 2
    try:
        await provider.authenticate()
    except ProviderError as exc:
        if exc.code is not ErrorCode.AUTH or exc.message != CREDENTIALS_NOT_FOUND_ERROR:
            print(json.dumps({"error": exc.message, "code": exc.code.value}), file=sys.stderr)
            return 1
        print(json.dumps(_missing_key_hint()), file=sys.stderr)
        return 2

    logger = get_logger("providers.cli.mistral")
    ctx = LogContext(provider=provider.id, model=model.id)
    normalized_log_event(logger, "cli.start", ctx, phase="start", attempt=1, emitted=None, tokens=None)
    failed = False
    try:
        request = build_request(args.prompt, args.system, args.temperature, args.max_tokens)
        events = await model.stream_completion(request)
        async with events:
            async for event in events:
                failed = failed or isinstance(event, ErrorEvent)
                print(json.dumps(event_to_dict(event), default=str), flush=True)
    except ProviderError as exc:
        normalized_log_event(
            logger,
            "cli.error",
            ctx,
            phase="start",
            attempt=None,
            error_code=exc.code.value,
            emitted=False,
            tokens=None,
            error=exc.message,
        )
        print(json.dumps({"error": exc.message, "code": exc.code.value}), file=sys.stderr)
        return 1
    finally:
        await aclose_all_clients()
    normalized_log_event(logger, "cli.finalize", ctx, phase="finalize", attempt=None, emitted=True, tokens=None)
    return 1 if failed else 0


def handle_run(args: argparse.Namespace) -> int:
    return asyncio.run(_run(args))


def handle_login(args: argparse.Namespace) -> int:
    provider = create_provider(db_path=args.db_path)
    asyncio.run(provider.set_api_key(args.api_key))
    print(json.dumps({"ok": True, "url": provider.api_url}))
    return 0


def handle_logout(args: argparse.Namespace) -> int:
    provider = create_provider(db_path=args.db_path)
    asyncio.run(provider.reset_credentials())
    print(json.dumps({"ok": True, "url": provider.api_url}))
    return 0


HANDLERS = {
    "models": handle_models,
    "plan": handle_plan,
    "run": handle_run,
    "login": handle_login,
    "logout": handle_logout,
}


__all__ = [
    "HANDLERS",
    "build_request",
    "event_to_dict",
    "handle_login",
    "handle_logout",
    "handle_models",
    "handle_plan",
    "handle_run",
    "plan_run",
]
