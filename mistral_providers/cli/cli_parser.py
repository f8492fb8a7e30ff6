"""CLI parser construction for mistral-providers.

This module wires subparsers but contains no execution logic. Subcommand
handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import PROVIDER_CLI_PROG

COMMANDS = ("models", "plan", "run", "login", "logout")


def _add_prompt_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prompt", required=True)
    parser.add_argument("--model", default=None)
    parser.add_argument("--system", default=None, help="Optional system message")
    parser.add_argument("--temperature", type=float, default=None)
    parser.add_argument("--max-tokens", type=int, default=None, help="Cap on generated tokens")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser and subcommands.

    No I/O happens here; handlers are in ``cli_actions``.
    """
    p = argparse.ArgumentParser(
        prog=PROVIDER_CLI_PROG, description="Mistral provider CLI (plan is offline, run streams)"
    )
    p.add_argument("--db-path", default=None, help="Credential database (default: PROVIDERS_DB_PATH)")
    p.add_argument("--log-level", default=None, help="Override PROVIDERS_LOG_LEVEL for this run")
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file (rotating)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_models = sub.add_parser("models", help="List the models the provider offers")
    p_models.add_argument("--json", action="store_true")

    p_plan = sub.add_parser("plan", help="Print the request body that would be sent (no network)")
    _add_prompt_args(p_plan)

    p_run = sub.add_parser("run", help="Stream a completion and print events as JSON lines")
    _add_prompt_args(p_run)

    p_login = sub.add_parser("login", help="Store an API key for the configured base URL")
    p_login.add_argument("--api-key", required=True)

    sub.add_parser("logout", help="Delete the stored API key")
    return p


__all__ = ["COMMANDS", "build_parser"]
