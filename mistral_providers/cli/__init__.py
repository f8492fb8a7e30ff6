"""Mistral provider CLI (package entrypoint).

Argument parsing lives in ``cli_parser`` and the subcommand handlers in
``cli_actions``; this module only dispatches.
"""

from __future__ import annotations

import sys
from typing import Optional

from ..base.logging import configure_logger
from .cli_actions import HANDLERS
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, non-zero on error).
    """
    args = build_parser().parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)
    return HANDLERS[args.cmd](args)


__all__ = ["main"]
