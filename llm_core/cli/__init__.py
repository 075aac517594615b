"""``llm-core`` debugging CLI.

Streams a reply to stdout and prints final stats as JSON to stderr (stdout
with ``--json``). ``chat`` is the default subcommand::

    python -m llm_core.cli "Say hello" --provider gemini
"""

from __future__ import annotations

import sys
from typing import Optional

from .actions import handle_chat
from .parser import build_parser

_SUBCOMMANDS = {"chat"}


def main(argv: Optional[list[str]] = None) -> int:
    argv_list = list(sys.argv[1:] if argv is None else argv)
    if not argv_list or (argv_list[0] not in _SUBCOMMANDS and argv_list[0] not in ("-h", "--help")):
        argv_list = ["chat"] + argv_list
    args = build_parser().parse_args(argv_list)
    return handle_chat(args)


__all__ = ["main"]
