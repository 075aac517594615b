"""Argument parser for ``llm-core``.

Only argument shapes live here; handlers are in ``actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import CLI_DEFAULT_PROVIDER


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="llm-core", description="Chat against OpenAI-compatible or Gemini models"
    )
    sub = p.add_subparsers(dest="cmd")

    p_chat = sub.add_parser("chat", help="Send a prompt and stream the reply (default)")
    p_chat.add_argument("prompt", nargs="?", default=None)
    p_chat.add_argument("--provider", default=CLI_DEFAULT_PROVIDER)
    p_chat.add_argument("--model", default=None)
    p_chat.add_argument("--system", default=None, help="System instruction")
    p_chat.add_argument(
        "--request-file",
        default=None,
        help="JSON chat request (validated); the prompt argument is appended as a user turn",
    )
    p_chat.add_argument("--max-tokens", type=int, default=0)
    p_chat.add_argument("--temperature", type=float, default=None)
    p_chat.add_argument("--top-p", type=float, default=None)
    p_chat.add_argument("--top-k", type=int, default=None)
    p_chat.add_argument("--trace-id", default="")
    p_chat.add_argument("--no-stream", dest="stream", action="store_false", default=True)
    p_chat.add_argument("--dry-run", action="store_true", help="Print the validated request and exit")
    p_chat.add_argument("--json", action="store_true", help="Print the final response as JSON")
    p_chat.add_argument("--log-level", default=None)
    return p


__all__ = ["build_parser"]
