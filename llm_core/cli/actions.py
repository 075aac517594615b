"""Subcommand handlers for the ``llm-core`` CLI.

Errors are reported as one JSON object on stderr with a non-zero exit code:
``2`` for invalid input, ``1`` for provider failures, ``130`` on Ctrl-C.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO

from pydantic import ValidationError

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import ChatRequestDTO
from ..base.errors import ProviderError, TranslationError
from ..base.factory import UnknownProviderError, create_client
from ..base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from ..base.models import ChatRequest

ClientFactoryFn = Callable[..., Any]


def _error(stream: TextIO, kind: str, message: str, **extra: Any) -> None:
    payload: Dict[str, Any] = {"error": kind, "message": message}
    payload.update({k: v for k, v in extra.items() if v is not None})
    stream.write(json.dumps(payload, ensure_ascii=False, default=str) + "\n")


def build_request_payload(args: argparse.Namespace) -> Dict[str, Any]:
    """Assemble the raw request mapping from the request file and flags.

    Flags override request-file values when given.
    """
    payload: Dict[str, Any] = {}
    if args.request_file:
        payload = json.loads(Path(args.request_file).read_text(encoding="utf-8"))
    messages: List[Dict[str, Any]] = list(payload.get("messages") or [])
    if args.system:
        messages.insert(0, {"role": "system", "content": args.system})
    if args.prompt:
        messages.append({"role": "user", "content": args.prompt})
    payload["messages"] = messages
    if args.model:
        payload["model"] = args.model
    if args.max_tokens:
        payload["max_tokens"] = args.max_tokens
    sampling = dict(payload.get("sampling") or {})
    for key, value in (("temperature", args.temperature), ("top_p", args.top_p), ("top_k", args.top_k)):
        if value is not None:
            sampling[key] = value
    payload["sampling"] = sampling
    if args.trace_id:
        payload["trace_id"] = args.trace_id
    return payload


def handle_chat(
    args: argparse.Namespace,
    *,
    client_factory: ClientFactoryFn = create_client,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    out = out or sys.stdout
    err = err or sys.stderr
    if args.log_level:
        configure_logger(level=args.log_level)
    logger = get_logger("cli")

    try:
        client = client_factory(args.provider)
    except UnknownProviderError as exc:
        _error(err, "unknown_provider", str(exc))
        return 2

    try:
        payload = build_request_payload(args)
        payload.setdefault("model", client.default_model())
        request: ChatRequest = ChatRequestDTO.model_validate(payload).to_request()
    except (OSError, ValueError) as exc:
        # pydantic's ValidationError is a ValueError subclass
        detail = exc.errors(include_url=False) if isinstance(exc, ValidationError) else None
        _error(err, "invalid_request", str(exc) if detail is None else "validation failed", detail=detail)
        return 2

    if args.dry_run:
        out.write(json.dumps({"provider": client.provider_name, "request": request.to_dict()}, ensure_ascii=False, indent=2) + "\n")
        return 0

    ctx = LogContext(provider=client.provider_name, model=request.model, request_id=request.trace_id or None)
    token = CancellationToken()
    try:
        if args.stream:
            stream = client.chat_stream(request, token)
            with stream:
                for text in stream:
                    out.write(text)
                    out.flush()
                out.write("\n")
                stats = stream.stats()
                result: Dict[str, Any] = {
                    "tool_calls": [tc.to_dict() for tc in stream.tool_calls() or []] or None,
                    "stats": stats.to_dict(),
                }
        else:
            response = client.chat(request, token)
            if not args.json:
                out.write(response.content + "\n")
            result = response.to_dict()
    except TranslationError as exc:
        _error(err, "invalid_request", str(exc))
        return 2
    except ProviderError as exc:
        _error(err, "provider_error", exc.message, code=exc.code.value, provider=exc.provider)
        return 1
    except KeyboardInterrupt:
        token.cancel("interrupted")
        return 130
    except CancelledError as exc:
        _error(err, "cancelled", str(exc))
        return 130

    normalized_log_event(logger, "cli.chat.end", ctx, phase="finalize", emitted=True, tokens=result.get("stats", {}).get("usage") or result.get("usage"))
    target = out if args.json else err
    target.write(json.dumps(result, ensure_ascii=False) + "\n")
    return 0


__all__ = ["handle_chat", "build_request_payload"]
