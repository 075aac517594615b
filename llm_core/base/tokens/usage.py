"""Token usage extraction from provider stream chunks.

Maps the provider-specific usage attribute names onto :class:`TokenUsage`.
Missing, non-integer or negative values count as zero; a missing total is
derived from prompt + completion. Both helpers never raise.
"""
from __future__ import annotations

from typing import Any

from ..models import TokenUsage


def _as_count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        out = int(value)
    except (TypeError, ValueError):
        return 0
    return out if out > 0 else 0


def _usage(prompt: Any, completion: Any, total: Any) -> TokenUsage:
    p, c, t = _as_count(prompt), _as_count(completion), _as_count(total)
    if t == 0 and (p or c):
        t = p + c
    return TokenUsage(prompt_tokens=p, completion_tokens=c, total_tokens=t)


def extract_openai_usage(chunk: Any) -> TokenUsage:
    """Read ``chunk.usage.{prompt,completion,total}_tokens`` (OpenAI shape)."""
    usage = getattr(chunk, "usage", None)
    if usage is None:
        return TokenUsage()
    return _usage(
        getattr(usage, "prompt_tokens", None),
        getattr(usage, "completion_tokens", None),
        getattr(usage, "total_tokens", None),
    )


def extract_genai_usage(chunk: Any) -> TokenUsage:
    """Read ``chunk.usage_metadata.*_token_count`` (Google GenAI shape)."""
    meta = getattr(chunk, "usage_metadata", None)
    if meta is None:
        return TokenUsage()
    return _usage(
        getattr(meta, "prompt_token_count", None),
        getattr(meta, "candidates_token_count", None),
        getattr(meta, "total_token_count", None),
    )


__all__ = ["extract_openai_usage", "extract_genai_usage"]
