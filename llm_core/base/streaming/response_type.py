"""Final response-type resolution shared by all provider streams."""
from __future__ import annotations

from typing import Optional, Sequence

from ..models import StreamResponseType, ToolCall

TOOL_CALLS_FINISH_REASON = "tool_calls"


def resolve_response_type(
    finish_reason: str, tool_calls: Optional[Sequence[ToolCall]]
) -> StreamResponseType:
    """Classify a finished stream.

    Any accumulated tool call, or a ``tool_calls`` finish reason, wins over
    text. A stream that ended without a finish reason stays ``UNKNOWN``.
    """
    if tool_calls or (finish_reason or "").lower() == TOOL_CALLS_FINISH_REASON:
        return StreamResponseType.TOOL_CALL
    if finish_reason:
        return StreamResponseType.TEXT
    return StreamResponseType.UNKNOWN


def normalize_finish_reason(reason: object) -> str:
    """Lowercase a provider finish reason; unspecified values become ``""``.

    Accepts plain strings and enum members (``FinishReason.STOP`` -> ``"stop"``).
    """
    if reason is None:
        return ""
    value = getattr(reason, "value", reason)
    text = str(value).strip().lower()
    if text in ("", "finish_reason_unspecified", "unspecified"):
        return ""
    return text


__all__ = [
    "resolve_response_type",
    "normalize_finish_reason",
    "TOOL_CALLS_FINISH_REASON",
]
