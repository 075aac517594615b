"""
Streaming statistics DTOs.

`StreamStats` is mutated by the stream producer while chunks arrive and is
final once the consumer observed end-of-stream. `StreamResponseType` records
whether the completion ended as plain text or as a tool invocation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .token_usage import TokenUsage


class StreamResponseType(str, Enum):
    """Final classification of a streamed completion."""

    UNKNOWN = "unknown"
    TEXT = "text"
    TOOL_CALL = "tool_call"


@dataclass
class StreamStats:
    """Per-stream statistics.

    Attributes:
        usage: Provider-reported usage (total back-filled from local counts when
            the provider reported zero).
        ttft_ms: Time to first non-empty text fragment; ``None`` when none arrived.
        total_latency_ms: Time from stream start to finalization.
        local_token_count: Completion tokens counted locally.
        finish_reason: Lowercased provider finish reason ("" if none).
        response_type: Resolved :class:`StreamResponseType`.
    """

    usage: TokenUsage = field(default_factory=TokenUsage)
    ttft_ms: Optional[float] = None
    total_latency_ms: Optional[float] = None
    local_token_count: int = 0
    finish_reason: str = ""
    response_type: StreamResponseType = StreamResponseType.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        return {
            "usage": self.usage.to_dict(),
            "ttft_ms": self.ttft_ms,
            "total_latency_ms": self.total_latency_ms,
            "local_token_count": self.local_token_count,
            "finish_reason": self.finish_reason,
            "response_type": self.response_type.value,
        }


__all__ = ["StreamStats", "StreamResponseType"]
