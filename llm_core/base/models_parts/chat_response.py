"""
ChatResponse DTO representing a fully drained chat completion.

Produced by ``chat()`` once the underlying stream reached end-of-stream. The
content is the concatenation of every streamed fragment in order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .token_usage import TokenUsage
from .tool_call import ToolCall


@dataclass
class ChatResponse:
    """Provider-agnostic response from an LLM chat invocation.

    Attributes:
        content: Concatenated assistant text.
        tool_calls: Completed tool calls, or ``None`` when the model made none.
        usage: Final token usage (provider-reported or locally back-filled).
        latency_ms: End-to-end latency in milliseconds.
    """

    content: str = ""
    tool_calls: Optional[List[ToolCall]] = None
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation."""
        return {
            "content": self.content,
            "tool_calls": [tc.to_dict() for tc in self.tool_calls] if self.tool_calls else None,
            "usage": self.usage.to_dict(),
            "latency_ms": self.latency_ms,
        }


__all__ = [
    "ChatResponse",
]
