"""
ChatRequest DTO for provider-agnostic chat invocations.

Adapters map this normalized request shape to specific SDK calls. The request
contains model selection, ordered messages, sampling parameters and optional
tool declarations. ``trace_id`` is only used for log correlation and is never
sent to a provider.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .message import Message
from .sampling import SamplingParams
from .tool import Tool, ToolChoice


@dataclass
class ChatRequest:
    """Normalized chat request sent to provider adapters.

    Attributes:
        model: Target model identifier.
        messages: Ordered list of chat `Message` instances.
        max_tokens: Maximum completion tokens; ``0`` leaves the provider default.
        sampling: Optional sampling parameters.
        tools: Functions the model may call.
        tool_choice: Tool selection constraint; ``None`` means unset.
        trace_id: Opaque correlation id attached to log events.

    Methods:
        to_dict: Return a JSON-serializable dictionary of the request.
    """

    model: str
    messages: List[Message]
    max_tokens: int = 0
    sampling: SamplingParams = field(default_factory=SamplingParams)
    tools: List[Tool] = field(default_factory=list)
    tool_choice: Optional[ToolChoice] = None
    trace_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary representation of the request."""
        return {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
            "sampling": self.sampling.to_dict(),
            "tools": [t.to_dict() for t in self.tools],
            "tool_choice": self.tool_choice.to_dict() if self.tool_choice else None,
            "trace_id": self.trace_id,
        }


__all__ = ["ChatRequest"]
