"""
ToolCall DTO describing a model-requested function invocation.

``arguments`` is kept as the raw JSON text produced by the model. The streaming
path only ever concatenates fragments of it; it is never parsed or re-encoded
there. ``thought_signature`` is an opaque provider token (Google GenAI) that
must be sent back unchanged with the call on the next turn.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ToolCall:
    """A single tool invocation emitted by the model."""

    id: str = ""
    name: str = ""
    arguments: str = ""
    thought_signature: Optional[bytes] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "arguments": self.arguments,
        }
        if self.thought_signature:
            out["thought_signature"] = self.thought_signature.hex()
        return out


__all__ = ["ToolCall"]
