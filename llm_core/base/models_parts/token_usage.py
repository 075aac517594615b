"""Token usage counters reported by providers (or back-filled locally)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class TokenUsage:
    """Prompt/completion/total token counts; all default to zero."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


__all__ = ["TokenUsage"]
