"""Sampling parameters with explicit "unset" semantics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class SamplingParams:
    """Optional sampling knobs.

    ``None`` means the caller did not set the value and the provider default
    applies. An explicit ``0`` / ``0.0`` is forwarded as-is.
    """

    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            k: v
            for k, v in (
                ("temperature", self.temperature),
                ("top_p", self.top_p),
                ("top_k", self.top_k),
            )
            if v is not None
        }


__all__ = ["SamplingParams"]
