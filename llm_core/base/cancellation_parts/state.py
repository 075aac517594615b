"""Mutable flag/reason pair guarded by the owning token's lock."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Cancellation flag plus the reason passed to the first ``cancel`` call."""

    cancelled: bool = False
    reason: Optional[str] = None


__all__ = ["State"]
