"""
Request translation error type.

Raised by provider adapters when a unified ``ChatRequest`` cannot be mapped
onto the provider wire format (unknown role, unsupported attachment, tool
message without a call id, ...). Translation happens before any network call,
so this error always means nothing was sent.
"""
from __future__ import annotations

from typing import Optional


class TranslationError(ValueError):
    """Raised when a request cannot be translated for a provider.

    Attributes:
        provider: Provider key the translation targeted.
        detail: Human-readable reason.
    """

    def __init__(self, detail: str, *, provider: Optional[str] = None) -> None:
        self.provider = provider
        self.detail = detail
        prefix = f"{provider}: " if provider else ""
        super().__init__(f"{prefix}{detail}")


__all__ = ["TranslationError"]
