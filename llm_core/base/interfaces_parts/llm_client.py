"""LlmClient Protocol (single-class module).

Defines the chat contract every provider client implements.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import ChatRequest, ChatResponse
from .stream import Stream


@runtime_checkable
class LlmClient(Protocol):
    """Unified chat client.

    Implementations translate ``ChatRequest`` into their SDK call shape and
    never leak SDK objects upstream. Translation failures raise
    ``TranslationError`` before any network call is made.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier (``"openai"`` or ``"gemini"``)."""
        ...

    def default_model(self) -> str:
        """Model used when a request leaves ``model`` empty."""
        ...

    def chat(
        self, request: ChatRequest, token: Optional[CancellationToken] = None
    ) -> ChatResponse:
        """Run a completion to the end and return the collected response."""
        ...

    def chat_stream(
        self, request: ChatRequest, token: Optional[CancellationToken] = None
    ) -> Stream:
        """Start a streamed completion; ``token`` cancellation cascades to the stream."""
        ...


__all__ = ["LlmClient"]
