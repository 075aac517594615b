"""llm_core package

One request/response contract over several LLM provider APIs.

Public API (re-exported):
    - Version: ``__version__``
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ChatResponse`, ...
    - Errors: :class:`ProviderError`, :class:`ErrorCode`,
      :class:`TranslationError`, :class:`UnsupportedModelError`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
    - Factory: :func:`create` (``"openai"`` or ``"gemini"``)

Example::

    from llm_core import ChatRequest, Message, create

    client = create("openai")
    stream = client.chat_stream(ChatRequest(model="gpt-4o-mini", messages=[Message("user", "hi")]))
    for text in stream:
        print(text, end="")
    print(stream.stats().usage)
"""

from typing import Any

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import (
    ErrorCode,
    ProviderError,
    TranslationError,
    UnsupportedModelError,
)
from .base.factory import ClientFactory, UnknownProviderError
from .base.interfaces import LlmClient, Stream
from .base.models import (
    Attachment,
    ChatRequest,
    ChatResponse,
    JSONSchema,
    Message,
    SamplingParams,
    SchemaProperty,
    StreamResponseType,
    StreamStats,
    TokenUsage,
    Tool,
    ToolCall,
    ToolChoice,
    ToolChoiceType,
)

__version__ = "0.1.0"


def create(provider: str, **kwargs: Any) -> LlmClient:
    """Create a chat client by provider name (see :class:`ClientFactory`)."""
    return ClientFactory.create(provider, **kwargs)


__all__ = [
    "__version__",
    "create",
    "ClientFactory",
    "UnknownProviderError",
    "LlmClient",
    "Stream",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "TranslationError",
    "UnsupportedModelError",
    "Attachment",
    "ChatRequest",
    "ChatResponse",
    "JSONSchema",
    "Message",
    "SamplingParams",
    "SchemaProperty",
    "StreamResponseType",
    "StreamStats",
    "TokenUsage",
    "Tool",
    "ToolCall",
    "ToolChoice",
    "ToolChoiceType",
]
