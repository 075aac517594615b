"""
llm_core base package.

Provider-agnostic contracts shared by every client:

- Models: dataclass request/response/stream DTOs
- Interfaces: ``LlmClient`` and ``Stream`` Protocols
- Errors and cancellation primitives
- Streaming building blocks and token counting
- Factory: lazy creation of provider clients by name
"""

from .cancellation import CancellationToken, CancelledError
from .errors import (
    ErrorCode,
    ProviderError,
    TranslationError,
    UnsupportedModelError,
    classify_exception,
)
from .factory import ClientFactory, UnknownProviderError, create_client
from .interfaces import LlmClient, Stream
from .models import (
    Attachment,
    ChatRequest,
    ChatResponse,
    JSONSchema,
    Message,
    Role,
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

__all__ = [
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "TranslationError",
    "UnsupportedModelError",
    "classify_exception",
    "ClientFactory",
    "UnknownProviderError",
    "create_client",
    "LlmClient",
    "Stream",
    "Attachment",
    "ChatRequest",
    "ChatResponse",
    "JSONSchema",
    "Message",
    "Role",
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
