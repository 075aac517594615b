"""Models parts package public surface.

Re-exports individual DTOs so callers can import from
`llm_core.base.models_parts` if needed, while `llm_core.base.models` remains
the primary stable import path.
"""

from .attachment import Attachment
from .tool_call import ToolCall
from .tool import JSONSchema, SchemaProperty, Tool, ToolChoice, ToolChoiceType
from .sampling import SamplingParams
from .message import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_TOOL,
    ROLE_USER,
    ROLES,
    Message,
    Role,
)
from .chat_request import ChatRequest
from .token_usage import TokenUsage
from .chat_response import ChatResponse
from .stream_stats import StreamResponseType, StreamStats

__all__ = [
    "Attachment",
    "ToolCall",
    "JSONSchema",
    "SchemaProperty",
    "Tool",
    "ToolChoice",
    "ToolChoiceType",
    "SamplingParams",
    "Message",
    "Role",
    "ROLE_SYSTEM",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ROLE_TOOL",
    "ROLES",
    "ChatRequest",
    "TokenUsage",
    "ChatResponse",
    "StreamResponseType",
    "StreamStats",
]
