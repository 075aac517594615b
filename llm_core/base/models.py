"""
Provider-agnostic domain models public surface.

This module re-exports the one-class-per-file implementations under
``llm_core.base.models_parts`` so callers have a single import path for the
unified request/response contract.
"""

from .models_parts.attachment import Attachment
from .models_parts.tool_call import ToolCall
from .models_parts.tool import JSONSchema, SchemaProperty, Tool, ToolChoice, ToolChoiceType
from .models_parts.sampling import SamplingParams
from .models_parts.message import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_TOOL,
    ROLE_USER,
    ROLES,
    Message,
    Role,
)
from .models_parts.chat_request import ChatRequest
from .models_parts.token_usage import TokenUsage
from .models_parts.chat_response import ChatResponse
from .models_parts.stream_stats import StreamResponseType, StreamStats

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
