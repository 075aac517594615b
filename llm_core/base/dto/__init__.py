"""Pydantic DTOs validating inbound payloads before they become domain models."""

from .chat import (
    AttachmentDTO,
    ChatRequestDTO,
    MessageDTO,
    ParametersDTO,
    SamplingDTO,
    SchemaPropertyDTO,
    ToolCallDTO,
    ToolChoiceDTO,
    ToolDTO,
)

__all__ = [
    "AttachmentDTO",
    "ChatRequestDTO",
    "MessageDTO",
    "ParametersDTO",
    "SamplingDTO",
    "SchemaPropertyDTO",
    "ToolCallDTO",
    "ToolChoiceDTO",
    "ToolDTO",
]
