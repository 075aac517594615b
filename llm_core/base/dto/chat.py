"""
Pydantic DTOs and validators for inbound chat requests.

Purpose
-------
Validate JSON-shaped chat payloads coming from application code (HTTP
handlers, CLI, config files) before they are turned into the dataclass
``ChatRequest`` consumed by the provider clients. Roles, tool-message rules,
sampling bounds and attachment encodings are checked here so adapters only
ever see well-formed requests.

Fallback semantics: none. Validation either succeeds or raises
``pydantic.ValidationError``; callers map that to a 4xx at their edge.
"""

from __future__ import annotations

import base64
import binascii
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models import (
    Attachment,
    ChatRequest,
    JSONSchema,
    Message,
    SamplingParams,
    SchemaProperty,
    Tool,
    ToolCall,
    ToolChoice,
    ToolChoiceType,
)

Role = Literal["system", "user", "assistant", "tool"]


class AttachmentDTO(BaseModel):
    """Attachment with base64-encoded ``data``."""

    data: str
    file_name: str = ""
    mime_type: str = ""

    @field_validator("data")
    @classmethod
    def _validate_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("attachment data must be valid base64") from exc
        return value

    def to_domain(self) -> Attachment:
        return Attachment(
            data=base64.b64decode(self.data),
            file_name=self.file_name,
            mime_type=self.mime_type,
        )


class ToolCallDTO(BaseModel):
    id: str = ""
    name: str = Field(..., min_length=1)
    arguments: str = ""
    thought_signature: Optional[str] = None

    def to_domain(self) -> ToolCall:
        return ToolCall(
            id=self.id,
            name=self.name,
            arguments=self.arguments,
            thought_signature=base64.b64decode(self.thought_signature) if self.thought_signature else None,
        )


class MessageDTO(BaseModel):
    """A chat message.

    Rules:
        - ``tool`` messages require ``tool_call_id``.
        - ``tool_calls`` are only allowed on ``assistant`` messages.
        - ``user`` and ``system`` messages need text or at least one attachment.
    """

    role: Role
    content: str = ""
    attachments: List[AttachmentDTO] = Field(default_factory=list)
    tool_calls: List[ToolCallDTO] = Field(default_factory=list)
    tool_call_id: str = ""

    @model_validator(mode="after")
    def _validate_shape(self) -> "MessageDTO":
        if self.role == "tool" and not self.tool_call_id.strip():
            raise ValueError("tool message requires tool_call_id")
        if self.tool_calls and self.role != "assistant":
            raise ValueError("tool_calls are only valid on assistant messages")
        if self.role in ("user", "system") and not self.content.strip() and not self.attachments:
            raise ValueError(f"{self.role} message must include content or attachments")
        return self

    def to_domain(self) -> Message:
        return Message(
            role=self.role,
            content=self.content,
            attachments=[a.to_domain() for a in self.attachments],
            tool_calls=[tc.to_domain() for tc in self.tool_calls],
            tool_call_id=self.tool_call_id,
        )


class SchemaPropertyDTO(BaseModel):
    type: str = Field(..., min_length=1)
    description: str = ""
    enum: List[str] = Field(default_factory=list)


class ParametersDTO(BaseModel):
    type: str = "object"
    properties: Dict[str, SchemaPropertyDTO] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _required_are_declared(self) -> "ParametersDTO":
        missing = [name for name in self.required if name not in self.properties]
        if missing:
            raise ValueError(f"required properties not declared: {missing}")
        return self


class ToolDTO(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    parameters: ParametersDTO = Field(default_factory=ParametersDTO)

    def to_domain(self) -> Tool:
        params = self.parameters
        return Tool(
            name=self.name,
            description=self.description,
            parameters=JSONSchema(
                type=params.type,
                properties={
                    k: SchemaProperty(type=v.type, description=v.description, enum=list(v.enum))
                    for k, v in params.properties.items()
                },
                required=list(params.required),
            ),
        )


class ToolChoiceDTO(BaseModel):
    type: Literal["auto", "none", "force"] = "auto"
    name: str = ""

    @model_validator(mode="after")
    def _name_only_when_forced(self) -> "ToolChoiceDTO":
        if self.name and self.type != ToolChoiceType.FORCE.value:
            raise ValueError("tool_choice.name is only valid with type 'force'")
        return self


class SamplingDTO(BaseModel):
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    top_k: Optional[int] = Field(default=None, ge=0)


class ChatRequestDTO(BaseModel):
    """Inbound chat request.

    Raises:
        ValidationError: On invalid roles, empty messages, out-of-range
            sampling values or inconsistent tool declarations.
    """

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    max_tokens: int = Field(default=0, ge=0)
    sampling: SamplingDTO = Field(default_factory=SamplingDTO)
    tools: List[ToolDTO] = Field(default_factory=list)
    tool_choice: Optional[ToolChoiceDTO] = None
    trace_id: str = ""

    @model_validator(mode="after")
    def _validate_tools(self) -> "ChatRequestDTO":
        names = [t.name for t in self.tools]
        if len(names) != len(set(names)):
            raise ValueError("tool names must be unique")
        choice = self.tool_choice
        if choice is not None and choice.name and choice.name not in names:
            raise ValueError(f"tool_choice names undeclared tool {choice.name!r}")
        return self

    def to_request(self) -> ChatRequest:
        """Convert to the dataclass request consumed by provider clients."""
        return ChatRequest(
            model=self.model,
            messages=[m.to_domain() for m in self.messages],
            max_tokens=self.max_tokens,
            sampling=SamplingParams(
                temperature=self.sampling.temperature,
                top_p=self.sampling.top_p,
                top_k=self.sampling.top_k,
            ),
            tools=[t.to_domain() for t in self.tools],
            tool_choice=(
                ToolChoice(type=self.tool_choice.type, name=self.tool_choice.name)
                if self.tool_choice is not None
                else None
            ),
            trace_id=self.trace_id,
        )


__all__ = [
    "Role",
    "AttachmentDTO",
    "ToolCallDTO",
    "MessageDTO",
    "SchemaPropertyDTO",
    "ParametersDTO",
    "ToolDTO",
    "ToolChoiceDTO",
    "SamplingDTO",
    "ChatRequestDTO",
]
