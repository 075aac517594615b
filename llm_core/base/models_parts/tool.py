"""
Tool declaration DTOs.

`Tool` describes a function the model may call; its parameters are a small
JSON-schema subset (`JSONSchema` / `SchemaProperty`). `ToolChoice` constrains
whether and which tool the model should call.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


@dataclass
class SchemaProperty:
    """One property of a tool's parameter object."""

    type: str
    description: str = ""
    enum: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.description:
            out["description"] = self.description
        if self.enum:
            out["enum"] = list(self.enum)
        return out


@dataclass
class JSONSchema:
    """Parameter schema for a tool (object type with named properties)."""

    type: str = "object"
    properties: Dict[str, SchemaProperty] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire JSON-schema mapping shared by all providers."""
        out: Dict[str, Any] = {
            "type": self.type or "object",
            "properties": {k: v.to_dict() for k, v in self.properties.items()},
        }
        if self.required:
            out["required"] = list(self.required)
        return out


@dataclass
class Tool:
    """A callable function exposed to the model."""

    name: str
    description: str = ""
    parameters: JSONSchema = field(default_factory=JSONSchema)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters.to_dict(),
        }


class ToolChoiceType(str, Enum):
    """How the model may use the declared tools."""

    AUTO = "auto"
    NONE = "none"
    FORCE = "force"


@dataclass
class ToolChoice:
    """Tool selection constraint.

    ``type`` is one of :class:`ToolChoiceType` values. For ``force`` an
    optional ``name`` pins the specific function; without it any tool is
    required.
    """

    type: str = ToolChoiceType.AUTO.value
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": str(getattr(self.type, "value", self.type))}
        if self.name:
            out["name"] = self.name
        return out


__all__ = [
    "SchemaProperty",
    "JSONSchema",
    "Tool",
    "ToolChoiceType",
    "ToolChoice",
]
