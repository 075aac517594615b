"""
Message DTO used across providers.

Defines the `Message` dataclass, the `Role` literal and the role constants.
Messages keep their order end-to-end; adapters translate each one into the
provider's wire shape without reordering.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from .attachment import Attachment
from .tool_call import ToolCall


# Message roles used across providers.
Role = Literal["system", "user", "assistant", "tool"]

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_TOOL = "tool"

ROLES = (ROLE_SYSTEM, ROLE_USER, ROLE_ASSISTANT, ROLE_TOOL)


@dataclass
class Message:
    """A chat message used by provider-agnostic DTOs.

    Attributes:
        role: The role of the message author.
        content: Plain text body (may be empty for assistant tool invocations).
        attachments: Binary payloads (images, text documents) sent with the message.
        tool_calls: Tool invocations requested by an assistant turn.
        tool_call_id: For ``tool`` messages, the id of the call being answered.
    """

    role: Role
    content: str = ""
    attachments: List[Attachment] = field(default_factory=list)
    tool_calls: List[ToolCall] = field(default_factory=list)
    tool_call_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary (attachment bytes summarized)."""
        out: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.attachments:
            out["attachments"] = [a.to_dict() for a in self.attachments]
        if self.tool_calls:
            out["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
        if self.tool_call_id:
            out["tool_call_id"] = self.tool_call_id
        return out


__all__ = [
    "Message",
    "Role",
    "ROLE_SYSTEM",
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ROLE_TOOL",
    "ROLES",
]
