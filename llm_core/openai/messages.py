"""Unified messages -> OpenAI Chat Completions ``messages`` payload.

Alongside the wire messages a list of plain prompt texts is produced (one per
message) for local prompt token counting.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from ..base.errors import TranslationError
from ..base.models import ROLE_ASSISTANT, ROLE_TOOL, ROLES, Message
from ..base.utils.attachments import render_attachment

PROVIDER = "openai"


def _content_parts(message: Message) -> Tuple[List[Dict[str, Any]], str]:
    parts: List[Dict[str, Any]] = []
    prompt_parts: List[str] = []
    if message.content:
        parts.append({"type": "text", "text": message.content})
        prompt_parts.append(message.content)
    for attachment in message.attachments:
        rendered = render_attachment(attachment, provider=PROVIDER)
        if rendered.is_image:
            parts.append({"type": "image_url", "image_url": {"url": rendered.data_url()}})
        else:
            parts.append({"type": "text", "text": rendered.text})
        prompt_parts.append(rendered.prompt_text)
    return parts, "\n".join(prompt_parts)


def _tool_calls_payload(message: Message) -> List[Dict[str, Any]]:
    return [
        {
            "id": tc.id,
            "type": "function",
            "function": {"name": tc.name, "arguments": tc.arguments or "{}"},
        }
        for tc in message.tool_calls
    ]


def build_openai_messages(messages: Sequence[Message]) -> Tuple[List[Dict[str, Any]], List[str]]:
    """Translate ``messages`` in order.

    Raises:
        TranslationError: unknown role, tool message without ``tool_call_id``
            or an attachment that is neither an image nor text.
    """
    wire: List[Dict[str, Any]] = []
    prompts: List[str] = []
    for m in messages:
        if m.role not in ROLES:
            raise TranslationError(f"unsupported message role: {m.role}", provider=PROVIDER)
        if m.role == ROLE_TOOL and not m.tool_call_id.strip():
            raise TranslationError("tool message missing tool_call_id", provider=PROVIDER)

        msg: Dict[str, Any] = {"role": m.role}
        if m.attachments:
            parts, prompt = _content_parts(m)
            msg["content"] = parts
        else:
            msg["content"] = m.content
            prompt = m.content

        if m.role == ROLE_ASSISTANT and m.tool_calls:
            msg["tool_calls"] = _tool_calls_payload(m)
            if not m.content and not m.attachments:
                msg["content"] = None
            calls = "\n".join(f"{tc.name}({tc.arguments})" for tc in m.tool_calls)
            prompt = f"{prompt}\n{calls}" if prompt else calls
        if m.role == ROLE_TOOL:
            msg["tool_call_id"] = m.tool_call_id

        wire.append(msg)
        prompts.append(prompt)
    return wire, prompts


__all__ = ["build_openai_messages"]
