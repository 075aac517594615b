"""Unified messages -> Google GenAI ``contents`` + ``system_instruction``.

Role mapping:

* ``system`` messages are joined (newline separated) into one
  ``system_instruction``; they never appear as conversation turns.
* ``user`` -> ``user`` content with text and attachment parts.
* ``assistant`` -> ``model`` content; tool calls become ``function_call``
  parts carrying their thought signature back unchanged.
* ``tool`` -> ``user`` content with a single ``function_response`` part. The
  function name is recovered from the assistant call with the same id.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Sequence, Tuple

from google.genai import types

from ..base.errors import TranslationError
from ..base.models import (
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_TOOL,
    ROLE_USER,
    Attachment,
    Message,
)
from ..base.utils.attachments import render_attachment

PROVIDER = "gemini"
FALLBACK_FUNCTION_NAME = "tool_response"


def attachment_to_part(attachment: Attachment) -> Tuple[types.Part, str]:
    rendered = render_attachment(attachment, provider=PROVIDER)
    if rendered.is_image:
        return types.Part.from_bytes(data=rendered.image_data, mime_type=rendered.mime_type), rendered.prompt_text
    return types.Part.from_text(text=rendered.text or ""), rendered.prompt_text


def render_message_text(message: Message) -> str:
    """Flatten content plus text attachments (system instructions, prompt counting)."""
    parts: List[str] = [message.content] if message.content else []
    for attachment in message.attachments:
        _, prompt = attachment_to_part(attachment)
        if prompt:
            parts.append(prompt)
    return "\n".join(parts)


def parse_json_args(raw: str) -> Dict[str, Any]:
    """Decode tool-call arguments into the mapping GenAI expects.

    Empty text and JSON ``null`` become ``{}``; anything that is not a JSON
    object raises ``ValueError``.
    """
    raw = (raw or "").strip()
    if not raw:
        return {}
    parsed = json.loads(raw)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("arguments must be a JSON object")
    return parsed


def parse_tool_response(content: str) -> Dict[str, Any]:
    """Normalize tool output into a response object.

    JSON objects pass through; other JSON values and plain text are wrapped
    as ``{"output": value}``.
    """
    content = (content or "").strip()
    if not content:
        return {"output": ""}
    try:
        parsed = json.loads(content)
    except ValueError:
        return {"output": content}
    if isinstance(parsed, dict):
        return parsed
    return {"output": parsed}


def _user_parts(message: Message) -> Tuple[List[types.Part], str]:
    parts: List[types.Part] = []
    prompts: List[str] = []
    if message.content:
        parts.append(types.Part.from_text(text=message.content))
        prompts.append(message.content)
    for attachment in message.attachments:
        part, prompt = attachment_to_part(attachment)
        parts.append(part)
        if prompt:
            prompts.append(prompt)
    if not parts:
        parts.append(types.Part.from_text(text=""))
    return parts, "\n".join(prompts)


def _assistant_parts(message: Message) -> Tuple[List[types.Part], str]:
    parts: List[types.Part] = []
    prompts: List[str] = []
    if message.content:
        parts.append(types.Part.from_text(text=message.content))
        prompts.append(message.content)
    for tc in message.tool_calls:
        try:
            args = parse_json_args(tc.arguments)
        except ValueError as exc:
            raise TranslationError(
                f"invalid tool call args for {tc.name}: {exc}", provider=PROVIDER
            ) from exc
        parts.append(
            types.Part(
                function_call=types.FunctionCall(id=tc.id or None, name=tc.name, args=args),
                thought_signature=bytes(tc.thought_signature) if tc.thought_signature else None,
            )
        )
        prompts.append(f"{tc.name}({tc.arguments})")
    if not parts:
        parts.append(types.Part.from_text(text=""))
    return parts, "\n".join(prompts)


def _tool_response_part(message: Message, call_names: Dict[str, str]) -> types.Part:
    if not message.tool_call_id.strip():
        raise TranslationError("tool message missing tool_call_id", provider=PROVIDER)
    name = call_names.get(message.tool_call_id) or FALLBACK_FUNCTION_NAME
    return types.Part(
        function_response=types.FunctionResponse(
            id=message.tool_call_id,
            name=name,
            response=parse_tool_response(message.content),
        )
    )


def build_genai_contents(
    messages: Sequence[Message],
) -> Tuple[List[types.Content], Optional[types.Content], List[str]]:
    """Translate messages into ``(contents, system_instruction, prompt_texts)``.

    Raises:
        TranslationError: unknown role, tool message without id, malformed
            assistant tool-call arguments or unsupported attachment.
    """
    contents: List[types.Content] = []
    prompts: List[str] = []
    system_texts: List[str] = []
    call_names: Dict[str, str] = {}

    for m in messages:
        if m.role == ROLE_SYSTEM:
            text = render_message_text(m)
            if text:
                system_texts.append(text)
            prompts.append(text)
        elif m.role == ROLE_USER:
            parts, prompt = _user_parts(m)
            contents.append(types.Content(role="user", parts=parts))
            prompts.append(prompt)
        elif m.role == ROLE_ASSISTANT:
            parts, prompt = _assistant_parts(m)
            for tc in m.tool_calls:
                if tc.id:
                    call_names[tc.id] = tc.name
            contents.append(types.Content(role="model", parts=parts))
            prompts.append(prompt)
        elif m.role == ROLE_TOOL:
            part = _tool_response_part(m, call_names)
            contents.append(types.Content(role="user", parts=[part]))
            prompts.append(m.content)
        else:
            raise TranslationError(f"unsupported message role: {m.role}", provider=PROVIDER)

    system_instruction = None
    if system_texts:
        system_instruction = types.Content(
            role="user", parts=[types.Part.from_text(text="\n".join(system_texts))]
        )
    return contents, system_instruction, prompts


__all__ = [
    "build_genai_contents",
    "attachment_to_part",
    "render_message_text",
    "parse_json_args",
    "parse_tool_response",
    "FALLBACK_FUNCTION_NAME",
]
