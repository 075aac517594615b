"""Attachment classification shared by the provider message builders.

Both providers treat attachments the same way:

* ``image/*`` goes out as binary image input (data URL or inline bytes).
* Text-like MIME types, or any payload that decodes as UTF-8, are inlined as
  a text block prefixed with ``[attachment:<name>]``.
* Everything else is rejected with :class:`TranslationError`.
"""
from __future__ import annotations

import base64
import mimetypes
from dataclasses import dataclass
from typing import Optional

from ..errors import TranslationError
from ..models import Attachment

DEFAULT_TEXT_NAME = "attachment.txt"
IMAGE_PROMPT_PLACEHOLDER = "[image attachment]"
OCTET_STREAM = "application/octet-stream"

_MAGIC = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"BM", "image/bmp"),
    (b"%PDF-", "application/pdf"),
    (b"PK\x03\x04", "application/zip"),
)


@dataclass(frozen=True)
class RenderedAttachment:
    """Provider-neutral view of one attachment.

    Exactly one of ``image_data`` / ``text`` is set. ``prompt_text`` is what
    local prompt token counting sees.
    """

    mime_type: str
    prompt_text: str
    text: Optional[str] = None
    image_data: Optional[bytes] = None

    @property
    def is_image(self) -> bool:
        return self.image_data is not None

    def data_url(self) -> str:
        """``data:<mime>;base64,<payload>`` for image attachments."""
        encoded = base64.b64encode(self.image_data or b"").decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def sniff_mime_type(data: bytes) -> str:
    """Best-effort content sniffing from leading magic bytes."""
    for magic, mime in _MAGIC:
        if data.startswith(magic):
            return mime
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    if _decode_utf8(data) is not None:
        return "text/plain; charset=utf-8"
    return OCTET_STREAM


def resolve_mime_type(attachment: Attachment) -> str:
    """Explicit MIME type, else sniffed content, else a guess from the file name."""
    mime = (attachment.mime_type or "").strip()
    if mime:
        return mime
    sniffed = sniff_mime_type(attachment.data)
    if sniffed != OCTET_STREAM:
        return sniffed
    guessed, _ = mimetypes.guess_type(attachment.file_name or "")
    return guessed or OCTET_STREAM


def is_text_mime_type(mime_type: str) -> bool:
    base = mime_type.split(";", 1)[0].strip().lower()
    if base.startswith("text/"):
        return True
    if base in ("application/json", "application/xml"):
        return True
    return base.endswith("+json") or base.endswith("+xml")


def _decode_utf8(data: bytes) -> Optional[str]:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def render_attachment(attachment: Attachment, *, provider: str) -> RenderedAttachment:
    """Classify ``attachment`` or raise :class:`TranslationError`."""
    mime = resolve_mime_type(attachment)
    if mime.lower().startswith("image/"):
        if not attachment.data:
            raise TranslationError(
                f"image attachment {attachment.file_name!r} data is empty", provider=provider
            )
        return RenderedAttachment(
            mime_type=mime, prompt_text=IMAGE_PROMPT_PLACEHOLDER, image_data=bytes(attachment.data)
        )
    decoded = _decode_utf8(attachment.data)
    if is_text_mime_type(mime) or decoded is not None:
        body = decoded if decoded is not None else attachment.data.decode("utf-8", errors="replace")
        name = attachment.file_name or DEFAULT_TEXT_NAME
        text = f"[attachment:{name}]\n{body}"
        return RenderedAttachment(mime_type=mime, prompt_text=text, text=text)
    raise TranslationError(f"unsupported attachment type: {mime}", provider=provider)


__all__ = [
    "RenderedAttachment",
    "render_attachment",
    "resolve_mime_type",
    "sniff_mime_type",
    "is_text_mime_type",
    "DEFAULT_TEXT_NAME",
    "IMAGE_PROMPT_PLACEHOLDER",
]
