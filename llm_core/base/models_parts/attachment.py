"""Binary attachment carried by a chat message."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Attachment:
    """Raw attachment bytes plus optional naming/MIME hints.

    ``mime_type`` may be empty; adapters then guess it from ``file_name`` or
    fall back to treating valid UTF-8 as text.
    """

    data: bytes
    file_name: str = ""
    mime_type: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "mime_type": self.mime_type,
            "size": len(self.data),
        }


__all__ = ["Attachment"]
