"""Tokenizer lookup failure for a model or encoding name."""
from __future__ import annotations


class UnsupportedModelError(LookupError):
    """Raised when no tokenizer encoding is known for ``model``."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"no tokenizer encoding known for model {model!r}")


__all__ = ["UnsupportedModelError"]
