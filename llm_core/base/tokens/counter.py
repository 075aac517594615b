"""Local token counting.

Two strategies are supported:

``CountMode.RUNE``
    ``floor(code_points * 3 / 4)``. Dependency-free estimate that is stable
    across languages and never fails.
``CountMode.TOKENIZER``
    Exact BPE counting through ``tiktoken``. The encoding is resolved from the
    model name (``tiktoken.encoding_for_model``) or given explicitly via
    :meth:`TokenCounter.for_encoding`.

Counts are only used to back-fill usage when a provider does not report it,
so they never need to match the provider's own tokenizer exactly.
"""
from __future__ import annotations

import threading
from enum import Enum
from typing import Iterable, Optional

import tiktoken

from ..errors import UnsupportedModelError

# Per-message overhead added by ``count_messages`` (role + separators).
MESSAGE_OVERHEAD_TOKENS = 4


class CountMode(str, Enum):
    RUNE = "rune"
    TOKENIZER = "tokenizer"


def rune_count(text: str) -> int:
    """Estimate tokens as three quarters of the code point count."""
    return len(text) * 3 // 4


class TokenCounter:
    """Thread-safe synchronous token counter.

    Raises :class:`UnsupportedModelError` at construction when tokenizer mode
    is requested for a model ``tiktoken`` has no encoding for.
    """

    def __init__(self, mode: CountMode = CountMode.RUNE, model: str = "") -> None:
        self.mode = CountMode(mode)
        self.model = model
        self._lock = threading.RLock()
        self._encoding: Optional[tiktoken.Encoding] = None
        if self.mode is CountMode.TOKENIZER:
            try:
                self._encoding = tiktoken.encoding_for_model(model)
            except KeyError as exc:
                raise UnsupportedModelError(model) from exc

    @classmethod
    def for_encoding(cls, encoding_name: str = "cl100k_base") -> "TokenCounter":
        """Build a tokenizer-mode counter bound to a named encoding.

        Loading an encoding may download its BPE file on first use; network
        failures surface as ``OSError`` (or ``requests`` errors) from tiktoken.
        """
        counter = cls(CountMode.RUNE)
        try:
            encoding = tiktoken.get_encoding(encoding_name)
        except ValueError as exc:
            raise UnsupportedModelError(encoding_name) from exc
        counter.mode = CountMode.TOKENIZER
        counter.model = encoding_name
        counter._encoding = encoding
        return counter

    def count(self, text: str) -> int:
        """Return the token count of ``text`` (``0`` for empty text)."""
        if not text:
            return 0
        with self._lock:
            encoding = self._encoding
            if self.mode is CountMode.TOKENIZER and encoding is not None:
                return len(encoding.encode(text, disallowed_special=()))
        return rune_count(text)

    def count_messages(self, texts: Iterable[str]) -> int:
        """Sum of ``count`` over ``texts`` plus a fixed overhead per message."""
        total = 0
        for text in texts:
            total += self.count(text) + MESSAGE_OVERHEAD_TOKENS
        return total

    def close(self) -> None:
        with self._lock:
            self._encoding = None

    def __enter__(self) -> "TokenCounter":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"TokenCounter(mode={self.mode.value!r}, model={self.model!r})"


__all__ = ["CountMode", "TokenCounter", "rune_count", "MESSAGE_OVERHEAD_TOKENS"]
