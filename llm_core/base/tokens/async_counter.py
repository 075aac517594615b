"""Deferred completion token counting for streams.

The stream producer calls :meth:`AsyncTokenCounter.append` on every text
fragment. Appending only buffers; no tokenization happens on the hot path.
The whole completion is counted once, in :meth:`finally_calc`, when the stream
finalizes.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable, List, Optional

from ...config.defaults import TOKENIZER_DEFAULT_ENCODING
from ..errors import UnsupportedModelError
from ..logging import get_logger, log_event
from .counter import CountMode, TokenCounter

DEFAULT_ENCODING = TOKENIZER_DEFAULT_ENCODING


class AsyncTokenCounter:
    """Buffering wrapper around :class:`TokenCounter`.

    ``get_count()`` returns ``0`` until ``finally_calc()`` ran; after that it
    returns the finalized completion count. ``finally_calc()`` is idempotent.
    """

    def __init__(self, counter: TokenCounter) -> None:
        self._counter = counter
        self._lock = threading.Lock()
        self._chunks: List[str] = []
        self._prompt_count = 0
        self._completion_count = 0
        self._finalized = False

    @classmethod
    def create(cls, mode: CountMode = CountMode.RUNE, model: str = "") -> "AsyncTokenCounter":
        return cls(TokenCounter(mode, model))

    @property
    def counter(self) -> TokenCounter:
        return self._counter

    def append(self, chunk: str) -> None:
        if not chunk:
            return
        with self._lock:
            self._chunks.append(chunk)

    def set_prompt_count(self, count: int) -> None:
        with self._lock:
            self._prompt_count = count

    def get_prompt_count(self) -> int:
        with self._lock:
            return self._prompt_count

    def get_count(self) -> int:
        with self._lock:
            return self._completion_count

    def finally_calc(self) -> int:
        """Count the buffered completion once and return the result."""
        with self._lock:
            if self._finalized:
                return self._completion_count
            text = "".join(self._chunks)
            self._chunks = [text] if text else []
            self._completion_count = self._counter.count(text)
            self._finalized = True
            return self._completion_count

    def get_total_count(self) -> int:
        with self._lock:
            return self._prompt_count + self._completion_count

    def count_prompt_messages(self, texts: Iterable[str]) -> int:
        return self._counter.count_messages(texts)

    def close(self) -> None:
        self._counter.close()


def default_async_counter(logger: Optional[logging.Logger] = None) -> AsyncTokenCounter:
    """Prefer ``cl100k_base`` counting; fall back to rune mode when unavailable.

    The encoding file is fetched by tiktoken on first use, so offline hosts
    land in the rune fallback. The fallback is logged once per call.
    """
    try:
        return AsyncTokenCounter(TokenCounter.for_encoding(DEFAULT_ENCODING))
    except (UnsupportedModelError, OSError) as exc:
        log_event(
            logger or get_logger("tokens"),
            "tokens.counter.fallback",
            level=logging.WARNING,
            encoding=DEFAULT_ENCODING,
            mode=CountMode.RUNE.value,
            error=str(exc),
        )
        return AsyncTokenCounter.create(CountMode.RUNE)


__all__ = ["AsyncTokenCounter", "default_async_counter", "DEFAULT_ENCODING"]
