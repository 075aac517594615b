"""Single-shot chat built on top of a provider stream."""
from __future__ import annotations

import time
from typing import Callable, List

from ..interfaces_parts.stream import Stream
from ..models import ChatResponse, TokenUsage


def chat_via_stream(open_stream: Callable[[], Stream]) -> ChatResponse:
    """Drain a freshly opened stream into a :class:`ChatResponse`.

    The stream is closed on every exit path. Errors from ``recv()`` propagate
    unchanged and no partial content is returned with them.
    """
    start = time.perf_counter()
    stream = open_stream()
    try:
        parts: List[str] = []
        while True:
            text = stream.recv()
            if not text:
                break
            parts.append(text)
        # end-of-stream is seen before the producer finished releasing its token
        stream.wait()
        stats = stream.stats()
        latency_ms = stats.total_latency_ms or (time.perf_counter() - start) * 1000.0
        usage = stats.usage
        return ChatResponse(
            content="".join(parts),
            tool_calls=stream.tool_calls(),
            usage=TokenUsage(
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
            ),
            latency_ms=latency_ms,
        )
    finally:
        stream.close()


__all__ = ["chat_via_stream"]
