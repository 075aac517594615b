"""OpenAI Chat Completions stream adapter.

``OpenAIStream`` wraps the SDK's chunk iterator. A daemon producer thread
reads chunks, feeds the shared :class:`StreamState` and the index-keyed
tool-call accumulator, and hands text deltas to the consumer one at a time.
"""
from __future__ import annotations

import contextlib
import threading
from typing import Any, Iterator, List, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import wrap_exception
from ..base.models import StreamResponseType, StreamStats, ToolCall
from ..base.streaming import IndexedToolCallAccumulator, StreamState, ToolCallFragment
from ..base.tokens import extract_openai_usage

PROVIDER = "openai"


def tool_call_fragments(delta: Any) -> List[ToolCallFragment]:
    """Convert ``delta.tool_calls`` entries into accumulator fragments."""
    out: List[ToolCallFragment] = []
    for tc in getattr(delta, "tool_calls", None) or []:
        fn = getattr(tc, "function", None)
        out.append(
            ToolCallFragment(
                index=getattr(tc, "index", None),
                id=getattr(tc, "id", None) or "",
                name=(getattr(fn, "name", None) or "") if fn is not None else "",
                arguments=(getattr(fn, "arguments", None) or "") if fn is not None else "",
            )
        )
    return out


class OpenAIStream:
    """Streamed completion over an OpenAI-compatible endpoint."""

    def __init__(self, native: Any, *, state: StreamState, model: str) -> None:
        self._native = native
        self._state = state
        self._model = model
        self._tools = IndexedToolCallAccumulator()
        self._thread = threading.Thread(
            target=self._produce, name="llm-core-openai-stream", daemon=True
        )
        # Unblocks a producer stuck in a network read once the stream is closed.
        state.token.register(self._close_native)

    def start(self) -> "OpenAIStream":
        self._thread.start()
        return self

    # producer ------------------------------------------------------------
    def _produce(self) -> None:
        state = self._state
        state.mark_streaming()
        try:
            for chunk in self._native:
                if state.token.cancelled:
                    break
                if not self._handle_chunk(chunk):
                    break
        except Exception as exc:  # provider I/O errors become stream data
            if not state.token.cancelled:
                state.record_error(wrap_exception(exc, provider=PROVIDER, model=self._model))
        finally:
            state.finalize(self._tools.tool_calls(), cleanup=self._close_native)

    def _handle_chunk(self, chunk: Any) -> bool:
        state = self._state
        state.set_usage(extract_openai_usage(chunk))
        choices = getattr(chunk, "choices", None) or []
        if not choices:
            return True
        choice = choices[0]
        state.set_finish_reason(getattr(choice, "finish_reason", None))
        delta = getattr(choice, "delta", None)
        if delta is None:
            return True
        fragments = tool_call_fragments(delta)
        if fragments:
            self._tools.append(fragments)
        return state.emit_text(getattr(delta, "content", None) or "")

    def _close_native(self) -> None:
        close = getattr(self._native, "close", None)
        if callable(close):
            with contextlib.suppress(Exception):
                close()

    # consumer ------------------------------------------------------------
    @property
    def token(self) -> CancellationToken:
        return self._state.token

    @property
    def lifecycle(self):
        return self._state.lifecycle

    def recv(self) -> str:
        return self._state.recv()

    def close(self) -> None:
        self._state.close()

    def stats(self) -> StreamStats:
        return self._state.stats

    def tool_calls(self) -> Optional[List[ToolCall]]:
        return self._state.tool_calls

    def response_type(self) -> StreamResponseType:
        return self._state.response_type

    def finish_reason(self) -> str:
        return self._state.finish_reason

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._state.wait(timeout)

    def __iter__(self) -> Iterator[str]:
        while True:
            text = self.recv()
            if not text:
                return
            yield text

    def __enter__(self) -> "OpenAIStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["OpenAIStream", "tool_call_fragments"]
