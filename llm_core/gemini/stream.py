"""Google GenAI stream adapter.

``GenAIStream`` consumes the iterator returned by
``client.models.generate_content_stream``. Function calls arrive as whole
``function_call`` parts and go through the keyed accumulator; arguments are
serialized with sorted keys so repeated updates of the same call compare
equal.

Calls without an id are keyed ``idx:N``, where ``N`` counts only the
function-call parts of the chunk. Text and thought parts in between do not
shift the key, so it differs from a position over all parts.
"""
from __future__ import annotations

import contextlib
import json
import threading
from typing import Any, Iterator, List, Optional

from ..base.cancellation import CancellationToken
from ..base.errors import wrap_exception
from ..base.models import StreamResponseType, StreamStats, ToolCall
from ..base.streaming import KeyedToolCallAccumulator, StreamState, ToolCallFragment
from ..base.tokens import extract_genai_usage

PROVIDER = "gemini"


def encode_args(args: Any) -> str:
    """Compact JSON with sorted keys; ``""`` when there are no args."""
    if args is None:
        return ""
    return json.dumps(args, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def function_call_fragments(parts: Any) -> List[ToolCallFragment]:
    """Fragments for every ``function_call`` part of one candidate chunk."""
    out: List[ToolCallFragment] = []
    for part in parts or []:
        fc = getattr(part, "function_call", None) if part is not None else None
        if fc is None:
            continue
        out.append(
            ToolCallFragment(
                id=getattr(fc, "id", None) or "",
                name=getattr(fc, "name", None) or "",
                arguments=encode_args(getattr(fc, "args", None)),
                thought_signature=getattr(part, "thought_signature", None) or None,
            )
        )
    return out


class GenAIStream:
    """Streamed completion over the Gemini API."""

    def __init__(self, native: Any, *, state: StreamState, model: str) -> None:
        self._native = native
        self._state = state
        self._model = model
        self._tools = KeyedToolCallAccumulator()
        self._thread = threading.Thread(
            target=self._produce, name="llm-core-genai-stream", daemon=True
        )

    def start(self) -> "GenAIStream":
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
                if chunk is None:
                    continue
                if not self._handle_chunk(chunk):
                    break
        except Exception as exc:  # provider I/O errors become stream data
            if not state.token.cancelled:
                state.record_error(wrap_exception(exc, provider=PROVIDER, model=self._model))
        finally:
            state.finalize(self._tools.tool_calls(), cleanup=self._close_native)

    def _handle_chunk(self, chunk: Any) -> bool:
        state = self._state
        state.set_usage(extract_genai_usage(chunk))
        candidates = getattr(chunk, "candidates", None) or []
        if not candidates or candidates[0] is None:
            return True
        candidate = candidates[0]
        state.set_finish_reason(getattr(candidate, "finish_reason", None))
        content = getattr(candidate, "content", None)
        parts = (getattr(content, "parts", None) if content is not None else None) or []
        fragments = function_call_fragments(parts)
        if fragments:
            self._tools.append(fragments)
        for part in parts:
            text = getattr(part, "text", None) if part is not None else None
            if text and not state.emit_text(text):
                return False
        return True

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

    def __enter__(self) -> "GenAIStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["GenAIStream", "function_call_fragments", "encode_args"]
