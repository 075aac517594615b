"""
Tool-call fragment accumulators.

Providers deliver tool calls in two shapes:

* Index-addressed deltas (OpenAI Chat Completions): every chunk carries
  partial ``arguments`` text for the call at ``index``; ``id`` and ``name``
  usually only arrive on the first fragment.
* Whole objects keyed by id (Google GenAI): every function-call part carries
  a complete ``args`` mapping, possibly repeated or refined by later chunks.

Both accumulators are fed from the producer thread and read by consumers, so
every method is synchronized with one lock. ``arguments`` text is only ever
concatenated, never parsed.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..models import ToolCall


@dataclass
class ToolCallFragment:
    """Partial tool call as delivered by one stream chunk.

    ``index`` is only meaningful for the indexed accumulator; ``None`` means
    the provider did not send one.
    """

    index: Optional[int] = None
    id: str = ""
    name: str = ""
    arguments: str = ""
    thought_signature: Optional[bytes] = None


def _copy(call: ToolCall) -> ToolCall:
    return ToolCall(
        id=call.id,
        name=call.name,
        arguments=call.arguments,
        thought_signature=bytes(call.thought_signature) if call.thought_signature is not None else None,
    )


class IndexedToolCallAccumulator:
    """Accumulate OpenAI-style tool-call deltas keyed by integer index."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[int, ToolCall] = {}

    def append(self, fragments: Iterable[ToolCallFragment]) -> None:
        with self._lock:
            for frag in fragments:
                index = frag.index if frag.index is not None else len(self._calls)
                call = self._calls.get(index)
                if call is None:
                    call = ToolCall()
                    self._calls[index] = call
                if frag.id:
                    call.id = frag.id
                if frag.name:
                    call.name = frag.name
                call.arguments += frag.arguments

    def tool_calls(self) -> Optional[List[ToolCall]]:
        """Return copies in ascending index order (``None`` when empty)."""
        with self._lock:
            if not self._calls:
                return None
            return [_copy(self._calls[i]) for i in sorted(self._calls)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls)


class KeyedToolCallAccumulator:
    """Accumulate whole tool-call objects keyed by id.

    Fragments without an id are keyed ``"idx:N"`` where ``N`` is the position
    of the fragment within the batch passed to :meth:`append`.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._calls: Dict[str, ToolCall] = {}
        self._order: List[str] = []

    def append(self, fragments: Iterable[ToolCallFragment]) -> None:
        with self._lock:
            for position, frag in enumerate(fragments):
                key = frag.id or f"idx:{position}"
                call = self._calls.get(key)
                if call is None:
                    call = ToolCall()
                    self._calls[key] = call
                    self._order.append(key)
                if frag.id:
                    call.id = frag.id
                if frag.name:
                    call.name = frag.name
                if frag.arguments:
                    call.arguments = frag.arguments
                if frag.thought_signature:
                    call.thought_signature = bytes(frag.thought_signature)

    def tool_calls(self) -> Optional[List[ToolCall]]:
        """Return copies in first-seen order (``None`` when empty)."""
        with self._lock:
            if not self._calls:
                return None
            keys = self._order if len(self._order) == len(self._calls) else sorted(self._calls)
            return [_copy(self._calls[k]) for k in keys]

    def __len__(self) -> int:
        with self._lock:
            return len(self._calls)


__all__ = [
    "ToolCallFragment",
    "IndexedToolCallAccumulator",
    "KeyedToolCallAccumulator",
]
