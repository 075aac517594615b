"""Stream Protocol (single-class module).

Common surface of every provider stream (``OpenAIStream``, ``GenAIStream``).
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import StreamResponseType, StreamStats, ToolCall


@runtime_checkable
class Stream(Protocol):
    """A cancellable, statistics-producing stream of text fragments.

    ``recv()`` returns ``""`` only at genuine end-of-stream. Stats and tool
    calls are final once end-of-stream was observed.
    """

    @property
    def token(self) -> CancellationToken:
        """Cancellation token shared by the producer and the consumer."""
        ...

    def recv(self) -> str:
        ...

    def close(self) -> None:
        """Request cooperative cancellation; idempotent and never raises."""
        ...

    def stats(self) -> StreamStats:
        ...

    def tool_calls(self) -> Optional[List[ToolCall]]:
        ...

    def response_type(self) -> StreamResponseType:
        ...

    def finish_reason(self) -> str:
        ...

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the producer finalized the stream."""
        ...


__all__ = ["Stream"]
