"""Streaming building blocks shared by provider streams.

Each provider stream is its own state machine; these utilities are composed
into them rather than inherited.
"""

from .once import OnceFlag
from .channel import HandoffChannel
from .tool_call_accumulator import (
    IndexedToolCallAccumulator,
    KeyedToolCallAccumulator,
    ToolCallFragment,
)
from .response_type import (
    TOOL_CALLS_FINISH_REASON,
    normalize_finish_reason,
    resolve_response_type,
)
from .stream_state import StreamLifecycle, StreamState, abandon_stream_start
from .drain import chat_via_stream

__all__ = [
    "OnceFlag",
    "HandoffChannel",
    "IndexedToolCallAccumulator",
    "KeyedToolCallAccumulator",
    "ToolCallFragment",
    "TOOL_CALLS_FINISH_REASON",
    "normalize_finish_reason",
    "resolve_response_type",
    "StreamLifecycle",
    "StreamState",
    "abandon_stream_start",
    "chat_via_stream",
]
