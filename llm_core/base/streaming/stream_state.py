"""Shared per-stream state composed into every provider stream.

`StreamState` owns the pieces every provider stream needs regardless of the
provider's chunk shape: the cancellation token, the handoff channel, live
statistics, the first-write-wins error slot, the TTFT guard and the one-shot
finalization sequence. Provider streams hold one instance and drive it from
their own producer loop; nothing here knows about SDK chunk types.
"""
from __future__ import annotations

import contextlib
import logging
import threading
import time
from enum import Enum
from typing import Callable, List, Optional

from ..cancellation import CancellationToken, CancelledError
from ..errors import ErrorCode, ProviderError
from ..logging import LogContext, normalized_log_event
from ..models import StreamResponseType, StreamStats, TokenUsage, ToolCall
from ..tokens import AsyncTokenCounter
from .channel import HandoffChannel
from .once import OnceFlag
from .response_type import normalize_finish_reason, resolve_response_type


class StreamLifecycle(str, Enum):
    CREATED = "created"
    STREAMING = "streaming"
    COMPLETED = "completed"
    ERRORED = "errored"
    CANCELLED = "cancelled"


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


class StreamState:
    """Producer/consumer state for a single streamed completion."""

    def __init__(
        self,
        *,
        token: CancellationToken,
        counter: AsyncTokenCounter,
        logger: logging.Logger,
        ctx: LogContext,
        start: Optional[float] = None,
    ) -> None:
        self.token = token
        self.counter = counter
        self.channel: HandoffChannel[str] = HandoffChannel(token)
        self.stats = StreamStats()
        self.lifecycle = StreamLifecycle.CREATED
        self._logger = logger
        self._ctx = ctx
        self._error: Optional[BaseException] = None
        self._error_lock = threading.Lock()
        self._ttft_once = OnceFlag()
        self._finalize_once = OnceFlag()
        self._done = threading.Event()
        self._tool_calls: Optional[List[ToolCall]] = None
        self._settled = False
        self._start = start if start is not None else time.perf_counter()
        self._emitted = 0

    # producer side -------------------------------------------------------
    def mark_streaming(self) -> None:
        """Enter ``STREAMING``; called once by the producer thread."""
        self.lifecycle = StreamLifecycle.STREAMING
        normalized_log_event(self._logger, "stream.start", self._ctx, phase="start", attempt=1)

    def record_error(self, exc: BaseException) -> bool:
        """Store ``exc`` unless an error was already recorded (first write wins)."""
        with self._error_lock:
            if self._error is not None:
                return False
            self._error = exc
            return True

    @property
    def error(self) -> Optional[BaseException]:
        with self._error_lock:
            return self._error

    def set_finish_reason(self, reason: object) -> None:
        normalized = normalize_finish_reason(reason)
        if normalized:
            self.stats.finish_reason = normalized

    def set_usage(self, usage: TokenUsage) -> None:
        """Overwrite usage when the provider reported a nonzero total."""
        if usage.total_tokens > 0:
            self.stats.usage = usage

    def emit_text(self, text: str) -> bool:
        """Publish one non-empty text delta; returns ``False`` once the consumer is gone."""
        if not text:
            return True
        if self._ttft_once.fire():
            self.stats.ttft_ms = _elapsed_ms(self._start)
        self.counter.append(text)
        self._emitted += 1
        return self.channel.send(text)

    def finalize(
        self,
        tool_calls: Optional[List[ToolCall]],
        cleanup: Optional[Callable[[], None]] = None,
    ) -> bool:
        """Run the end-of-stream sequence once; later calls are no-ops.

        Stats and tool calls are settled before the channel closes, so a
        consumer that observed end-of-stream always reads final values.
        ``cleanup`` (native stream close) runs after the channel closed.
        """
        if not self._finalize_once.fire():
            return False
        try:
            stats = self.stats
            stats.total_latency_ms = _elapsed_ms(self._start)
            stats.local_token_count = self.counter.finally_calc()
            if stats.usage.total_tokens == 0:
                stats.usage = TokenUsage(
                    prompt_tokens=self.counter.get_prompt_count(),
                    completion_tokens=stats.local_token_count,
                    total_tokens=self.counter.get_total_count(),
                )
            self._tool_calls = tool_calls or None
            stats.response_type = resolve_response_type(stats.finish_reason, self._tool_calls)
            error = self.error
            if error is not None:
                self.lifecycle = StreamLifecycle.ERRORED
            elif self.token.cancelled:
                self.lifecycle = StreamLifecycle.CANCELLED
            else:
                self.lifecycle = StreamLifecycle.COMPLETED
            self._settled = True
        finally:
            # a blocked recv() must always observe end-of-stream
            self.channel.close()
        try:
            self.counter.close()
            if cleanup is not None:
                with contextlib.suppress(Exception):
                    cleanup()
            self._log_end(error)
        finally:
            self.token.detach()
            self._done.set()
        return True

    def _log_end(self, error: Optional[BaseException]) -> None:
        stats = self.stats
        fields = dict(
            emitted=self._emitted > 0,
            tokens=stats.usage,
            chunks=self._emitted,
            finish_reason=stats.finish_reason or None,
            response_type=stats.response_type.value,
            time_to_first_token_ms=stats.ttft_ms,
            total_duration_ms=stats.total_latency_ms,
        )
        if self.lifecycle is StreamLifecycle.ERRORED:
            code = error.code.value if isinstance(error, ProviderError) else ErrorCode.UNKNOWN.value
            normalized_log_event(
                self._logger,
                "stream.error",
                self._ctx,
                phase="finalize",
                error_code=code,
                level=logging.WARNING,
                error=str(error),
                **fields,
            )
        elif self.lifecycle is StreamLifecycle.CANCELLED:
            normalized_log_event(
                self._logger,
                "stream.cancelled",
                self._ctx,
                phase="finalize",
                error_code=ErrorCode.CANCELLED.value,
                reason=self.token.reason,
                **fields,
            )
        else:
            normalized_log_event(self._logger, "stream.end", self._ctx, phase="finalize", **fields)

    # consumer side -------------------------------------------------------
    def recv(self) -> str:
        """Next fragment, or ``""`` at end-of-stream.

        Raises the recorded stream error when production failed, and
        :class:`CancelledError` when the stream was closed first.
        """
        try:
            item, ok = self.channel.recv()
        except CancelledError:
            error = self.error
            if error is not None:
                raise error from None
            raise
        if ok:
            return item or ""
        error = self.error
        if error is not None:
            raise error
        return ""

    def close(self, reason: str = "stream closed") -> None:
        self.token.cancel(reason)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until finalization ran; returns ``False`` on timeout."""
        return self._done.wait(timeout)

    @property
    def done(self) -> bool:
        return self._done.is_set()

    @property
    def tool_calls(self) -> Optional[List[ToolCall]]:
        """Finalized tool calls (copies); ``None`` until finalization."""
        if not self._settled or not self._tool_calls:
            return None
        return [
            ToolCall(
                id=tc.id,
                name=tc.name,
                arguments=tc.arguments,
                thought_signature=tc.thought_signature,
            )
            for tc in self._tool_calls
        ]

    @property
    def response_type(self) -> StreamResponseType:
        return self.stats.response_type

    @property
    def finish_reason(self) -> str:
        return self.stats.finish_reason


def abandon_stream_start(token: CancellationToken, counter: AsyncTokenCounter) -> None:
    """Release what a stream start acquired before the SDK call failed."""
    token.cancel("stream start failed")
    token.detach()
    counter.close()


__all__ = ["StreamState", "StreamLifecycle", "abandon_stream_start"]
