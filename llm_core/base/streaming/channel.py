"""Unbuffered producer/consumer handoff.

``HandoffChannel`` is a single-slot rendezvous: ``send`` blocks until the
consumer has taken the item, so the producer never runs ahead of the
consumer by more than one fragment. Both sides are woken immediately when the
associated :class:`CancellationToken` is cancelled.
"""
from __future__ import annotations

import threading
from typing import Generic, Optional, Tuple, TypeVar

from ..cancellation import CancellationToken, CancelledError

T = TypeVar("T")


class HandoffChannel(Generic[T]):
    """Cancellable rendezvous channel for a single producer and consumer."""

    def __init__(self, token: CancellationToken) -> None:
        self._token = token
        self._cond = threading.Condition()
        self._item: Optional[T] = None
        self._has_item = False
        self._closed = False
        self._sent = 0
        self._taken = 0
        token.register(self._wake)

    def _wake(self) -> None:
        with self._cond:
            self._cond.notify_all()

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, item: T) -> bool:
        """Hand ``item`` to the consumer.

        Returns ``True`` once the consumer took it, ``False`` when the channel
        is closed or the token was cancelled first (the item is dropped).
        """
        with self._cond:
            while self._has_item and not self._closed and not self._token.cancelled:
                self._cond.wait()
            if self._closed or self._token.cancelled:
                return False
            self._item = item
            self._has_item = True
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            while self._taken < ticket and not self._token.cancelled:
                self._cond.wait()
            if self._taken < ticket:
                self._item = None
                self._has_item = False
                return False
            return True

    def recv(self) -> Tuple[Optional[T], bool]:
        """Block for the next item.

        Returns ``(item, True)`` for an item and ``(None, False)`` once the
        channel is closed and drained. Raises :class:`CancelledError` when the
        token is cancelled; cancellation is checked before pending items.
        """
        with self._cond:
            while True:
                if self._token.cancelled:
                    raise CancelledError(self._token.reason or "stream cancelled")
                if self._has_item:
                    item = self._item
                    self._item = None
                    self._has_item = False
                    self._taken += 1
                    self._cond.notify_all()
                    return item, True
                if self._closed:
                    return None, False
                self._cond.wait()

    def close(self) -> None:
        """Mark end-of-stream; idempotent."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()


__all__ = ["HandoffChannel"]
