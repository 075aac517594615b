"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class used by streams to stop producer
threads and wake blocked consumers. Cancellation is cooperative: producers poll
``cancelled`` between chunks, while blocking waits subscribe through
``register`` so they are woken immediately.
"""

from __future__ import annotations

from threading import Event, Lock
from typing import Callable, List

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """A cooperative cancellation token with cascading semantics.

    Thread-safe. Child tokens inherit cancellation when the parent is
    cancelled; cancelling a child never affects the parent.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._event = Event()
        self._children: List[CancellationToken] = []
        self._callbacks: List[Callable[[], None]] = []
        self._parent: "CancellationToken | None" = None
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cooperative cancellation, run callbacks and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            callbacks = list(self._callbacks)
            self._callbacks.clear()
        self._event.set()
        for cb in callbacks:
            cb()
        for child in children:
            child.cancel(reason)

    def register(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once on cancellation (immediately if already cancelled)."""
        with self._lock:
            if not self._state.cancelled:
                self._callbacks.append(callback)
                return
        callback()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return ``cancelled``."""
        return self._event.wait(timeout)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            token._parent = self
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def unlink_child(self, token: "CancellationToken") -> None:
        """Stop cascading to ``token``; unknown tokens are ignored."""
        with self._lock:
            try:
                self._children.remove(token)
            except ValueError:
                return
        if token._parent is self:
            token._parent = None

    def detach(self) -> None:
        """Drop the parent link and pending callbacks once the owner is done.

        A finished stream calls this so a long-lived caller token does not
        keep references to it.
        """
        parent = self._parent
        if parent is not None:
            parent.unlink_child(self)
        with self._lock:
            self._callbacks.clear()

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
