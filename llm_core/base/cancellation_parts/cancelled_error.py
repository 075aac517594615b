"""Cancellation error type.

Defines the public ``CancelledError`` used to signal cooperative cancellation
by streams and tokens. ``Stream.recv()`` raises it when the stream was
closed before end-of-stream and no provider error was recorded.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when an operation is cancelled cooperatively.

    Distinct from provider failures so callers can skip error logging and
    retries for streams they closed themselves.
    """


__all__ = ["CancelledError"]
