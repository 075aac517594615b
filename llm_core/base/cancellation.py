"""Cooperative cancellation primitives (public API facade).

Expose provider-agnostic cancellation constructs via the
``llm_core.base.cancellation`` import path while the concrete implementations
live under ``cancellation_parts``.

- ``CancellationToken`` signals cancellation across streams, with parent to
  child cascading.
- ``CancelledError`` is raised by operations that observe a cancellation request.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
