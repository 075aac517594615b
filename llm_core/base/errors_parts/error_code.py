"""Failure categories carried by :class:`ProviderError`.

``classify_exception`` maps SDK exceptions and HTTP statuses onto these
values. A stream that fails records the code on its error and reports it as
``error_code`` in the ``stream.error`` event; cancelled streams log
``cancelled`` instead. The CLI prints the same value in its JSON error body.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    TRANSIENT = "transient"
    UNSUPPORTED = "unsupported"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    # nothing more specific matched
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
