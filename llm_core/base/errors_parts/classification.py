"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction, status-to-code mapping, and message-based
heuristics as a fallback for SDK exceptions that carry no status.
"""
from __future__ import annotations

from typing import Dict, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError
from .translation_error import TranslationError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from a provider exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code`` (openai ``APIStatusError``)
    - ``exc.code`` (google-genai ``APIError``)
    - ``exc.status``
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "code", "status"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and not isinstance(val, bool) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_RETRYABLE = frozenset(
    {
        ErrorCode.RATE_LIMIT,
        ErrorCode.TIMEOUT,
        ErrorCode.TRANSIENT,
        ErrorCode.UNAVAILABLE,
        ErrorCode.SERVER_ERROR,
    }
)

_PATTERN_GROUPS = (
    (ErrorCode.TIMEOUT, ("timeout",)),
    (ErrorCode.TIMEOUT, ("timed out",)),
    (ErrorCode.AUTH, ("api key",)),
    (ErrorCode.AUTH, ("unauthorized",)),
    (ErrorCode.AUTH, ("forbidden",)),
    (ErrorCode.UNSUPPORTED, ("unsupported",)),
    (ErrorCode.UNSUPPORTED, ("not supported",)),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.NOT_FOUND, ("does not exist",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.VALIDATION, ("invalid",)),
    (ErrorCode.VALIDATION, ("malformed",)),
    (ErrorCode.SERVER_ERROR, ("server error",)),
    (ErrorCode.SERVER_ERROR, ("internal error",)),
    (ErrorCode.TRANSIENT, ("connection",)),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic mapping for non-HTTP exceptions."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    for code, patterns in _PATTERN_GROUPS:
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cancellation and translation errors.
        3. Timeout exceptions.
        4. HTTP status mapping.
        5. Substring heuristics.
        6. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, TranslationError):
        return ErrorCode.VALIDATION
    if isinstance(exc, TimeoutError):
        return ErrorCode.TIMEOUT
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


def wrap_exception(
    exc: BaseException, *, provider: str, model: Optional[str] = None
) -> ProviderError:
    """Return ``exc`` as a :class:`ProviderError` (passthrough when it already is one)."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in _RETRYABLE,
        raw=exc if isinstance(exc, Exception) else None,
    )


__all__ = [
    "classify_exception",
    "wrap_exception",
    "_extract_status",
    "_HTTP_STATUS_MAP",
]
