"""Structured logging utilities shared by every provider adapter.

All loggers hang off the ``llm_core`` root logger, which is configured once
with a stderr handler (JSON by default) and a level taken from
``LLM_CORE_LOG_LEVEL``. Adapters obtain child loggers via :func:`get_logger`
and emit events through :func:`normalized_log_event` so every stream event
carries the same canonical keys: ``structured``, ``phase``, ``attempt``,
``error_code``, ``emitted`` and ``tokens``.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

ROOT_LOGGER = "llm_core"
LOG_LEVEL_ENV = "LLM_CORE_LOG_LEVEL"
PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_CONFIGURED_ATTR = "_llm_core_configured"
_CONSOLE_HANDLER_ATTR = "_llm_core_console_handler"
_FILE_HANDLER_ATTR = "_llm_core_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a level name (DEBUG, INFO, WARN/WARNING, ERROR, CRITICAL).

    Unknown or empty values fall back to ``default``.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(PLAIN_FORMAT)


def _ensure_root_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(ROOT_LOGGER)
    env_level = os.getenv(LOG_LEVEL_ENV)
    desired = _parse_level(env_level, default=level)
    if getattr(logger, _CONFIGURED_ATTR, False):
        # only the env var overrides a level chosen via configure_logger
        if env_level:
            logger.setLevel(desired)
        for handler in logger.handlers:
            if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
                if env_level:
                    handler.setLevel(desired)
                # pytest swaps sys.stderr between tests; follow it
                if getattr(handler, "stream", None) is not sys.stderr:
                    with contextlib.suppress(ValueError):
                        handler.setStream(sys.stderr)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.setLevel(desired)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _CONFIGURED_ATTR, True)
    return logger


def get_logger(
    name: str = ROOT_LOGGER, json_mode: bool = True, level: int = logging.INFO
) -> logging.Logger:
    """Return a logger under the shared ``llm_core`` hierarchy.

    Names without the ``llm_core.`` prefix are nested under it, so
    ``get_logger("openai.stream")`` yields ``llm_core.openai.stream``.
    """
    root = _ensure_root_logger(json_mode=json_mode, level=level)
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name; ``None`` keeps the current level.
    file_path:
        Attach (or retarget) a rotating file handler writing to this path.
        ``None`` removes any file handler previously attached here.
    json_mode:
        Formatter used for the file handler.

    Handlers attached by user code are never touched.
    """
    logger = _ensure_root_logger(json_mode=json_mode, level=logging.INFO)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for handler in logger.handlers:
            if getattr(handler, _CONSOLE_HANDLER_ATTR, False) or getattr(handler, _FILE_HANDLER_ATTR, False):
                handler.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for handler in managed:
        if abs_path is not None and getattr(handler, "baseFilename", None) == abs_path:
            handler.setFormatter(_formatter(json_mode))
            handler.setLevel(logger.level)
            return logger
        logger.removeHandler(handler)
        handler.close()
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    keep_none: bool = False,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Emit ``{"event": event, **ctx, **fields}`` as one JSON line.

    ``None`` values are dropped unless ``keep_none`` is set.
    """
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Turn usage objects/mappings into a plain dict (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a structured event that always carries the normalized keys.

    ``error_code`` is omitted when ``None``; the other required keys are kept
    even when their value is unknown. ``extra_fields`` never overwrite a
    normalized value that is already set.
    """
    fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "error_code": error_code,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is None:
        fields.pop("error_code")
    for k, v in extra_fields.items():
        if v is None:
            continue
        if fields.get(k) is not None:
            continue
        fields[k] = v
    log_event(logger, event, ctx, keep_none=True, level=level, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "ROOT_LOGGER",
    "LOG_LEVEL_ENV",
]
