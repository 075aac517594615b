"""Unit coverage for structured logging utilities and helpers."""

from __future__ import annotations

import json
import logging

from llm_core.base.log_support import JsonFormatter
from llm_core.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from llm_core.base.models import TokenUsage


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("LLM_CORE_LOG_LEVEL", "ERROR")
    logger = get_logger(name="tests.env_level")
    # INFO log shouldn't appear
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101 - asserts are appropriate in unit tests
    # ERROR should be emitted as JSON
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101 - asserts are appropriate in unit tests
    assert data["logger"] == "llm_core.tests.env_level"  # nosec B101 - asserts are appropriate in unit tests


def test_get_logger_nests_names_under_package_root():
    assert get_logger("openai").name == "llm_core.openai"  # nosec B101 - asserts are fine in tests
    assert get_logger("llm_core.gemini").name == "llm_core.gemini"  # nosec B101 - asserts are fine in tests


def test_normalized_log_event_includes_required_keys(capsys):
    logger = get_logger(name="tests.normalized")
    ctx = LogContext(provider="p", model="m", request_id="r1")
    normalized_log_event(
        logger,
        "stream.end",
        ctx,
        phase="finalize",
        attempt=1,
        error_code=None,
        emitted=True,
        tokens=TokenUsage(1, 2, 3),
        extra_field=123,
        phase_override=None,
    )
    payload = json.loads(capsys.readouterr().err.strip())
    for k in ("structured", "phase", "attempt", "emitted", "tokens"):
        assert k in payload  # nosec B101 - asserts are fine in tests
    assert "error_code" not in payload  # nosec B101 - asserts are fine in tests
    assert "phase_override" not in payload  # nosec B101 - asserts are fine in tests
    assert payload["tokens"] == {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3}  # nosec B101 - asserts are fine in tests
    assert payload["extra_field"] == 123  # nosec B101 - asserts are fine in tests
    assert payload["request_id"] == "r1"  # nosec B101 - asserts are fine in tests


def test_normalized_keys_are_kept_when_unknown(capsys):
    normalized_log_event(get_logger("tests.unknown"), "stream.start", phase="start")
    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["attempt"] is None and payload["tokens"] is None  # nosec B101 - asserts are fine in tests


def test_log_event_drops_none_and_empty_context(capsys):
    log_event(get_logger("tests.plain"), "cli.chat", LogContext(provider="openai", model=""), value=None, n=1)
    payload = json.loads(capsys.readouterr().err.strip())
    assert payload["event"] == "cli.chat"  # nosec B101 - asserts are fine in tests
    assert "model" not in payload and "value" not in payload  # nosec B101 - asserts are fine in tests
    assert payload["n"] == 1  # nosec B101 - asserts are fine in tests


def test_json_formatter_hoists_json_message() -> None:
    """Ensure the formatter hoists JSON message keys without double escaping."""

    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="llm_core.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "gemini", "event": "stream.start"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(formatter.format(record))
    assert payload["provider"] == "gemini"  # nosec B101 - validates hoisting
    assert "msg" not in payload  # nosec B101 - structured events suppress raw message noise


def test_json_formatter_keeps_plain_text_message() -> None:
    record = logging.LogRecord("llm_core.x", logging.WARNING, __file__, 0, "plain %s", ("text",), None)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "plain text"  # nosec B101 - asserts are fine in tests


def test_configure_logger_attaches_and_removes_file_handler(tmp_path):
    path = tmp_path / "logs" / "llm.log"
    logger = configure_logger(level="DEBUG", file_path=str(path))
    try:
        get_logger("tests.file").debug("to file")
        for handler in logger.handlers:
            handler.flush()
        assert "to file" in path.read_text(encoding="utf-8")  # nosec B101 - asserts are fine in tests
    finally:
        configure_logger(level="INFO", file_path=None)
    assert not any(getattr(h, "baseFilename", None) for h in logger.handlers)  # nosec B101 - asserts are fine in tests
