"""Shared pytest fixtures.

Tests never reach a network: provider SDK clients are replaced by small fakes
built from ``SimpleNamespace`` chunks and token counting runs in rune mode.
"""
from __future__ import annotations

import logging
import time
from typing import List

import pytest

from llm_core.base.logging import ROOT_LOGGER, configure_logger, get_logger
from llm_core.base.tokens import AsyncTokenCounter, CountMode
from llm_core.config import reset_config_cache

_PROVIDER_ENV = (
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "GOOGLE_API_KEY",
    "LLM_CORE_CONFIG_FILE",
    "LLM_CORE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep host credentials, dotenv files and cached config out of tests."""
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    configure_logger(level=logging.INFO)
    yield
    reset_config_cache()


@pytest.fixture()
def fake_clock(monkeypatch):
    """Provide a deterministic perf_counter sequence.

    Usage: fake_clock.advance(ms) to move time forward.
    """
    state = {"t": 0.0}

    def perf_counter():
        return state["t"]

    def advance(ms: float):
        state["t"] += ms / 1000.0

    monkeypatch.setattr(time, "perf_counter", perf_counter)
    return type("Clock", (), {"advance": staticmethod(advance)})


@pytest.fixture()
def log_capture():
    """Collect records emitted anywhere under the ``llm_core`` logger."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    root = get_logger(ROOT_LOGGER)
    root.addHandler(handler)
    try:
        yield records
    finally:
        root.removeHandler(handler)


@pytest.fixture()
def rune_counter_factory():
    return lambda: AsyncTokenCounter.create(CountMode.RUNE)
