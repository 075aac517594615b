from __future__ import annotations

import threading

from llm_core.base.errors import UnsupportedModelError
from llm_core.base.tokens import AsyncTokenCounter, CountMode, TokenCounter, default_async_counter
from llm_core.base.tokens import async_counter as async_counter_mod


def test_count_is_zero_until_finalized():
    counter = AsyncTokenCounter.create(CountMode.RUNE)
    counter.append("hello ")
    counter.append("world")
    assert counter.get_count() == 0  # nosec B101 - pytest assert in tests
    assert counter.finally_calc() == 8  # nosec B101 - pytest assert in tests
    assert counter.get_count() == 8  # nosec B101 - pytest assert in tests


def test_finally_calc_is_idempotent():
    counter = AsyncTokenCounter.create(CountMode.RUNE)
    counter.append("abcd")
    first = counter.finally_calc()
    counter.append("ignored after finalization is counted once")
    assert counter.finally_calc() == first  # nosec B101 - pytest assert in tests


def test_total_is_prompt_plus_completion():
    counter = AsyncTokenCounter.create(CountMode.RUNE)
    counter.set_prompt_count(10)
    counter.append("abcd")
    counter.finally_calc()
    assert counter.get_prompt_count() == 10  # nosec B101 - pytest assert in tests
    assert counter.get_total_count() == 13  # nosec B101 - pytest assert in tests


def test_empty_fragments_are_ignored():
    counter = AsyncTokenCounter.create(CountMode.RUNE)
    counter.append("")
    assert counter.finally_calc() == 0  # nosec B101 - pytest assert in tests


def test_concurrent_appends_are_all_counted():
    counter = AsyncTokenCounter.create(CountMode.RUNE)

    def worker():
        for _ in range(100):
            counter.append("abcd")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.finally_calc() == (400 * 4) * 3 // 4  # nosec B101 - pytest assert in tests


def test_count_prompt_messages_delegates_to_counter():
    counter = AsyncTokenCounter(TokenCounter(CountMode.RUNE))
    assert counter.count_prompt_messages(["abcd"]) == 3 + 4  # nosec B101 - pytest assert in tests


def test_default_counter_falls_back_to_rune_and_logs(monkeypatch, log_capture):
    def unavailable(name):
        raise UnsupportedModelError(name)

    monkeypatch.setattr(async_counter_mod.TokenCounter, "for_encoding", staticmethod(unavailable))
    counter = default_async_counter()
    assert counter.counter.mode is CountMode.RUNE  # nosec B101 - pytest assert in tests
    assert any("tokens.counter.fallback" in r.getMessage() for r in log_capture)  # nosec B101 - pytest assert in tests


def test_default_counter_falls_back_when_offline(monkeypatch):
    def offline(name):
        raise OSError("network unreachable")

    monkeypatch.setattr(async_counter_mod.TokenCounter, "for_encoding", staticmethod(offline))
    assert default_async_counter().counter.mode is CountMode.RUNE  # nosec B101 - pytest assert in tests
