"""Rendezvous semantics of the producer/consumer handoff channel."""
from __future__ import annotations

import threading

import pytest

from llm_core.base.cancellation import CancellationToken, CancelledError
from llm_core.base.streaming import HandoffChannel, OnceFlag


def test_items_are_delivered_in_order_then_end_of_stream():
    channel: HandoffChannel[str] = HandoffChannel(CancellationToken())
    results = []

    def producer():
        for item in ("a", "b", "c"):
            results.append(channel.send(item))
        channel.close()

    t = threading.Thread(target=producer)
    t.start()
    received = []
    while True:
        item, ok = channel.recv()
        if not ok:
            break
        received.append(item)
    t.join(timeout=2)
    assert received == ["a", "b", "c"]  # nosec B101 - pytest assert in tests
    assert results == [True, True, True]  # nosec B101 - pytest assert in tests


def test_send_blocks_until_consumer_takes_item():
    channel: HandoffChannel[str] = HandoffChannel(CancellationToken())
    delivered = threading.Event()

    def producer():
        channel.send("x")
        delivered.set()

    t = threading.Thread(target=producer, daemon=True)
    t.start()
    assert not delivered.wait(0.1)  # nosec B101 - producer must still be blocked
    assert channel.recv() == ("x", True)  # nosec B101 - pytest assert in tests
    assert delivered.wait(2)  # nosec B101 - pytest assert in tests


def test_cancel_unblocks_pending_send_and_recv():
    token = CancellationToken()
    channel: HandoffChannel[str] = HandoffChannel(token)
    outcome = {}

    def producer():
        outcome["sent"] = channel.send("never taken")

    t = threading.Thread(target=producer, daemon=True)
    t.start()
    token.cancel("stop")
    t.join(timeout=2)
    assert outcome["sent"] is False  # nosec B101 - pytest assert in tests
    with pytest.raises(CancelledError):
        channel.recv()


def test_send_after_close_is_rejected():
    channel: HandoffChannel[str] = HandoffChannel(CancellationToken())
    channel.close()
    assert channel.send("late") is False  # nosec B101 - pytest assert in tests
    assert channel.recv() == (None, False)  # nosec B101 - pytest assert in tests
    assert channel.closed  # nosec B101 - pytest assert in tests


def test_once_flag_fires_once_across_threads():
    flag = OnceFlag()
    wins = []
    barrier = threading.Barrier(8)

    def racer():
        barrier.wait()
        if flag.fire():
            wins.append(1)

    threads = [threading.Thread(target=racer) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert wins == [1]  # nosec B101 - pytest assert in tests
    assert flag.fired  # nosec B101 - pytest assert in tests
