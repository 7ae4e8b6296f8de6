"""
Unit tests for the in-memory buffer
"""

import threading

from vibelogger.logger.buffer import MemoryBuffer
from vibelogger.logger.builder import LogEntryBuilder

builder = LogEntryBuilder("buffer-test")


def make(n):
    return builder.build("INFO", "op", f"Message {n}")


def test_unbounded_keeps_everything():
    buffer = MemoryBuffer()
    for i in range(50):
        buffer.append(make(i))
    assert len(buffer) == 50
    assert buffer.capacity is None


def test_evicts_oldest_first():
    buffer = MemoryBuffer(capacity=3)
    for i in range(5):
        buffer.append(make(i))

    assert [e.message for e in buffer.snapshot()] == [
        "Message 2",
        "Message 3",
        "Message 4",
    ]


def test_snapshot_is_a_copy():
    buffer = MemoryBuffer(capacity=3)
    buffer.append(make(0))
    snap = buffer.snapshot()
    buffer.append(make(1))

    assert len(snap) == 1
    assert len(buffer.snapshot()) == 2


def test_disabled_buffer_drops_appends():
    buffer = MemoryBuffer(capacity=3, enabled=False)
    buffer.append(make(0))

    assert buffer.snapshot() == []
    assert len(buffer) == 0
    assert buffer.enabled is False


def test_clear():
    buffer = MemoryBuffer()
    buffer.append(make(0))
    buffer.clear()
    assert buffer.snapshot() == []


def test_snapshots_during_concurrent_appends_stay_consistent():
    buffer = MemoryBuffer(capacity=10)
    stop = threading.Event()
    problems = []

    def reader():
        while not stop.is_set():
            snap = buffer.snapshot()
            numbers = [int(e.message.split()[1]) for e in snap]
            if len(snap) > 10 or numbers != sorted(numbers):
                problems.append(numbers)

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        for i in range(2000):
            buffer.append(make(i))
    finally:
        stop.set()
        thread.join()

    assert problems == []
    assert [e.message for e in buffer.snapshot()][-1] == "Message 1999"
