"""Log buffer tests."""

import logging

import pytest

from paywatch.logbuffer import LogBuffer
from paywatch.models import LogLevel


def test_append_records_entry():
    logs = LogBuffer()
    entry = logs.append("info", "hello", {"k": 1})
    assert entry.level is LogLevel.INFO
    assert entry.message == "hello"
    assert entry.data == {"k": 1}
    assert entry.timestamp.endswith("Z")
    assert logs.count() == 1
    assert logs.last() is entry


def test_never_exceeds_capacity_and_keeps_last_entries_in_order():
    logs = LogBuffer()
    for i in range(250):
        logs.info(f"msg {i}")
    assert logs.count() == 100
    assert len(logs) == 100
    assert [e.message for e in logs.all()] == [f"msg {i}" for i in range(150, 250)]


def test_small_capacity_evicts_oldest():
    logs = LogBuffer(capacity=3)
    for level in ("info", "warning", "error", "info"):
        logs.append(level, level)
    assert [e.level for e in logs.all()] == [LogLevel.WARNING, LogLevel.ERROR, LogLevel.INFO]


def test_recent_is_non_destructive():
    logs = LogBuffer()
    for i in range(10):
        logs.info(str(i))
    assert [e.message for e in logs.recent(3)] == ["7", "8", "9"]
    assert logs.count() == 10
    assert len(logs.recent(50)) == 10
    assert logs.recent(0) == []


def test_empty_buffer():
    logs = LogBuffer()
    assert logs.last() is None
    assert logs.all() == []


def test_invalid_level_rejected():
    with pytest.raises(ValueError):
        LogBuffer().append("debug", "nope")


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        LogBuffer(capacity=0)


def test_entries_mirrored_to_logging(caplog):
    logs = LogBuffer()
    with caplog.at_level(logging.INFO, logger="paywatch.logbuffer"):
        logs.warning("Payment failure detected", {"amount": 500})
    assert any(r.levelno == logging.WARNING and "Payment failure detected" in r.getMessage()
               for r in caplog.records)


def test_to_dict_serializes_level():
    entry = LogBuffer().error("boom", "detail")
    d = entry.to_dict()
    assert d["level"] == "error"
    assert d["data"] == "detail"
    assert set(d) == {"timestamp", "level", "message", "data"}


def test_non_finite_floats_stored_as_none():
    entry = LogBuffer().warning("Payment failure detected", {
        "amount": float("inf"),
        "nested": [float("nan"), 1.5, {"x": float("-inf")}],
    })
    assert entry.data == {"amount": None, "nested": [None, 1.5, {"x": None}]}
