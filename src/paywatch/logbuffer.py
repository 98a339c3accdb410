"""Bounded in-memory activity log exposed through GET /logs."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Any

from paywatch.models import LogEntry, LogLevel, utc_timestamp

logger = logging.getLogger(__name__)

_LOGGING_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def _json_safe(value: Any) -> Any:
    """Replace NaN and infinities with None so entries always render as strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


class LogBuffer:
    """Append-only ring of LogEntry; the oldest entry is dropped on overflow.

    Appends never suspend, so concurrent requests on one event loop can share
    a single buffer without a lock.
    """

    def __init__(self, capacity: int = 100) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._entries: deque[LogEntry] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen or 0

    def append(self, level: LogLevel | str, message: str, data: Any = None) -> LogEntry:
        level = LogLevel(level)
        data = _json_safe(data)
        entry = LogEntry(timestamp=utc_timestamp(), level=level, message=message, data=data)
        self._entries.append(entry)
        if data is None:
            logger.log(_LOGGING_LEVELS[level], "%s", message)
        else:
            logger.log(_LOGGING_LEVELS[level], "%s %s", message, data)
        return entry

    def info(self, message: str, data: Any = None) -> LogEntry:
        return self.append(LogLevel.INFO, message, data)

    def warning(self, message: str, data: Any = None) -> LogEntry:
        return self.append(LogLevel.WARNING, message, data)

    def error(self, message: str, data: Any = None) -> LogEntry:
        return self.append(LogLevel.ERROR, message, data)

    def recent(self, n: int) -> list[LogEntry]:
        if n <= 0:
            return []
        return list(self._entries)[-n:]

    def all(self) -> list[LogEntry]:
        return list(self._entries)

    def last(self) -> LogEntry | None:
        return self._entries[-1] if self._entries else None

    def count(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
