"""
Bounded in-memory buffer of log entries.
"""

import threading
from collections import deque
from typing import Deque, List, Optional

from vibelogger.logger.entry import LogEntry


class MemoryBuffer:
    """
    Thread-safe, ordered, optionally bounded collection of entries.

    When full, appending evicts the oldest entry in the same locked step, so
    the buffer always holds the most recent ``min(appended, capacity)``
    entries in insertion order. A disabled buffer drops every append.

    Args:
        capacity: Maximum number of entries, None for unbounded
        enabled: Whether entries are retained at all
    """

    def __init__(self, capacity: Optional[int] = None, enabled: bool = True):
        self._capacity = capacity
        self._enabled = enabled
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    @property
    def enabled(self) -> bool:
        return self._enabled

    def append(self, entry: LogEntry) -> None:
        if not self._enabled:
            return
        with self._lock:
            self._entries.append(entry)

    def snapshot(self) -> List[LogEntry]:
        """Copy of the current entries, oldest first."""
        if not self._enabled:
            return []
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
