"""
Bounded hold-and-release buffer of recent log entries
"""

from __future__ import annotations
from collections import deque
from typing import Deque, List, Optional
import threading

from retain_logger.core.log_entry import LogEntry


class RetentionBuffer:
    """
    FIFO buffer of retained entries with oldest-first eviction.

    Thread Safety:
        append and drain are atomic with respect to each other.

    Example:
        buffer = RetentionBuffer(capacity=2)
        buffer.append(LogEntry(LogLevel.INFO, "a"))
        buffer.append(LogEntry(LogLevel.INFO, "b"))
        buffer.append(LogEntry(LogLevel.INFO, "c"))
        buffer.drain()  # -> entries "b", "c"
    """

    def __init__(self, capacity: Optional[int] = None):
        """
        Initialize retention buffer.

        Args:
            capacity: Maximum number of entries kept. None means unbounded.

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity is not None and capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: Deque[LogEntry] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> Optional[int]:
        return self._capacity

    def append(self, entry: LogEntry) -> int:
        """
        Append an entry at the tail, evicting from the head on overflow.

        Args:
            entry: Entry to retain

        Returns:
            Number of entries evicted to make room
        """
        with self._lock:
            self._entries.append(entry)
            evicted = 0
            if self._capacity is not None:
                while len(self._entries) > self._capacity:
                    self._entries.popleft()
                    evicted += 1
            return evicted

    def drain(self) -> List[LogEntry]:
        """
        Return all entries in insertion order and empty the buffer.

        Returns:
            Retained entries, oldest first
        """
        with self._lock:
            out = list(self._entries)
            self._entries.clear()
            return out

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"RetentionBuffer(size={len(self)}, capacity={self._capacity})"
