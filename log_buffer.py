# File: log_buffer.py
"""
log_buffer.py

Provides LineBuffer, a bounded in-memory ring of the most recent log lines.
The buffer is shared between a stream worker thread (appends) and the console
thread (resets), so every access goes through an internal lock.

Cleanse rule: blank lines are dropped and runs of identical consecutive lines
are collapsed to a single line.
"""
import threading
from collections import deque


class LineBuffer:
    def __init__(self, capacity=200):
        self._lock = threading.Lock()
        self._lines = deque(maxlen=self._check_capacity(capacity))

    @staticmethod
    def _check_capacity(capacity):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            raise ValueError(f"buffer capacity must be a positive integer, got {capacity!r}")
        return capacity

    @property
    def capacity(self) -> int:
        return self._lines.maxlen

    def add(self, line: str, token=None) -> bool:
        """
        Append a line, evicting the oldest one once capacity is reached.
        When a cancel token is given and it has already fired, the line is
        rejected and False is returned.
        """
        with self._lock:
            if token is not None and token.cancelled:
                return False
            self._lines.append(line)
            return True

    def clear(self):
        with self._lock:
            self._lines.clear()

    def reset(self, capacity=None):
        """Empty the buffer, optionally switching to a new capacity."""
        with self._lock:
            if capacity is None:
                self._lines.clear()
            else:
                self._lines = deque(maxlen=self._check_capacity(capacity))

    def cleanse(self) -> int:
        """Drop blank lines and collapse consecutive duplicates. Returns lines removed."""
        with self._lock:
            kept = []
            for ln in self._lines:
                if not ln.strip():
                    continue
                if kept and kept[-1] == ln:
                    continue
                kept.append(ln)
            removed = len(self._lines) - len(kept)
            if removed:
                self._lines = deque(kept, maxlen=self._lines.maxlen)
            return removed

    def snapshot(self, token=None):
        """
        Return a list copy of the buffered lines, oldest first.
        Returns None instead when the given cancel token has already fired.
        """
        with self._lock:
            if token is not None and token.cancelled:
                return None
            return list(self._lines)

    def length(self) -> int:
        with self._lock:
            return len(self._lines)

    def __len__(self):
        return self.length()
