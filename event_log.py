# File: event_log.py
"""
event_log.py

Contains EventLog, the append-only activity log of the console.
The terminal belongs to curses while the console runs, so session starts,
stops, cleanses and failures are written as one timestamped line each to
logview.log instead of being printed.
"""
import threading
from pathlib import Path
from datetime import datetime, timezone


class EventLog:
    def __init__(self, path='logview.log', debug=False):
        self.path = Path(path)
        self.debug_enabled = debug
        self._lock = threading.Lock()
        if not self.path.exists():
            self.path.write_text('', encoding='utf-8')

    def write(self, level, source, msg):
        now = datetime.now(timezone.utc)
        entry = f"{now.isoformat()} UTC  {level:<5} [{source}] {msg}\n"
        with self._lock:
            with self.path.open('a', encoding='utf-8') as f:
                f.write(entry)

    def debug(self, source, msg):
        if self.debug_enabled:
            self.write('DEBUG', source, msg)

    def info(self, source, msg):
        self.write('INFO', source, msg)

    def error(self, source, msg):
        self.write('ERROR', source, msg)
