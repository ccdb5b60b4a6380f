# File: stream_session.py
"""
stream_session.py

One live attachment to a container's log stream.

A StreamSession owns a CancelToken and a single worker thread. The producer
pushes decoded lines into a LineSink; the worker appends them to the shared
LineBuffer and, on a fixed cadence, pushes a snapshot of the buffer to the
display page. Rendering never happens on line arrival, so a chatty container
cannot drive the redraw rate.

States: idle → active → completed (producer closed the stream)
                      → cancelled (stopped or superseded)
"""
import queue
import threading
import time

from log_feed import StreamStartError, namespaced

REFRESH_RATE = 0.2
MAX_CLEANSE = 100
EOS_LINE = "--- No more logs ---"

IDLE = 'idle'
ACTIVE = 'active'
COMPLETED = 'completed'
CANCELLED = 'cancelled'

_CLOSED = object()


class CancelToken:
    """Idempotent cancellation signal. Cleanup callbacks run exactly once."""

    def __init__(self):
        self._lock = threading.Lock()
        self._event = threading.Event()
        self._callbacks = []

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def on_cancel(self, fn):
        with self._lock:
            if not self._event.is_set():
                self._callbacks.append(fn)
                return
        fn()

    def cancel(self) -> bool:
        with self._lock:
            if self._event.is_set():
                return False
            self._event.set()
            callbacks, self._callbacks = self._callbacks, []
        for fn in callbacks:
            fn()
        return True


class LineSink:
    """Channel between a producer thread and the session worker."""

    def __init__(self):
        self._queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, line: str) -> bool:
        with self._lock:
            if self._closed:
                return False
            self._queue.put(line)
            return True

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_CLOSED)

    def get(self, timeout=None):
        """Next line, or None once the sink is closed. Raises queue.Empty on timeout."""
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # leave the marker for any later reader
            self._queue.put(_CLOSED)
            return None
        return item


class StreamSession:
    def __init__(self, resource, path, container, buffer, page, tail,
                 refresh_rate=REFRESH_RATE, max_cleanse=MAX_CLEANSE, event_log=None):
        self.resource = resource
        self.path = path
        self.container = container
        self.buffer = buffer
        self.page = page
        self.tail = tail
        self.refresh_rate = refresh_rate
        self.max_cleanse = max_cleanse
        self.event_log = event_log
        self.state = IDLE
        self.token = CancelToken()
        self.sink = LineSink()
        self.token.on_cancel(self.sink.close)
        self._state_lock = threading.Lock()
        self._thread = None
        self._ticks = 0
        self._first = True

    @property
    def identity(self):
        return self.path, self.container

    def _log(self, level, msg):
        if self.event_log is not None:
            getattr(self.event_log, level)(self.container, msg)

    def start(self):
        with self._state_lock:
            if self.state != IDLE:
                raise RuntimeError(f"session {self.path}:{self.container} already {self.state}")
        namespace, name = namespaced(self.path)
        try:
            self.resource.logs(self.sink, self.token, namespace, name, self.container, self.tail)
        except Exception as e:
            self.token.cancel()
            with self._state_lock:
                self.state = CANCELLED
            raise StreamStartError(f"Unable to stream logs for {self.path}:{self.container} ({e})") from e
        with self._state_lock:
            self.state = ACTIVE
        self._log('info', f"Streaming logs from {self.path} (tail={self.tail})")
        self._thread = threading.Thread(target=self._run, name=f"logs-{self.container}", daemon=True)
        self._thread.start()

    def stop(self) -> bool:
        """Cancel the session. Returns False when there was nothing active to cancel."""
        fired = self.token.cancel()
        with self._state_lock:
            was_active = self.state == ACTIVE
            if self.state in (IDLE, ACTIVE):
                self.state = CANCELLED
        if fired and was_active:
            self._log('info', "Log stream cancelled")
        return fired and was_active

    def join(self, timeout=None):
        if self._thread is not None:
            self._thread.join(timeout)

    def _run(self):
        next_tick = time.monotonic() + self.refresh_rate
        while True:
            remaining = next_tick - time.monotonic()
            if remaining > 0:
                try:
                    line = self.sink.get(timeout=remaining)
                except queue.Empty:
                    pass
                else:
                    if line is None:
                        self._finish()
                        return
                    self.buffer.add(line, self.token)
                    continue
            next_tick = time.monotonic() + self.refresh_rate
            if self.token.cancelled:
                return
            self._tick()

    def _tick(self):
        self._ticks += 1
        if self._ticks >= self.max_cleanse:
            removed = self.buffer.cleanse()
            self._log('debug', f"Cleansing logs ({removed} removed)")
            self._ticks = 0
        lines = self.buffer.snapshot(self.token)
        if lines is None:
            return
        if not lines:
            self.page.clear()
            return
        self.page.log(lines)
        if self._first:
            self.page.scroll_to_end()
            self._first = False

    def _finish(self):
        if self.token.cancelled:
            return
        if self.buffer.length() > 0 and self.buffer.add(EOS_LINE, self.token):
            lines = self.buffer.snapshot(self.token)
            if lines is None:
                return
            self.page.log(lines)
            self.page.scroll_to_end()
        with self._state_lock:
            if self.state == ACTIVE:
                self.state = COMPLETED
        self._log('info', "Log stream closed")
