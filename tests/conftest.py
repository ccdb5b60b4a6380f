"""Shared fakes for the log console tests."""
import threading
import time

import pytest

from log_feed import Tailable


def wait_for(predicate, timeout=2.0, interval=0.005):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class FakePage:
    def __init__(self, name='page'):
        self.name = name
        self.logged = []
        self.clears = 0
        self.scrolls_to_end = 0
        self.scrolls_to_beginning = 0
        self.page_ups = 0
        self.page_downs = 0
        self.keys = []

    def log(self, lines):
        self.logged.append(list(lines))

    def clear(self):
        self.clears += 1

    def scroll_to_end(self):
        self.scrolls_to_end += 1

    def scroll_to_beginning(self):
        self.scrolls_to_beginning += 1

    def page_up(self):
        self.page_ups += 1

    def page_down(self):
        self.page_downs += 1

    def handle_key(self, evt):
        self.keys.append(evt)
        return True


class FakeResource(Tailable):
    """
    Scriptable producer. `lines` are pushed right away; `close` ends the stream;
    `endless` keeps emitting '<container>-<n>' until cancelled; `fail` raises on open.
    """

    def __init__(self, lines=(), close=False, endless=False, fail=None):
        self.lines = list(lines)
        self.close = close
        self.endless = endless
        self.fail = fail
        self.calls = []
        self.cleanups = 0

    def containers(self, namespace, name):
        return [f'{name}-1']

    def _cleanup(self):
        self.cleanups += 1

    def logs(self, sink, token, namespace, name, container, tail):
        self.calls.append((namespace, name, container, tail))
        token.on_cancel(self._cleanup)
        if self.fail is not None:
            raise self.fail
        for ln in self.lines:
            sink.put(ln)
        if self.endless:
            threading.Thread(target=self._emit, args=(sink, token, container), daemon=True).start()
        elif self.close:
            sink.close()

    @staticmethod
    def _emit(sink, token, container):
        n = 0
        while not token.cancelled:
            sink.put(f'{container}-{n}')
            n += 1
            time.sleep(0.001)
        sink.close()


class FakeParent:
    def __init__(self, resource, selection='shop/web'):
        self.resource = resource
        self.selection = selection
        self.flashes = []
        self.shown = []
        self.backs = 0

    def get_selection(self):
        return self.selection

    def get_resource(self):
        return self.resource

    def flash(self, level, msg):
        self.flashes.append((level, msg))

    def show_page(self, page):
        self.shown.append(page)

    def switch_back(self):
        self.backs += 1


@pytest.fixture
def page():
    return FakePage()


@pytest.fixture
def settings():
    return {'log_buffer_size': 50, 'refresh_rate_ms': 10, 'max_cleanse': 100}
