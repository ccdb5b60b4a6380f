# File: logs_view.py
"""
logs_view.py

LogsView ties the console together: one page per container of the selected
resource, a shared LineBuffer, at most one live StreamSession, and the key
bindings that move between containers and scroll the active page.

Switching containers always stops the running session before the buffer is
reset and a new session is started, so two streams never feed one buffer.

The parent object supplies get_selection(), get_resource(), flash(level, msg),
show_page(page) and switch_back().
"""
from display import LogPage
from key_actions import ActionDispatcher, KeyAction, KEY_ESC
from log_buffer import LineBuffer
from log_feed import LogStreamError, require_tailable
from source_set import SourceSet
from stream_session import StreamSession, REFRESH_RATE, MAX_CLEANSE

NO_LOGS_LINE = "😂 Doh! No logs are available at this time. Check again later on..."

FLASH_INFO = 'info'
FLASH_ERR = 'error'


class LogsView:
    def __init__(self, parent, settings, page_factory=LogPage, event_log=None):
        self.parent = parent
        self.settings = settings
        self.page_factory = page_factory
        self.event_log = event_log
        self.buffer = LineBuffer(int(settings.get('log_buffer_size', 200)))
        self.session = None
        self.actions = ActionDispatcher(on_numeric=lambda n: self.load(n - 1))
        self.actions.set_actions({
            KEY_ESC: KeyAction("Back", self.back),
            'c': KeyAction("Clear", self.clear_logs),
            'u': KeyAction("Top", self.top),
            'd': KeyAction("Bottom", self.bottom),
            'f': KeyAction("PageUp", self.page_up),
            'b': KeyAction("PageDown", self.page_down),
        })
        self.sources = SourceSet(self.actions)
        self.sources.on_switch(self._restart)

    def init(self):
        self.load(0)

    def add_container(self, name):
        self.sources.add_source(name, self.page_factory(name))

    def delete_all_pages(self):
        self.stop()
        self.sources.remove_all()

    def hints(self):
        return self.actions.hints()

    def load(self, i) -> bool:
        return self.sources.switch_to(i)

    def stop(self):
        if self.session is None:
            return
        self.session.stop()
        self.session = None

    def keyboard(self, evt):
        unhandled = self.actions.dispatch(evt)
        page = self.sources.active_page
        if unhandled is not None and page is not None:
            page.handle_key(unhandled)
        return unhandled

    def _restart(self, i):
        self.stop()
        page = self.sources.page(i)
        self.parent.show_page(page)
        capacity = int(self.settings.get('log_buffer_size', 200))
        self.buffer.reset(capacity)
        try:
            self._start(self.parent.get_selection(), self.sources.names[i], page, capacity)
        except LogStreamError as e:
            if self.event_log is not None:
                self.event_log.error(self.sources.names[i], str(e))
            self.parent.flash(FLASH_ERR, str(e))
            self.buffer.add(NO_LOGS_LINE)
            page.log(self.buffer.snapshot())

    def _start(self, path, container, page, tail):
        res = require_tailable(self.parent.get_resource())
        session = StreamSession(
            res, path, container, self.buffer, page, tail,
            refresh_rate=float(self.settings.get('refresh_rate_ms', REFRESH_RATE * 1000)) / 1000,
            max_cleanse=int(self.settings.get('max_cleanse', MAX_CLEANSE)),
            event_log=self.event_log,
        )
        session.start()
        self.session = session

    # Actions...

    def back(self, evt=None):
        self.stop()
        self.parent.switch_back()

    def top(self, evt=None):
        p = self.sources.active_page
        if p is not None:
            self.parent.flash(FLASH_INFO, "Top logs...")
            p.scroll_to_beginning()

    def bottom(self, evt=None):
        p = self.sources.active_page
        if p is not None:
            self.parent.flash(FLASH_INFO, "Bottom logs...")
            p.scroll_to_end()

    def page_up(self, evt=None):
        p = self.sources.active_page
        if p is not None:
            self.parent.flash(FLASH_INFO, "Page Up logs...")
            p.page_up()

    def page_down(self, evt=None):
        p = self.sources.active_page
        if p is not None:
            self.parent.flash(FLASH_INFO, "Page Down logs...")
            p.page_down()

    def clear_logs(self, evt=None):
        p = self.sources.active_page
        if p is not None:
            self.parent.flash(FLASH_INFO, "Clearing logs...")
            self.buffer.clear()
            p.clear()
