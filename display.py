# File: display.py
"""
display.py

Curses rendering for the log console.

LogPage keeps the last snapshot rendered for one container plus its scroll
position; CursesScreen paints the active page between a header and a footer
(hints or the latest flash message). Stream workers render from their own
threads, so painting is serialized by the screen lock.
"""
import curses
import threading
import time

from key_actions import (KeyEvent, KEY_ESC, KEY_PGUP, KEY_PGDN, KEY_HOME, KEY_END,
                         KEY_UP, KEY_DOWN)

DEFAULT_HEIGHT = 20
FLASH_SECONDS = 3.0

CURSES_KEYS = {
    27: KEY_ESC,
    curses.KEY_PPAGE: KEY_PGUP,
    curses.KEY_NPAGE: KEY_PGDN,
    curses.KEY_HOME: KEY_HOME,
    curses.KEY_END: KEY_END,
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
}


def key_event_from_curses(ch):
    """Translate a getch() code; None when no key was pressed or it is not handled."""
    if ch == -1:
        return None
    if ch in CURSES_KEYS:
        return KeyEvent(CURSES_KEYS[ch])
    if 32 <= ch < 127:
        return KeyEvent.rune(chr(ch))
    return None


class LogPage:
    def __init__(self, name, screen=None):
        self.name = name
        self.screen = screen
        self.lines = []
        self.top = 0
        self._lock = threading.Lock()

    def height(self) -> int:
        return self.screen.body_height() if self.screen is not None else DEFAULT_HEIGHT

    def _max_top(self):
        return max(0, len(self.lines) - self.height())

    def log(self, lines):
        with self._lock:
            self.lines = list(lines)
            self.top = min(self.top, self._max_top())
        self._redraw()

    def clear(self):
        with self._lock:
            self.lines = []
            self.top = 0
        self._redraw()

    def scroll_to_beginning(self):
        self._move_to(0)

    def scroll_to_end(self):
        with self._lock:
            self.top = self._max_top()
        self._redraw()

    def page_up(self):
        self.scroll(-self.height())

    def page_down(self):
        self.scroll(self.height())

    def scroll(self, delta):
        self._move_to(self.top + delta)

    def _move_to(self, top):
        with self._lock:
            self.top = min(max(0, top), self._max_top())
        self._redraw()

    def visible(self) -> list[str]:
        with self._lock:
            return self.lines[self.top:self.top + self.height()]

    def handle_key(self, evt):
        """Default navigation for keys the console did not consume."""
        moves = {
            KEY_UP: lambda: self.scroll(-1),
            KEY_DOWN: lambda: self.scroll(1),
            KEY_PGUP: self.page_up,
            KEY_PGDN: self.page_down,
            KEY_HOME: self.scroll_to_beginning,
            KEY_END: self.scroll_to_end,
        }
        fn = moves.get(evt.key)
        if fn is None:
            return False
        fn()
        return True

    def _redraw(self):
        if self.screen is not None and self.screen.page is self:
            self.screen.draw()


class CursesScreen:
    def __init__(self, stdscr, title='', flash_seconds=FLASH_SECONDS):
        self.stdscr = stdscr
        self.title = title
        self.flash_seconds = flash_seconds
        self.page = None
        self.hints = []
        self.message = ''
        self._message_until = 0.0
        self._lock = threading.Lock()

    def body_height(self) -> int:
        h, _ = self.stdscr.getmaxyx()
        return max(1, h - 3)

    def show(self, page):
        page.screen = self
        self.page = page
        self.draw()

    def flash(self, level, msg):
        self.message = f"{level.upper()}: {msg}"
        self._message_until = time.monotonic() + self.flash_seconds
        self.draw()

    def expire_flash(self) -> bool:
        """Drop the flash message once it has been shown long enough; the hints come back."""
        if not self.message or time.monotonic() < self._message_until:
            return False
        self.message = ''
        self.draw()
        return True

    def read_key(self):
        # getch refreshes the window, so it must not interleave with a worker draw
        with self._lock:
            return self.stdscr.getch()

    def draw(self):
        with self._lock:
            self.stdscr.erase()
            h, w = self.stdscr.getmaxyx()
            name = f" [{self.page.name}]" if self.page is not None else ''
            self._put(0, w, f"{self.title}{name}")
            self._put(1, w, "-" * (w - 1))
            lines = self.page.visible() if self.page is not None else []
            for idx, line in enumerate(lines, start=2):
                if idx >= h - 1:
                    break
                self._put(idx, w, line)
            footer = self.message or "  ".join(f"<{k}> {d}" for k, d in self.hints)
            self._put(h - 1, w, footer)
            self.stdscr.refresh()

    def _put(self, y, w, text):
        try:
            self.stdscr.addstr(y, 0, text[:max(0, w - 1)])
        except curses.error:
            # writing the last cell of the window raises; the text is still drawn
            pass
