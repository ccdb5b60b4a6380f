# File: key_actions.py
"""
key_actions.py

Keyboard dispatch for the log console.

Resolution order for an event:
1) fixed action bound to the named key (esc, pgup, ...)
2) fixed action bound to the typed character
3) digit shortcut 1-9 bound to a log source → on_numeric(n)
4) anything else is returned to the caller for the page's default handling
"""
from dataclasses import dataclass
from typing import Callable, Optional

KEY_ESC = 'esc'
KEY_PGUP = 'pgup'
KEY_PGDN = 'pgdn'
KEY_HOME = 'home'
KEY_END = 'end'
KEY_UP = 'up'
KEY_DOWN = 'down'
KEY_RUNE = 'rune'

MAX_NUMERIC = 9


@dataclass(frozen=True)
class KeyEvent:
    key: str
    char: Optional[str] = None

    @classmethod
    def rune(cls, ch: str) -> 'KeyEvent':
        return cls(KEY_RUNE, ch)


@dataclass
class KeyAction:
    description: str
    action: Optional[Callable] = None


class ActionDispatcher:
    def __init__(self, actions=None, on_numeric=None):
        self.actions: dict[str, KeyAction] = dict(actions or {})
        self.numeric: dict[int, KeyAction] = {}
        self.on_numeric = on_numeric

    def set_actions(self, actions):
        self.actions = dict(actions)

    def bind_numeric(self, n: int, description: str):
        if not 1 <= n <= MAX_NUMERIC:
            raise ValueError(f"numeric shortcut must be within 1..{MAX_NUMERIC}, got {n}")
        self.numeric[n] = KeyAction(description)

    def clear_numeric(self):
        self.numeric.clear()

    @property
    def numeric_keys(self) -> list[int]:
        return sorted(self.numeric)

    def dispatch(self, evt: KeyEvent) -> Optional[KeyEvent]:
        """Run the matching action. Returns None if consumed, else the event untouched."""
        m = self.actions.get(evt.key)
        if m is not None and m.action is not None:
            m.action(evt)
            return None

        if evt.key != KEY_RUNE or not evt.char:
            return evt

        m = self.actions.get(evt.char)
        if m is not None and m.action is not None:
            m.action(evt)
            return None

        if evt.char.isdecimal() and len(evt.char) == 1:
            n = int(evt.char)
            if n in self.numeric and self.on_numeric is not None:
                self.on_numeric(n)
                return None
        return evt

    def hints(self) -> list[tuple[str, str]]:
        """Footer hints; source shortcuts only make sense with several sources."""
        hh = []
        if len(self.numeric) > 1:
            hh.extend((str(n), self.numeric[n].description) for n in self.numeric_keys)
        hh.extend(sorted((k, a.description) for k, a in self.actions.items()))
        return hh
