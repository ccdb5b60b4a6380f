# File: source_set.py
"""
source_set.py

Ordered registry of the log sources (one per container) of the selected
resource. Each source keeps its own display page, which holds the last
snapshot rendered into it even after another source becomes active.
Digit shortcuts on the dispatcher always mirror the current ordering.
"""
from key_actions import MAX_NUMERIC


class SourceSet:
    def __init__(self, actions=None):
        self.actions = actions
        self._names = []
        self._pages = []
        self.active = -1
        self._listeners = []

    @property
    def names(self) -> list[str]:
        return list(self._names)

    @property
    def count(self) -> int:
        return len(self._names)

    def __len__(self):
        return len(self._names)

    def on_switch(self, callback):
        self._listeners.append(callback)

    def add_source(self, name, page):
        self._names.append(name)
        self._pages.append(page)
        if self.active < 0:
            self.active = 0
        self._sync_shortcuts()

    def remove_all(self):
        self._names = []
        self._pages = []
        self.active = -1
        self._sync_shortcuts()

    def page(self, i):
        return self._pages[i]

    @property
    def active_page(self):
        return self._pages[self.active] if self.active >= 0 else None

    def switch_to(self, i) -> bool:
        if not 0 <= i < len(self._names):
            return False
        self.active = i
        for cb in self._listeners:
            cb(i)
        return True

    def _sync_shortcuts(self):
        if self.actions is None:
            return
        self.actions.clear_numeric()
        for n, name in enumerate(self._names[:MAX_NUMERIC], start=1):
            self.actions.bind_numeric(n, name)
