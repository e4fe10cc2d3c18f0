"""
Visited-locator history with browser-style branching.
"""

from __future__ import annotations

from typing import Optional

from .locator import Locator, format_locator
from .menu import Entry, Menu


class History(Menu):
    """
    A Menu of visited locators plus ``pos``, the index of the one on screen.

    ``pos < len(self)`` whenever the history is non-empty, else ``pos == 0``.
    """

    def __init__(self):
        super().__init__()
        self.pos = 0

    def truncate(self, start: int):
        super().truncate(start)
        if not len(self):
            self.pos = 0
        elif self.pos >= len(self):
            self.pos = len(self) - 1

    def record(self, locator: Locator):
        """Forget anything ahead of ``pos``, then append and move onto it."""
        if len(self):
            self.truncate(self.pos + 1)
        self.append(Entry(
            type=locator.type,
            name=format_locator(locator),
            selector=locator.selector,
            host=locator.host,
            port=locator.port,
        ))
        self.pos = len(self) - 1

    def step(self, delta: int) -> Optional[Locator]:
        """
        Move ``delta`` entries back (negative: forward). Returns the locator
        now current, or None when there is nowhere to go.
        """
        if delta >= 0 and self.pos < delta:
            return None
        target = self.pos - delta
        if not 0 <= target < len(self):
            return None
        self.pos = target
        return self[target].locator()

    def current(self) -> Optional[Locator]:
        if not len(self):
            return None
        return self[self.pos].locator()


__all__ = ["History"]
