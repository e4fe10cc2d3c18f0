"""
Navigation controller: locator -> transport -> line handler -> menu,
then history and title.
"""

from __future__ import annotations

from typing import Callable, ContextManager, Iterator, Optional

from .constants import TYPE_MENU, TYPE_SEARCH
from .errors import GophError
from .events import publish_menu, publish_title
from .history import History
from .lines import classify
from .locator import Locator, format_locator, parent_locator, parse_locator
from .menu import Menu, handler_for
from .transport import open_response

DEFAULT_TITLE = "goph"

Opener = Callable[[Locator], ContextManager[Iterator[bytes]]]


class Navigator:
    """
    Owns the displayed Menu and the History. One navigation at a time;
    every call blocks until the response is read or fails.
    """

    def __init__(self, opener: Opener = open_response, verbose: bool = False):
        self.opener = opener
        self.verbose = verbose
        self.menu = Menu()
        self.history = History()
        self.title = DEFAULT_TITLE
        self.location: Optional[Locator] = None

    # ---------- Commands ----------

    def navigate(self, locator: Locator, add_to_history: bool = True) -> str:
        """
        Replace the menu with the document at ``locator`` and return the new
        title. On failure the error propagates, the menu is left as far as
        it got, and neither title nor history changes.
        """
        self.menu.clear()
        handler = handler_for(locator.type, self.menu, verbose=self.verbose)
        if self.verbose:
            print(f"[Goph] fetching {format_locator(locator)}")
        try:
            with self.opener(locator) as stream:
                complete = classify(stream, handler)
        except GophError as e:
            if self.verbose:
                print(f"[Goph] {format_locator(locator)} failed after {len(self.menu)} lines: {e}")
            raise
        finally:
            publish_menu(self.menu)

        if self.verbose and not complete:
            print(f"[Goph] {format_locator(locator)} closed without end marker")

        self.location = locator
        self.title = format_locator(locator)
        if add_to_history:
            self.history.record(locator)
        publish_title(self.title)
        return self.title

    def open(self, raw: str) -> str:
        return self.navigate(parse_locator(raw), add_to_history=True)

    def select(self, index: int) -> Optional[str]:
        """Follow menu entry ``index``; informational or missing entries do nothing."""
        if not 0 <= index < len(self.menu):
            return None
        entry = self.menu[index]
        if not entry.selectable:
            return None
        return self.navigate(entry.locator(), add_to_history=True)

    def search(self, index: int, query: str) -> Optional[str]:
        """Run ``query`` against the type-7 entry at ``index``; results are a menu."""
        if not 0 <= index < len(self.menu):
            return None
        entry = self.menu[index]
        if entry.type != TYPE_SEARCH:
            return None
        selector = f"{entry.selector}\t{query}" if query else entry.selector
        target = Locator(type=TYPE_MENU, selector=selector, host=entry.host, port=entry.port)
        return self.navigate(target, add_to_history=True)

    def step(self, delta: int) -> Optional[str]:
        """
        Back ``delta`` entries in history (negative: forward). A failed
        fetch puts the history position back where it was.
        """
        previous = self.history.pos
        locator = self.history.step(delta)
        if locator is None:
            return None
        try:
            return self.navigate(locator, add_to_history=False)
        except GophError:
            self.history.pos = previous
            raise

    def back(self) -> Optional[str]:
        return self.step(1)

    def forward(self) -> Optional[str]:
        return self.step(-1)

    def up(self) -> Optional[str]:
        if self.location is None:
            return None
        return self.navigate(parent_locator(self.location), add_to_history=True)


__all__ = ["Navigator", "DEFAULT_TITLE"]
