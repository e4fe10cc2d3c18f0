"""
Menu model and the two line handlers that fill it from the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union, overload

from .constants import NULL_FIELD, TYPE_INFO, TYPE_MENU
from .errors import InvalidLinePort, LineError, MissingField
from .events import publish_bad_line
from .lines import LineHandler
from .locator import Locator, parse_port


@dataclass(frozen=True)
class Entry:
    type: str
    name: str
    selector: str
    host: str
    port: int

    @property
    def selectable(self) -> bool:
        return self.type != TYPE_INFO

    def locator(self) -> Locator:
        return Locator(type=self.type, selector=self.selector, host=self.host, port=self.port)


def info_entry(text: str) -> Entry:
    return Entry(type=TYPE_INFO, name=text, selector=NULL_FIELD, host=NULL_FIELD, port=0)


class Menu:
    """Ordered, append-only list of entries; only a suffix can be removed."""

    def __init__(self):
        self._entries: List[Entry] = []

    def append(self, entry: Entry):
        self._entries.append(entry)

    def truncate(self, start: int):
        """Drop every entry at index >= start."""
        if start < 0:
            raise ValueError(f"negative truncate index: {start}")
        del self._entries[start:]

    def clear(self):
        self.truncate(0)

    def __len__(self) -> int:
        return len(self._entries)

    @overload
    def __getitem__(self, index: int) -> Entry: ...

    @overload
    def __getitem__(self, index: slice) -> List[Entry]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._entries[index]

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self)} entries)"


def parse_menu_line(line: str) -> Entry:
    """
    ``<type><name>\\t<selector>\\t<host>\\t<port>``. Fields past the fourth
    are ignored. Raises LineError.
    """
    if not line:
        raise MissingField("empty menu line", line)
    fields = line[1:].split("\t")
    if len(fields) < 4:
        raise MissingField(f"expected 4 fields, got {len(fields)}", line)
    name, selector, host, port_str = fields[:4]
    try:
        port = parse_port(port_str)
    except ValueError as e:
        raise InvalidLinePort(str(e), line) from e
    return Entry(type=line[0], name=name, selector=selector, host=host, port=port)


class MenuLineHandler:
    """Parses each line as a menu item; bad lines are reported and skipped."""

    def __init__(self, menu: Menu, verbose: bool = False):
        self.menu = menu
        self.verbose = verbose
        self.skipped = 0

    def __call__(self, line: str):
        try:
            entry = parse_menu_line(line)
        except LineError as e:
            self.skipped += 1
            if self.verbose:
                print(f"[Goph] skipping menu line {line!r}: {e}")
            publish_bad_line(line, e)
            return
        self.menu.append(entry)


class TextLineHandler:
    """
    Keeps each line as an informational entry, first character included.
    Anything from the first TAB on is dropped.
    """

    def __init__(self, menu: Menu):
        self.menu = menu

    def __call__(self, line: str):
        self.menu.append(info_entry(line.split("\t", 1)[0]))


def handler_for(doc_type: str, menu: Menu, verbose: bool = False) -> LineHandler:
    if doc_type == TYPE_MENU:
        return MenuLineHandler(menu, verbose=verbose)
    return TextLineHandler(menu)


__all__ = [
    "Entry",
    "Menu",
    "info_entry",
    "parse_menu_line",
    "MenuLineHandler",
    "TextLineHandler",
    "handler_for",
]
