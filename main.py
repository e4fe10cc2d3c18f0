#!/usr/bin/env python3
# main.py
"""
Line-mode terminal front end for the goph core.

ENV (all optional):
  GOPH_HOME          -> start locator (default: gopher://gopher.floodgap.com/1/)
  GOPH_PAGE_LINES    -> menu lines per screen (default: 20)
  GOPH_VERBOSE       -> "1" prints fetch progress and parse diagnostics
  LOCAL_GOPHER_ROOT  -> directory served by the built-in server (default: server)
  LOCAL_GOPHER_HOST  -> bind address for the built-in server (default: 0.0.0.0)
  LOCAL_GOPHER_PORT  -> port for the built-in server (default: 7070)
"""

import os
import re
import sys
from typing import List, Optional

from pubsub import pub

from goph import GophError, Menu, Navigator
from goph.constants import TYPE_SEARCH
from goph.events import TOPIC_BAD_LINE, TOPIC_LINE_TOO_LONG, TOPIC_MENU, TOPIC_TITLE
from localgopher import start_local_gopher

RE_URL_CMD = re.compile(r"^\s*u\s+(\S+)\s*$", re.IGNORECASE)
RE_SCROLL_CMD = re.compile(r"^\s*([jk])(?:\s+(\d+))?\s*$", re.IGNORECASE)
RE_SEARCH_CMD = re.compile(r"^\s*s(?:\s+(.*))?$", re.IGNORECASE)
RE_INDEX_CMD = re.compile(r"^\s*(\d+)\s*$")

DEFAULT_HOME = "gopher://gopher.floodgap.com/1/"
DEFAULT_PAGE_LINES = 20

HELP_TEXT = (
    "goph: Gopher browser\n"
    "\n"
    "Commands:\n"
    "  u <URL>    open a gopher URL (e.g., gopher://gopher.floodgap.com/1/world)\n"
    "  <N>        open item N of the current menu\n"
    "  b / f      back / forward in history\n"
    "  ^          go up a directory\n"
    "  n / p      next / previous page\n"
    "  j / k [N]  scroll down / up N lines (default 1)\n"
    "  s <terms>  run a search on the selected search item\n"
    "  x          show the current gopher URL\n"
    "  h / help   show this help\n"
    "  q          quit\n"
    "\n"
    "'u local' or 'u local/<path>' opens the built-in server."
)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


class Screen:
    """
    What the surface shows: title, menu and the first visible line.
    Kept current through the core's view topics.
    """

    def __init__(self, page_lines: int = DEFAULT_PAGE_LINES):
        self.page_lines = max(1, page_lines)
        self.title = ""
        self.menu: Optional[Menu] = None
        self.top = 0
        pub.subscribe(self._on_title, TOPIC_TITLE)
        pub.subscribe(self._on_menu, TOPIC_MENU)

    def close(self):
        pub.unsubscribe(self._on_title, TOPIC_TITLE)
        pub.unsubscribe(self._on_menu, TOPIC_MENU)

    def _on_title(self, title):
        self.title = title

    def _on_menu(self, menu):
        self.menu = menu
        self.top = 0

    def scroll_to(self, line: int) -> bool:
        """Clamp into [0, len-1]; returns whether the view moved."""
        old = self.top
        length = len(self.menu) if self.menu is not None else 0
        self.top = max(0, line)
        if length and self.top >= length:
            self.top = length - 1
        elif not length:
            self.top = 0
        return self.top != old

    def scroll(self, lines: int) -> bool:
        return self.scroll_to(self.top + lines)

    def page(self, pages: int) -> bool:
        return self.scroll(self.page_lines * pages)

    def render(self) -> str:
        if self.menu is None:
            return "Nothing open yet. Try: u gopher://gopher.floodgap.com/"
        header = f"[{self.title}]" if self.title else "[goph]"
        if not len(self.menu):
            return f"{header}\n(Empty)"

        end = min(self.top + self.page_lines, len(self.menu))
        lines = [header]
        for i in range(self.top, end):
            e = self.menu[i]
            if e.selectable:
                lines.append(f"{i}) [{e.type}] {e.name}")
            else:
                lines.append(f"    {e.name}")
        lines.append(f"[Lines {self.top + 1}-{end} of {len(self.menu)}]")
        return "\n".join(lines)


class Session:
    def __init__(self, navigator: Optional[Navigator] = None, page_lines: int = DEFAULT_PAGE_LINES):
        self.nav = navigator or Navigator()
        self.screen = Screen(page_lines)
        self.pending_search: Optional[int] = None

    def close(self):
        self.screen.close()

    def _run(self, action, *args) -> str:
        try:
            result = action(*args)
        except GophError as e:
            partial = self.screen.render() if self.screen.menu else ""
            return f"Error: {e}" + (f"\n{partial}" if partial else "")
        if result is None:
            return "Nothing to do."
        self.pending_search = None
        return self.screen.render()

    def open_url(self, url_str: str) -> str:
        return self._run(self.nav.open, url_str)

    def select_index(self, idx: int) -> str:
        menu = self.nav.menu
        if idx < 0 or idx >= len(menu):
            return "Invalid selection."
        entry = menu[idx]
        if not entry.selectable:
            return "Not a link."
        if entry.type == TYPE_SEARCH:
            self.pending_search = idx
            return f"Search: {entry.name}\nSend: s <terms>"
        return self._run(self.nav.select, idx)

    def search(self, terms: str) -> str:
        if self.pending_search is None:
            return "No search pending. Select a type-7 item first, then use 's <terms>'."
        if not terms.strip():
            return "Send: s <terms>"
        return self._run(self.nav.search, self.pending_search, terms.strip())

    def back(self) -> str:
        return self._run(self.nav.back)

    def forward(self) -> str:
        return self._run(self.nav.forward)

    def up(self) -> str:
        return self._run(self.nav.up)

    def current_url(self) -> str:
        if self.nav.location is None:
            return "Nothing open yet."
        return f"Current URL:\n{self.nav.title}"

    def next_page(self) -> str:
        if not self.screen.page(1):
            return "End of page."
        return self.screen.render()

    def prev_page(self) -> str:
        if not self.screen.page(-1):
            return "Already at start."
        return self.screen.render()

    def scroll(self, lines: int) -> str:
        self.screen.scroll(lines)
        return self.screen.render()


def _local_gopher_base_url() -> str:
    host = os.getenv("LOCAL_GOPHER_HOST") or "localhost"
    if host == "0.0.0.0":
        host = "localhost"
    port = _env_int("LOCAL_GOPHER_PORT", 7070)
    return f"gopher://{host}:{port}/1"


def _resolve_local_gopher_alias(raw: str) -> Optional[str]:
    token = raw.strip()
    lowered = token.lower()
    if lowered == "local":
        selector = ""
    elif lowered.startswith("local/"):
        selector = token[6:]
    else:
        return None
    selector = selector.lstrip("/")
    return _local_gopher_base_url() + ("/" + selector if selector else "")


def _maybe_start_local_gopher(verbose: bool = False):
    root = os.getenv("LOCAL_GOPHER_ROOT", "server")
    if not root or not os.path.isdir(root):
        if os.getenv("LOCAL_GOPHER_ROOT"):
            print(f"[LocalGopher] Root path not found: {root}")
        return None
    host = os.getenv("LOCAL_GOPHER_HOST", "0.0.0.0")
    port = _env_int("LOCAL_GOPHER_PORT", 7070)
    try:
        server = start_local_gopher(root, host=host, port=port, verbose=verbose)
        print(f"[LocalGopher] Serving {root} on gopher://{host}:{port}/")
        return server
    except OSError as exc:
        print(f"[LocalGopher] Failed to start server: {exc}")
        return None


class App:
    def __init__(self, session: Session):
        self.session = session

    def handle(self, text: str) -> Optional[str]:
        """Run one command line; None means quit."""
        msg = text.strip()
        normalized = msg.lower()
        if normalized in ("q", "quit"):
            return None
        if not msg or normalized in ("h", "help"):
            return HELP_TEXT

        m_url = RE_URL_CMD.match(msg)
        if m_url:
            url = m_url.group(1)
            return self.session.open_url(_resolve_local_gopher_alias(url) or url)

        m_idx = RE_INDEX_CMD.match(msg)
        if m_idx:
            return self.session.select_index(int(m_idx.group(1)))

        m_scroll = RE_SCROLL_CMD.match(msg)
        if m_scroll:
            count = int(m_scroll.group(2) or 1)
            return self.session.scroll(count if m_scroll.group(1).lower() == "j" else -count)

        m_search = RE_SEARCH_CMD.match(msg)
        if m_search:
            return self.session.search(m_search.group(1) or "")

        commands = {
            "b": self.session.back,
            "f": self.session.forward,
            "^": self.session.up,
            "n": self.session.next_page,
            "p": self.session.prev_page,
            "x": self.session.current_url,
        }
        if normalized in commands:
            return commands[normalized]()
        return HELP_TEXT


class DiagnosticPrinter:
    def __init__(self):
        pub.subscribe(self.on_line_too_long, TOPIC_LINE_TOO_LONG)
        pub.subscribe(self.on_bad_line, TOPIC_BAD_LINE)

    def close(self):
        pub.unsubscribe(self.on_line_too_long, TOPIC_LINE_TOO_LONG)
        pub.unsubscribe(self.on_bad_line, TOPIC_BAD_LINE)

    def on_line_too_long(self, line):
        print(f"[Goph] line too long, split after {len(line)} characters")

    def on_bad_line(self, line, error):
        print(f"[Goph] bad menu line {line!r}: {error}")


def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    verbose = os.getenv("GOPH_VERBOSE", "") == "1"
    printer = DiagnosticPrinter() if verbose else None

    local_gopher = _maybe_start_local_gopher(verbose)
    session = Session(Navigator(verbose=verbose), page_lines=_env_int("GOPH_PAGE_LINES", DEFAULT_PAGE_LINES))
    app = App(session)

    home = argv[0] if argv else os.getenv("GOPH_HOME", DEFAULT_HOME)
    print(session.open_url(_resolve_local_gopher_alias(home) or home))

    try:
        while True:
            try:
                line = input("goph> ")
            except EOFError:
                break
            out = app.handle(line)
            if out is None:
                break
            print(out)
    except KeyboardInterrupt:
        print("Exiting.")
    finally:
        session.close()
        if printer:
            printer.close()
        if local_gopher:
            local_gopher.shutdown()
            local_gopher.server_close()


if __name__ == "__main__":
    main()
