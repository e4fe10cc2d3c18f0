"""
Message-bus topics the core publishes on.

Presentation layers subscribe to the ``view`` topics; the ``diagnostic``
topics carry non-fatal parse problems.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pubsub import pub

if TYPE_CHECKING:
    from .errors import LineError
    from .menu import Menu

TOPIC_TITLE = "goph.view.title"
TOPIC_MENU = "goph.view.menu"
TOPIC_LINE_TOO_LONG = "goph.diagnostic.line_too_long"
TOPIC_BAD_LINE = "goph.diagnostic.bad_line"


def publish_title(title: str):
    pub.sendMessage(TOPIC_TITLE, title=title)


def publish_menu(menu: "Menu"):
    pub.sendMessage(TOPIC_MENU, menu=menu)


def publish_line_too_long(line: str):
    pub.sendMessage(TOPIC_LINE_TOO_LONG, line=line)


def publish_bad_line(line: str, error: "LineError"):
    pub.sendMessage(TOPIC_BAD_LINE, line=line, error=error)


__all__ = [
    "TOPIC_TITLE",
    "TOPIC_MENU",
    "TOPIC_LINE_TOO_LONG",
    "TOPIC_BAD_LINE",
    "publish_title",
    "publish_menu",
    "publish_line_too_long",
    "publish_bad_line",
]
