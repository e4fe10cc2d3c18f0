"""
goph: a Gopher client core (locators, transport, menu parsing, history).
"""

from .errors import (
    ConnectFailed,
    GophError,
    InvalidLinePort,
    InvalidPort,
    InvalidURL,
    LineError,
    MissingField,
    ParseError,
    ReceiveFailed,
    ResolutionFailed,
    SendFailed,
    TransportError,
)
from .history import History
from .locator import Locator, format_locator, parent_locator, parse_locator
from .menu import Entry, Menu
from .navigator import Navigator

__all__ = [
    "Locator",
    "parse_locator",
    "format_locator",
    "parent_locator",
    "Entry",
    "Menu",
    "History",
    "Navigator",
    "GophError",
    "ParseError",
    "InvalidURL",
    "InvalidPort",
    "TransportError",
    "ResolutionFailed",
    "ConnectFailed",
    "SendFailed",
    "ReceiveFailed",
    "LineError",
    "MissingField",
    "InvalidLinePort",
]
