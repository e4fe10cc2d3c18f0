"""
Gopher locators: parsing user-supplied text into (type, selector, host, port)
and rendering them back into their canonical form.
"""

from __future__ import annotations

from dataclasses import dataclass

from .constants import DEFAULT_PORT, DEFAULT_TYPE, MAX_PORT, SCHEME, TYPE_MENU
from .errors import InvalidPort, InvalidURL


@dataclass(frozen=True)
class Locator:
    type: str
    selector: str
    host: str
    port: int = DEFAULT_PORT

    def __str__(self) -> str:
        return format_locator(self)


def parse_port(text: str) -> int:
    """
    Parse a decimal port in [0, MAX_PORT]. Signs, blanks and non-ASCII
    digits are rejected. Raises ValueError.
    """
    if not text or not text.isascii() or not text.isdigit():
        raise ValueError(f"port is not a number: {text!r}")
    port = int(text)
    if port > MAX_PORT:
        raise ValueError(f"port out of range: {port}")
    return port


def parse_locator(raw: str) -> Locator:
    """
    Parse ``[gopher://]host[:port][/[type]selector]``.

    The selector is taken verbatim (slashes included, nothing unescaped).
    Missing port means 70, missing type means a menu.
    """
    if "\r" in raw or "\n" in raw:
        raise InvalidURL(f"line break in locator: {raw!r}")

    body = raw[len(SCHEME):] if raw[:len(SCHEME)].lower() == SCHEME else raw

    end = 0
    while end < len(body) and body[end] not in ":/":
        end += 1
    host = body[:end]
    if not host:
        raise InvalidURL(f"no host in locator: {raw!r}")
    rest = body[end:]

    port = DEFAULT_PORT
    if rest.startswith(":"):
        port_str, slash, tail = rest[1:].partition("/")
        try:
            port = parse_port(port_str)
        except ValueError as e:
            raise InvalidPort(f"invalid port in {raw!r}: {e}") from e
        rest = slash + tail

    path = rest[1:]  # drop the "/" (or nothing)
    if not path:
        return Locator(type=DEFAULT_TYPE, selector="", host=host, port=port)
    return Locator(type=path[0], selector=path[1:], host=host, port=port)


def format_locator(locator: Locator) -> str:
    out = SCHEME + locator.host
    if locator.port != DEFAULT_PORT:
        out += f":{locator.port}"
    if locator.type != TYPE_MENU or locator.selector:
        out += f"/{locator.type}{locator.selector}"
    return out


def parent_locator(locator: Locator) -> Locator:
    """Menu one level up: the selector minus its last ``/segment``."""
    selector = locator.selector
    if "/" in selector:
        selector = selector.rstrip("/").rsplit("/", 1)[0]
    else:
        selector = ""
    return Locator(type=TYPE_MENU, selector=selector, host=locator.host, port=locator.port)


__all__ = ["Locator", "parse_locator", "parse_port", "format_locator", "parent_locator"]
