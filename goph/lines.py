"""
Turns a raw response byte stream into logical lines and feeds them to a
per-line handler.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator

from .constants import MAX_LINE_BYTES, SENTINEL
from .events import publish_line_too_long

LineHandler = Callable[[str], None]

_TERMINATOR = re.compile(rb"[\r\n]")


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def split_lines(chunks: Iterable[bytes], max_line: int = MAX_LINE_BYTES) -> Iterator[str]:
    """
    Either CR or LF ends a line; CR LF counts once, even when the pair is
    split across two chunks. Payload past ``max_line`` bytes is cut off into
    a line of its own and reported as too long. A trailing unterminated
    line is flushed when the stream ends.
    """
    acc = bytearray()
    swallow_lf = False

    for chunk in chunks:
        start = 0
        if swallow_lf and chunk:
            if chunk[:1] == b"\n":
                start = 1
            swallow_lf = False

        while start < len(chunk):
            m = _TERMINATOR.search(chunk, start)
            end = m.start() if m else len(chunk)
            acc += chunk[start:end]
            while len(acc) > max_line:
                head = _decode(bytes(acc[:max_line]))
                del acc[:max_line]
                publish_line_too_long(head)
                yield head
            if m is None:
                break

            yield _decode(bytes(acc))
            acc.clear()
            start = m.end()
            if m.group() == b"\r":
                if start < len(chunk):
                    if chunk[start:start + 1] == b"\n":
                        start += 1
                else:
                    swallow_lf = True

    if acc:
        yield _decode(bytes(acc))


def classify(chunks: Iterable[bytes], handler: LineHandler,
             max_line: int = MAX_LINE_BYTES) -> bool:
    """
    Hand every line to ``handler`` until the ``.`` sentinel or end of stream.
    Returns True if the sentinel was seen. Receive errors raised by
    ``chunks`` propagate; lines handled before them stay handled.
    """
    for line in split_lines(chunks, max_line):
        if line == SENTINEL:
            return True
        handler(line)
    return False


__all__ = ["LineHandler", "split_lines", "classify"]
