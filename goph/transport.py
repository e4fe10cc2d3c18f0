"""
Socket side of a Gopher exchange: resolve, connect, send the selector,
stream the response back.

There are no timeouts anywhere in here; a silent server blocks the caller.
"""

from __future__ import annotations

import socket
from contextlib import contextmanager
from typing import Iterator, List

from .constants import CRLF, RECV_SIZE
from .errors import ConnectFailed, ReceiveFailed, ResolutionFailed, SendFailed
from .locator import Locator


def resolve(host: str, port: int) -> List[tuple]:
    # Either family; the resolver's ordering is kept as-is
    try:
        addresses = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        # UnicodeError: idna refuses empty or over-long labels
        raise ResolutionFailed(f"cannot resolve {host}:{port}: {e}", host, port, e) from e
    if not addresses:
        raise ResolutionFailed(f"no addresses for {host}:{port}", host, port)
    return addresses


def connect(host: str, port: int) -> socket.socket:
    """
    Connect to the first resolved address that accepts. If none does, the
    error from the last attempt is the one reported.
    """
    err: OSError = OSError("no address tried")
    for family, kind, proto, _, sockaddr in resolve(host, port):
        try:
            sock = socket.socket(family, kind, proto)
        except OSError as e:
            err = e
            continue
        try:
            sock.connect(sockaddr)
        except OSError as e:
            sock.close()
            err = e
            continue
        return sock
    raise ConnectFailed(f"cannot connect to {host}:{port}: {err}", host, port, err) from err


def send_selector(sock: socket.socket, selector: str):
    request = (selector + CRLF).encode("utf-8", errors="replace")
    try:
        sent = sock.send(request)
    except OSError as e:
        raise SendFailed(f"send failed: {e}", cause=e) from e
    if sent != len(request):
        raise SendFailed(f"short write: {sent} of {len(request)} bytes")


def receive(sock: socket.socket, bufsize: int = RECV_SIZE) -> Iterator[bytes]:
    """Yield raw chunks until the peer closes."""
    while True:
        try:
            data = sock.recv(bufsize)
        except OSError as e:
            raise ReceiveFailed(f"receive failed: {e}", cause=e) from e
        if not data:
            return
        yield data


@contextmanager
def open_response(locator: Locator) -> Iterator[Iterator[bytes]]:
    """
    Send the request for ``locator`` and hand back the response stream.
    The socket is closed when the block exits, however it exits.
    """
    sock = connect(locator.host, locator.port)
    with sock:
        send_selector(sock, locator.selector)
        yield receive(sock)


def fetch(locator: Locator) -> bytes:
    """Whole raw response in one go."""
    with open_response(locator) as stream:
        return b"".join(stream)


__all__ = ["resolve", "connect", "send_selector", "receive", "open_response", "fetch"]
