"""
Exception hierarchy shared by the locator parser, transport and line handlers.
"""

from __future__ import annotations

from typing import Optional


class GophError(Exception):
    """Base class for every recoverable goph failure."""


# ---------- Locator text ----------

class ParseError(GophError, ValueError):
    pass


class InvalidURL(ParseError):
    pass


class InvalidPort(ParseError):
    pass


# ---------- Network ----------

class TransportError(GophError):
    def __init__(self, message: str, host: str = "", port: int = 0,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.host = host
        self.port = port
        self.cause = cause


class ResolutionFailed(TransportError):
    pass


class ConnectFailed(TransportError):
    pass


class SendFailed(TransportError):
    pass


class ReceiveFailed(TransportError):
    pass


# ---------- Single menu line ----------

class LineError(GophError, ValueError):
    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


class MissingField(LineError):
    pass


class InvalidLinePort(LineError):
    pass


__all__ = [
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
