"""
Small Gopher server for local content and for exercising the client.

Selectors are answered from a table of canned raw responses first, then
from a directory tree of gophermaps and text files.
"""

from __future__ import annotations

import os
import socketserver
import threading
from typing import Dict, List, Optional

CRLF = "\r\n"
DEFAULT_MAP_NAMES = ("gophermap", ".gophermap")


class LocalGopherServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True

    def __init__(
        self,
        host: str,
        port: int,
        root_dir: Optional[str] = None,
        responses: Optional[Dict[str, bytes]] = None,
        verbose: bool = False,
    ):
        self.root_dir = os.path.abspath(root_dir) if root_dir else None
        self.responses: Dict[str, bytes] = dict(responses or {})
        self.verbose = verbose
        self.requests: List[bytes] = []
        self._requests_lock = threading.Lock()
        super().__init__((host, port), GopherRequestHandler)

    @property
    def port(self) -> int:
        return self.server_address[1]

    def record_request(self, raw: bytes):
        with self._requests_lock:
            self.requests.append(raw)


class GopherRequestHandler(socketserver.BaseRequestHandler):
    def handle(self):
        server: LocalGopherServer = self.server  # type: ignore[assignment]
        raw = self._read_request()
        server.record_request(raw)
        selector = raw.decode("utf-8", errors="replace").split("\n", 1)[0].rstrip("\r")
        if server.verbose:
            print(f"[LocalGopher] {self.client_address[0]} -> {selector!r}")
        try:
            self.request.sendall(self._dispatch(server, selector))
        except (BrokenPipeError, ConnectionResetError):
            pass

    def _read_request(self) -> bytes:
        chunks = []
        self.request.settimeout(10)
        while True:
            data = self.request.recv(1024)
            if not data:
                break
            chunks.append(data)
            if b"\n" in data:
                break
        return b"".join(chunks)

    def _dispatch(self, server: LocalGopherServer, selector: str) -> bytes:
        if selector in server.responses:
            return server.responses[selector]
        if server.root_dir is None:
            return _error_menu(f"Selector not found: {selector or '/'}")

        path_part = selector.split("\t", 1)[0]
        rel_path = path_part.lstrip("/")
        fs_path = os.path.normpath(os.path.join(server.root_dir, rel_path))
        if os.path.commonpath([fs_path, server.root_dir]) != server.root_dir:
            return _error_menu(f"Selector outside root: {path_part}")

        if os.path.isdir(fs_path):
            return _serve_menu(fs_path)
        if os.path.isfile(fs_path):
            return _serve_text_file(fs_path)
        return _error_menu(f"Selector not found: {path_part or '/'}")


def _serve_menu(directory: str) -> bytes:
    map_path = _find_gophermap(directory)
    if not map_path:
        return _error_menu(f"No gophermap in {os.path.basename(directory) or '/'}")
    try:
        with open(map_path, "r", encoding="utf-8") as fh:
            lines = [line.rstrip("\r\n") for line in fh]
    except OSError as exc:
        return _error_menu(f"Failed to read menu: {exc}")

    if not lines or lines[-1] != ".":
        lines.append(".")
    return (CRLF.join(lines) + CRLF).encode("utf-8")


def _serve_text_file(file_path: str) -> bytes:
    try:
        with open(file_path, "r", encoding="utf-8") as fh:
            content = fh.read()
    except OSError as exc:
        return _error_menu(f"Failed to read file: {exc}")

    body = content.replace("\r\n", "\n").replace("\r", "\n").rstrip("\n")
    lines = [".." if line == "." else line for line in body.split("\n")]
    return (CRLF.join(lines) + CRLF + "." + CRLF).encode("utf-8")


def _error_menu(message: str) -> bytes:
    lines = [f"3{message}\terror\tlocalhost\t0", "."]
    return (CRLF.join(lines) + CRLF).encode("utf-8")


def _find_gophermap(directory: str) -> Optional[str]:
    for name in DEFAULT_MAP_NAMES:
        candidate = os.path.join(directory, name)
        if os.path.isfile(candidate):
            return candidate
    return None


def start_local_gopher(
    root_dir: Optional[str] = None,
    host: str = "0.0.0.0",
    port: int = 7070,
    responses: Optional[Dict[str, bytes]] = None,
    verbose: bool = False,
) -> LocalGopherServer:
    server = LocalGopherServer(host, port, root_dir=root_dir, responses=responses, verbose=verbose)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server


__all__ = ["LocalGopherServer", "start_local_gopher"]
