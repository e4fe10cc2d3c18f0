"""Shared fixtures: a local server, a fake transport and a bus recorder."""

import random
from contextlib import contextmanager

import pytest
from pubsub import pub

from goph.events import TOPIC_BAD_LINE, TOPIC_LINE_TOO_LONG, TOPIC_MENU, TOPIC_TITLE
from goph.locator import format_locator
from localgopher import start_local_gopher


class Published:
    """Collects everything the core puts on the message bus."""

    def __init__(self):
        self.titles = []
        self.menus = []
        self.too_long = []
        self.bad_lines = []
        pub.subscribe(self.on_title, TOPIC_TITLE)
        pub.subscribe(self.on_menu, TOPIC_MENU)
        pub.subscribe(self.on_line_too_long, TOPIC_LINE_TOO_LONG)
        pub.subscribe(self.on_bad_line, TOPIC_BAD_LINE)

    def close(self):
        pub.unsubscribe(self.on_title, TOPIC_TITLE)
        pub.unsubscribe(self.on_menu, TOPIC_MENU)
        pub.unsubscribe(self.on_line_too_long, TOPIC_LINE_TOO_LONG)
        pub.unsubscribe(self.on_bad_line, TOPIC_BAD_LINE)

    def on_title(self, title):
        self.titles.append(title)

    def on_menu(self, menu):
        self.menus.append(list(menu))

    def on_line_too_long(self, line):
        self.too_long.append(line)

    def on_bad_line(self, line, error):
        self.bad_lines.append((line, error))


class FakeOpener:
    """
    Stands in for transport.open_response. Responses are keyed by canonical
    locator text; a response is a list of chunks, optionally followed by an
    exception to raise mid-stream (or instead of connecting).
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self.closed = 0

    @contextmanager
    def __call__(self, locator):
        self.calls.append(locator)
        response = self.responses[format_locator(locator)]
        if isinstance(response, Exception):
            raise response

        def stream():
            for chunk in response:
                if isinstance(chunk, Exception):
                    raise chunk
                yield chunk

        try:
            yield stream()
        finally:
            self.closed += 1


@pytest.fixture
def published():
    recorder = Published()
    yield recorder
    recorder.close()


@pytest.fixture
def fake_opener():
    return FakeOpener()


@pytest.fixture
def gopher_server():
    """Factory for local servers on 127.0.0.1, by default on an OS-assigned port."""
    servers = []

    def make(responses=None, root_dir=None, low_port=False):
        """
        ``low_port`` binds below 32768 so the port also fits in a locator;
        OS-assigned ports are usually above that.
        """
        if not low_port:
            server = start_local_gopher(root_dir, host="127.0.0.1", port=0, responses=responses)
        else:
            for port in random.sample(range(20000, 32000), 50):
                try:
                    server = start_local_gopher(root_dir, host="127.0.0.1", port=port, responses=responses)
                    break
                except OSError:
                    continue
            else:
                pytest.skip("no free port below 32768")
        servers.append(server)
        return server

    yield make
    for server in servers:
        server.shutdown()
        server.server_close()
