"""Tests for locator parsing and formatting."""

import pytest

from goph.errors import InvalidPort, InvalidURL, ParseError
from goph.locator import Locator, format_locator, parent_locator, parse_locator, parse_port


class TestParseLocator:
    def test_full_locator(self):
        """Scheme, port, type and selector are all picked apart."""
        assert parse_locator("gopher://host:7070/1foo") == Locator("1", "foo", "host", 7070)

    def test_bare_host(self):
        """A host alone is the root menu on port 70."""
        assert parse_locator("host") == Locator("1", "", "host", 70)

    def test_scheme_case_insensitive(self):
        """An upper-case scheme prefix is still recognised."""
        assert parse_locator("GOPHER://host:7070/0x") == Locator("0", "x", "host", 7070)
        assert parse_locator("Gopher://host") == Locator("1", "", "host", 70)

    def test_scheme_is_optional(self):
        """Without the scheme prefix the rest parses the same."""
        assert parse_locator("host/0readme.txt") == Locator("0", "readme.txt", "host", 70)

    def test_trailing_slash_only(self):
        """An empty path after the slash defaults the type."""
        assert parse_locator("gopher://host/") == Locator("1", "", "host", 70)

    def test_type_without_selector(self):
        """A single character after the slash is just the type."""
        assert parse_locator("host:71/0") == Locator("0", "", "host", 71)

    def test_selector_keeps_slashes(self):
        """Everything after the type character is the selector verbatim."""
        loc = parse_locator("gopher://gopher.floodgap.com/1/world/news%20x")
        assert loc.type == "1"
        assert loc.selector == "/world/news%20x"

    def test_unknown_type_passes_through(self):
        """Item types are not interpreted by the parser."""
        assert parse_locator("host/Ifoo.png").type == "I"

    def test_port_bounds(self):
        """Ports 0 and 32767 are both accepted."""
        assert parse_locator("host:0").port == 0
        assert parse_locator("host:32767/1").port == 32767

    @pytest.mark.parametrize("raw", [
        "host:bad/1x",
        "host:32768",
        "host:65535/1",
        "host:/1",
        "host:",
        "host:-1",
        "host:+70",
    ])
    def test_invalid_port(self, raw):
        """Non-numeric, empty or out-of-range ports are rejected."""
        with pytest.raises(InvalidPort):
            parse_locator(raw)

    @pytest.mark.parametrize("raw", ["", "gopher://", ":70/1", "/1foo", "host/1a\r\nb"])
    def test_invalid_url(self, raw):
        """No host, or a line break, is not a locator."""
        with pytest.raises(InvalidURL):
            parse_locator(raw)

    def test_parse_errors_are_value_errors(self):
        """Callers can treat parse failures as ValueError."""
        with pytest.raises(ValueError):
            parse_locator("host:x")
        assert issubclass(InvalidPort, ParseError)


class TestParsePort:
    def test_plain_number(self):
        assert parse_port("70") == 70

    def test_rejects_non_ascii_digits(self):
        """Unicode digits are not port numbers."""
        with pytest.raises(ValueError):
            parse_port("٧٠")


class TestFormatLocator:
    def test_default_port_and_type_omitted(self):
        """Root menu on port 70 is just the host."""
        assert format_locator(Locator("1", "", "host", 70)) == "gopher://host"

    def test_port_kept_when_not_default(self):
        assert format_locator(Locator("1", "foo", "host", 7070)) == "gopher://host:7070/1foo"

    def test_type_kept_with_selector(self):
        """A menu with a selector still needs its type segment."""
        assert format_locator(Locator("1", "/a", "host", 70)) == "gopher://host/1/a"

    def test_str_is_canonical_form(self):
        assert str(Locator("0", "x", "h", 70)) == "gopher://h/0x"

    @pytest.mark.parametrize("raw", [
        "host",
        "host:7070",
        "host/0file.txt",
        "host:1234/1/dir/sub",
        "host/7search\tterms",
        "gopher://host/I",
    ])
    def test_round_trip(self, raw):
        """Formatting then parsing gives back the same locator."""
        loc = parse_locator(raw)
        assert parse_locator(format_locator(loc)) == loc


class TestParentLocator:
    def test_strips_last_segment(self):
        parent = parent_locator(Locator("0", "/docs/readme.txt", "host", 70))
        assert parent == Locator("1", "/docs", "host", 70)

    def test_trailing_slash_ignored(self):
        assert parent_locator(Locator("1", "/a/b/", "h", 70)).selector == "/a"

    def test_top_level_goes_to_root(self):
        """A selector without slashes, or a single segment, goes to the root menu."""
        assert parent_locator(Locator("1", "about", "h", 70)).selector == ""
        assert parent_locator(Locator("1", "/about", "h", 70)).selector == ""
