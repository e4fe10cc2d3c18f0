"""
Protocol constants.
"""

SCHEME = "gopher://"
CRLF = "\r\n"

DEFAULT_PORT = 70
MAX_PORT = 32767  # signed 16-bit, matches what servers in the wild advertise

TYPE_MENU = "1"
TYPE_TEXT = "0"
TYPE_SEARCH = "7"
TYPE_INFO = "i"

DEFAULT_TYPE = TYPE_MENU

# Longest logical line payload; longer lines are split.
MAX_LINE_BYTES = 511

RECV_SIZE = 4096

SENTINEL = "."

# Placeholder fields carried by informational entries.
NULL_FIELD = "null"
