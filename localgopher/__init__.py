"""
Local Gopher server for demos and tests.
"""

from .server import LocalGopherServer, start_local_gopher

__all__ = ["LocalGopherServer", "start_local_gopher"]
