"""Fatal error types raised by pathpick collaborators.

Every error here ends the session: the terminal is released and the CLI
exits with a non-zero status. Cancelling a filter is a mode change, not an error.
"""

from __future__ import annotations


class FatalIOError(Exception):
    """Base class for unrecoverable I/O failures."""


class DirectoryReadError(FatalIOError):
    """Current directory could not be listed."""


class ClipboardError(FatalIOError):
    """Selected path could not be copied to the system clipboard."""


class TerminalInitError(FatalIOError):
    """Terminal could not be switched into interactive mode."""


__all__ = [
    "FatalIOError",
    "DirectoryReadError",
    "ClipboardError",
    "TerminalInitError",
]
