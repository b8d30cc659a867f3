"""Terminal control helpers for the TUI session.

Owns the controlling-tty handle, raw-mode lifecycle, and alternate-screen
switching. The UI talks to ``/dev/tty`` so stdout stays free for the
selected path when the picker runs inside a command substitution.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

from .errors import TerminalInitError

logger = logging.getLogger(__name__)

TTY_PATH = "/dev/tty"


def open_tty(path: str = TTY_PATH) -> int:
    """Open the controlling terminal read/write and return its descriptor."""
    try:
        return os.open(path, os.O_RDWR | os.O_NOCTTY)
    except OSError as exc:
        raise TerminalInitError(f"Failed to open terminal {path}: {exc}") from exc


class TerminalController:
    """Manage raw-mode and alternate-screen transitions."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalInitError(f"Failed to initialize terminal: {exc}") from exc
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")
        self._active = True
        logger.debug("terminal raw mode enabled")

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state; safe to call more than once."""
        if not self._active:
            return
        self._active = False
        # Reset attributes, show cursor, and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[0m\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        logger.debug("terminal raw mode disabled")

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TTY_PATH", "TerminalController", "open_tty"]
