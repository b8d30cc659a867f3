"""Cell-grid rendering surface.

Renderers draw glyphs into an in-memory grid with ``set_cell``; ``sync``
flushes the whole frame as one ANSI write. Each cell's style is an SGR prefix
from the active ``UITheme``.
"""

from __future__ import annotations

import os
import unicodedata
from collections.abc import Callable

from .terminal import TerminalController

RESET = "\033[0m"
FALLBACK_SIZE = (80, 24)
# Marks the right half of a wide glyph; never written on its own.
WIDE_CONTINUATION = ""


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def text_display_width(text: str) -> int:
    return sum(char_display_width(ch) for ch in text)


def printable_glyph(ch: str) -> str:
    """Replace control characters so they cannot corrupt the frame."""
    if ch.isprintable():
        return ch
    return "?"


class Screen:
    """In-memory cell grid flushed to a terminal file descriptor."""

    def __init__(
        self,
        stdout_fd: int,
        terminal: TerminalController | None = None,
        *,
        size_fn: Callable[[], tuple[int, int]] | None = None,
        write: Callable[[int, bytes], object] = os.write,
    ) -> None:
        self.stdout_fd = stdout_fd
        self.terminal = terminal
        self._size_fn = size_fn
        self._write = write
        self._cursor: tuple[int, int] | None = None
        self._force_full = True
        self.width, self.height = self.size()
        self._cells = self._blank_grid()

    def size(self) -> tuple[int, int]:
        """Return ``(columns, rows)`` of the terminal."""
        if self._size_fn is not None:
            return self._size_fn()
        try:
            term = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return FALLBACK_SIZE
        return max(1, term.columns), max(1, term.lines)

    def _blank_grid(self) -> list[list[tuple[str, str]]]:
        return [[(" ", "") for _ in range(self.width)] for _ in range(self.height)]

    def clear(self) -> None:
        """Blank every cell and resize the grid to the current terminal size."""
        size = self.size()
        if size != (self.width, self.height):
            self._force_full = True
        self.width, self.height = size
        self._cells = self._blank_grid()

    def set_cell(self, x: int, y: int, glyph: str, style: str = "") -> None:
        """Store ``glyph`` at ``(x, y)``; out-of-bounds writes are dropped."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._cells[y][x] = (glyph, style)

    def draw_text(self, text: str, x: int, y: int, style: str = "") -> int:
        """Draw ``text`` from column ``x`` and return the column after it."""
        for ch in text:
            width = char_display_width(ch)
            if width == 0:
                # Attach combining marks to the glyph on their left.
                if 0 < x <= self.width and 0 <= y < self.height:
                    glyph, cell_style = self._cells[y][x - 1]
                    self._cells[y][x - 1] = (glyph + ch, cell_style)
                continue
            if width == 2 and x + 1 >= self.width:
                # A wide glyph that cannot fit in the last column is cut.
                self.set_cell(x, y, " ", style)
                x += 1
                continue
            self.set_cell(x, y, printable_glyph(ch), style)
            if width == 2:
                self.set_cell(x + 1, y, WIDE_CONTINUATION, style)
            x += width
        return x

    def fill_row(self, y: int, style: str) -> None:
        for x in range(self.width):
            self.set_cell(x, y, " ", style)

    def show_cursor_at(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def hide_cursor(self) -> None:
        self._cursor = None

    def row_text(self, y: int) -> str:
        """Return plain text of row ``y`` without styling."""
        return "".join(glyph for glyph, _style in self._cells[y])

    def cell(self, x: int, y: int) -> tuple[str, str]:
        return self._cells[y][x]

    @property
    def cursor(self) -> tuple[int, int] | None:
        return self._cursor

    def request_full_redraw(self) -> None:
        self._force_full = True

    def sync(self) -> None:
        """Write the current frame to the terminal."""
        out: list[str] = []
        if self._force_full:
            out.append("\033[H\033[2J")
            self._force_full = False
        for y, row in enumerate(self._cells):
            out.append(f"\033[{y + 1};1H{RESET}")
            current_style = ""
            for glyph, style in row:
                if glyph == WIDE_CONTINUATION:
                    continue
                if style != current_style:
                    out.append(RESET + style)
                    current_style = style
                out.append(glyph)
            out.append(RESET)
        if self._cursor is None:
            out.append("\033[?25l")
        else:
            x, y = self._cursor
            out.append(f"\033[{y + 1};{x + 1}H\033[?25h")
        self._write(self.stdout_fd, "".join(out).encode("utf-8", errors="replace"))

    def release(self) -> None:
        """Clear the frame before the terminal leaves the alternate screen."""
        if self.terminal is None or not self.terminal.active:
            return
        self._write(self.stdout_fd, f"{RESET}\033[H\033[2J".encode("ascii"))


__all__ = [
    "FALLBACK_SIZE",
    "RESET",
    "Screen",
    "char_display_width",
    "printable_glyph",
    "text_display_width",
]
