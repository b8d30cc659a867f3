"""Filter-query editing state.

The cursor counts characters (code points), not bytes, so multi-byte glyphs
move and delete as single units.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FilterState:
    text: str = ""
    cursor: int = 0
    prev_selection_text: str = ""

    @property
    def is_active(self) -> bool:
        return self.text != ""

    def move_cursor_left(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1

    def move_cursor_right(self) -> None:
        if self.cursor < len(self.text):
            self.cursor += 1

    def move_cursor_to_end(self) -> None:
        self.cursor = len(self.text)

    def insert_character(self, ch: str) -> None:
        """Insert ``ch`` at the cursor and advance past it."""
        self.text = self.text[: self.cursor] + ch + self.text[self.cursor :]
        self.cursor += len(ch)

    def delete_character(self) -> None:
        """Delete the character before the cursor; no-op at position 0."""
        if self.cursor <= 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def clear(self) -> None:
        """Drop query text and cursor, keeping the remembered selection."""
        self.text = ""
        self.cursor = 0


__all__ = ["FilterState"]
