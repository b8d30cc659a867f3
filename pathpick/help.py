"""Keybinding reference shown by the full-screen help overlay.

Presentation-only: rows are plain text, styled by the renderer.
"""

from __future__ import annotations

from dataclasses import dataclass

from .screen import text_display_width


@dataclass(frozen=True)
class Keybind:
    key: str
    desc: str


KEYBINDS: tuple[Keybind, ...] = (
    Keybind("Ctrl+C", "Quit"),
    Keybind("?", "Open this help page"),
    Keybind("[Shift] ↑/↓", "Change selection"),
    Keybind("T/B", "Jump to top/bottom"),
    Keybind("Space", "Open selected directory"),
    Keybind("Backspace", "Open parent directory"),
    Keybind("/", "Filter items"),
    Keybind("Enter", "Print selected path and copy to clipboard"),
)

HELP_PAGE_HEADER: tuple[str, ...] = (
    "(Press any key to close.)",
    "",
    "Keybinds:",
    "──────────",
)


def keybind_lines(keybinds: tuple[Keybind, ...] = KEYBINDS) -> list[str]:
    """Return one line per binding with the key column padded to the widest key."""
    pad_to = max((text_display_width(bind.key) for bind in keybinds), default=0)
    lines: list[str] = []
    for bind in keybinds:
        padding = " " * (pad_to - text_display_width(bind.key))
        lines.append(f"{bind.key}{padding}  {bind.desc}")
    return lines


def help_page_lines() -> list[str]:
    return [*HELP_PAGE_HEADER, *keybind_lines()]


__all__ = [
    "HELP_PAGE_HEADER",
    "KEYBINDS",
    "Keybind",
    "help_page_lines",
    "keybind_lines",
]
