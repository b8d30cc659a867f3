"""Explorer state container and UI mode variants.

The UI mode is one tagged union instead of three loosely coupled flags.
``HelpOverlay`` embeds the mode it returns to, so closing the overlay never
needs to reconstruct where the user came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Union

from .filter import FilterState
from .listing import Entry

UNSELECTED = -1


@dataclass(frozen=True)
class Browsing:
    """Plain directory listing; status bar shows the current directory."""


@dataclass(frozen=True)
class EditingFilter:
    """Filter query is being typed; no row is highlighted."""


@dataclass(frozen=True)
class FilterApplied:
    """Navigation with a committed filter still narrowing the listing."""


@dataclass(frozen=True)
class HelpOverlay:
    """Full-screen keybind reference over whichever mode opened it."""

    return_to: Union[Browsing, EditingFilter, FilterApplied]


UIMode = Union[Browsing, EditingFilter, FilterApplied, HelpOverlay]


class DisplayMode(Enum):
    NORMAL = "normal"
    KEYBIND_HELP = "keybind_help"


class InputMode(Enum):
    NORMAL = "normal"
    FILTER_ENTRY = "filter_entry"
    KEYBIND_HELP = "keybind_help"


class BarMode(Enum):
    SHOW_CURRENT_DIR = "show_current_dir"
    FILTER_ENTRY = "filter_entry"
    FILTER_APPLIED = "filter_applied"


def _base_mode(mode: UIMode) -> Browsing | EditingFilter | FilterApplied:
    while isinstance(mode, HelpOverlay):
        mode = mode.return_to
    return mode


@dataclass
class ExplorerState:
    current_dir: Path
    entries: list[Entry] = field(default_factory=list)
    selected_idx: int = 0
    window_start: int = 0
    mode: UIMode = field(default_factory=Browsing)
    filter: FilterState = field(default_factory=FilterState)

    @property
    def has_selection(self) -> bool:
        return 0 <= self.selected_idx < len(self.entries)

    @property
    def selected_entry(self) -> Entry | None:
        if not self.has_selection:
            return None
        return self.entries[self.selected_idx]

    @property
    def display_mode(self) -> DisplayMode:
        if isinstance(self.mode, HelpOverlay):
            return DisplayMode.KEYBIND_HELP
        return DisplayMode.NORMAL

    @property
    def input_mode(self) -> InputMode:
        if isinstance(self.mode, HelpOverlay):
            return InputMode.KEYBIND_HELP
        if isinstance(self.mode, EditingFilter):
            return InputMode.FILTER_ENTRY
        return InputMode.NORMAL

    @property
    def bar_mode(self) -> BarMode:
        """Status-bar mode; unaffected by the help overlay."""
        base = _base_mode(self.mode)
        if isinstance(base, EditingFilter):
            return BarMode.FILTER_ENTRY
        if isinstance(base, FilterApplied):
            return BarMode.FILTER_APPLIED
        return BarMode.SHOW_CURRENT_DIR


__all__ = [
    "UNSELECTED",
    "BarMode",
    "Browsing",
    "DisplayMode",
    "EditingFilter",
    "ExplorerState",
    "FilterApplied",
    "HelpOverlay",
    "InputMode",
    "UIMode",
]
