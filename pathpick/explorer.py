"""Navigation, filter, and mode state machine for the directory browser.

``Explorer`` owns an ``ExplorerState`` and mutates it in response to key
tokens from ``pathpick.input``. After every handled key the listing is
recomputed from disk. Handlers never end the process themselves: quitting
and confirming return an ``ExitAction`` that the runtime loop acts on once.
Fatal I/O failures propagate as ``FatalIOError`` subclasses.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .key_registry import KeyComboBinding, KeyComboRegistry
from .listing import SYNTHETIC_ENTRY_COUNT, build_entries, join_entry, list_directory
from .state import (
    UNSELECTED,
    Browsing,
    EditingFilter,
    ExplorerState,
    FilterApplied,
    HelpOverlay,
)

logger = logging.getLogger(__name__)

QUICK_SELECT_AMOUNT = 5
ENTER_KEYS = ("ENTER_CR", "ENTER_LF")


@dataclass(frozen=True)
class ExitAction:
    """Request to end the session.

    ``output`` is written to stdout after the terminal has been released.
    """

    status: int = 0
    output: str | None = None


def scroll_window_start(selected_idx: int, window_start: int, usable_height: int) -> int:
    """Return the first visible row index keeping ``selected_idx`` on screen.

    The window only moves when the selection leaves it. An unselected sentinel
    pulls the window back to the top without going negative.
    """
    if selected_idx >= window_start + usable_height:
        return selected_idx - usable_height + 1
    if selected_idx < window_start:
        return max(0, selected_idx)
    return window_start


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


class Explorer:
    """Interactive directory browser state machine."""

    def __init__(
        self,
        directory: Path,
        *,
        usable_height: Callable[[], int],
        list_children: Callable[[Path], list[tuple[str, bool]]] = list_directory,
        copy_to_clipboard: Callable[[str], None] | None = None,
        quick_step: int = QUICK_SELECT_AMOUNT,
    ) -> None:
        self.state = ExplorerState(current_dir=directory)
        self._usable_height = usable_height
        self._list_children = list_children
        self._copy_to_clipboard = copy_to_clipboard
        self._quick_step = max(1, int(quick_step))

        self._normal_keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(("CTRL_C",), self.quit),
            KeyComboBinding(("UP",), lambda: self.move_selection(-1)),
            KeyComboBinding(("DOWN",), lambda: self.move_selection(1)),
            KeyComboBinding(("SHIFT_UP",), lambda: self.move_selection(-self._quick_step)),
            KeyComboBinding(("SHIFT_DOWN",), lambda: self.move_selection(self._quick_step)),
            KeyComboBinding(("t",), self.select_first),
            KeyComboBinding(("b",), self.select_last),
            KeyComboBinding((" ",), self.enter_selected),
            KeyComboBinding(("BACKSPACE",), self.enter_parent),
            KeyComboBinding(ENTER_KEYS, self.confirm_selection),
            KeyComboBinding(("ESC",), self.cancel_filter),
            KeyComboBinding(("/",), self.begin_filter_entry),
            KeyComboBinding(("?",), self.open_help),
        )
        self._filter_keys = KeyComboRegistry().register_bindings(
            KeyComboBinding(("CTRL_C",), self.quit),
            KeyComboBinding(("ESC",), self.cancel_filter),
            KeyComboBinding(ENTER_KEYS, self.apply_filter),
            KeyComboBinding(("LEFT",), self.state.filter.move_cursor_left),
            KeyComboBinding(("RIGHT",), self.state.filter.move_cursor_right),
            KeyComboBinding(("UP", "DOWN", "SHIFT_UP", "SHIFT_DOWN"), lambda: None),
            KeyComboBinding(("BACKSPACE",), self.state.filter.delete_character),
        )

        self.recompute()

    # -- event entry points -------------------------------------------------

    def handle_key(self, key: str) -> ExitAction | None:
        """Route one key token to the handler for the current mode."""
        mode = self.state.mode
        if isinstance(mode, HelpOverlay):
            action = self.quit() if key == "CTRL_C" else self.close_help()
        elif isinstance(mode, EditingFilter):
            if self._filter_keys.handles(key):
                action = self._filter_keys.dispatch(key)
            else:
                action = None
                if is_text_key(key):
                    self.state.filter.insert_character(key)
        else:
            action = self._normal_keys.dispatch(key)

        if action is None:
            self.recompute()
        return action

    def handle_resize(self) -> None:
        self.recompute()

    # -- recompute ----------------------------------------------------------

    def usable_height(self) -> int:
        return max(1, self._usable_height())

    def recompute(self) -> None:
        """Re-list, re-filter, and re-sort entries, then re-clamp selection and window."""
        state = self.state
        children = self._list_children(state.current_dir)
        state.entries = build_entries(children, state.filter.text)
        if state.selected_idx >= len(state.entries):
            state.selected_idx = len(state.entries) - 1
        state.window_start = scroll_window_start(
            state.selected_idx,
            state.window_start,
            self.usable_height(),
        )

    # -- selection ----------------------------------------------------------

    def select(self, idx: int) -> bool:
        """Select ``idx`` when in range, remembering its text; otherwise ignore."""
        state = self.state
        if not 0 <= idx < len(state.entries):
            return False
        state.selected_idx = idx
        state.filter.prev_selection_text = state.entries[idx].text
        return True

    def select_by_text(self, text: str) -> None:
        for idx, entry in enumerate(self.state.entries):
            if entry.text == text:
                self.select(idx)
                return
        self.select(0)

    def move_selection(self, delta: int) -> None:
        self.select(self.state.selected_idx + delta)

    def select_first(self) -> None:
        self.select(0)

    def select_last(self) -> None:
        self.select(len(self.state.entries) - 1)

    # -- navigation ---------------------------------------------------------

    def navigate_to(self, directory: Path) -> None:
        """Change directory, ending any filter session and selecting the first row."""
        state = self.state
        logger.debug("navigate %s -> %s", state.current_dir, directory)
        state.current_dir = directory
        state.filter.clear()
        state.mode = Browsing()
        state.selected_idx = 0
        self.recompute()
        self.select(0)

    def enter_selected(self) -> None:
        """Open the selected entry when it is a directory."""
        entry = self.state.selected_entry
        if entry is None or not entry.is_dir:
            return
        self.navigate_to(join_entry(self.state.current_dir, entry))

    def enter_parent(self) -> None:
        self.navigate_to(self.state.current_dir.parent)

    # -- filter session -----------------------------------------------------

    def begin_filter_entry(self) -> None:
        state = self.state
        entry = state.selected_entry
        if entry is not None:
            state.filter.prev_selection_text = entry.text
        state.filter.move_cursor_to_end()
        state.mode = EditingFilter()
        state.selected_idx = UNSELECTED

    def cancel_filter(self) -> None:
        """Drop the filter and restore the selection held before filtering."""
        state = self.state
        if state.filter.is_active:
            logger.debug("filter %r cancelled", state.filter.text)
        state.filter.clear()
        state.mode = Browsing()
        self.recompute()
        self.select_by_text(state.filter.prev_selection_text)

    def apply_filter(self) -> None:
        state = self.state
        if not state.filter.is_active:
            self.cancel_filter()
            return
        logger.debug("filter %r applied", state.filter.text)
        state.mode = FilterApplied()
        self.recompute()
        # Skip past "." and ".." to the first real match.
        if len(state.entries) > SYNTHETIC_ENTRY_COUNT:
            self.select(SYNTHETIC_ENTRY_COUNT)
        else:
            self.select(0)

    # -- help overlay -------------------------------------------------------

    def open_help(self) -> None:
        mode = self.state.mode
        if isinstance(mode, HelpOverlay):
            return
        self.state.mode = HelpOverlay(return_to=mode)

    def close_help(self) -> None:
        mode = self.state.mode
        if isinstance(mode, HelpOverlay):
            self.state.mode = mode.return_to

    # -- exits --------------------------------------------------------------

    def quit(self) -> ExitAction:
        return ExitAction(status=0)

    def selected_path(self) -> Path | None:
        entry = self.state.selected_entry
        if entry is None:
            return None
        return join_entry(self.state.current_dir, entry)

    def confirm_selection(self) -> ExitAction | None:
        """Copy the selected absolute path to the clipboard and request exit.

        A clipboard failure raises ``ClipboardError``; the path is then never
        printed.
        """
        path = self.selected_path()
        if path is None:
            return None
        text = str(path)
        if self._copy_to_clipboard is not None:
            self._copy_to_clipboard(text)
        logger.info("selected %s", text)
        return ExitAction(status=0, output=text)


__all__ = [
    "ENTER_KEYS",
    "QUICK_SELECT_AMOUNT",
    "ExitAction",
    "Explorer",
    "is_text_key",
    "scroll_window_start",
]
