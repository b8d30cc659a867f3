"""Frame rendering for the listing, status bar, and keybind overlay.

Rendering is a pure projection of ``ExplorerState`` onto a ``Screen`` cell
grid; nothing here mutates state or touches the filesystem.
"""

from __future__ import annotations

from .help import help_page_lines
from .listing import SYNTHETIC_ENTRY_COUNT, Entry, match_span
from .screen import Screen, text_display_width
from .state import BarMode, ExplorerState, HelpOverlay
from .ui_theme import UITheme

HELP_HINT = " (? for help)"
FILTER_ENTRY_PROMPT = "(Esc/Enter) Enter filter: "
FILTER_APPLIED_PROMPT = "(Esc) Filter: "


def usable_height(screen_rows: int) -> int:
    """Rows available for entries; the last row is the status bar."""
    return max(1, screen_rows - 1)


def render_frame(state: ExplorerState, screen: Screen, theme: UITheme) -> None:
    """Draw the full frame for ``state`` into ``screen`` without syncing."""
    screen.clear()
    screen.hide_cursor()
    if isinstance(state.mode, HelpOverlay):
        render_help_page(screen, theme)
        return
    render_entries(state, screen, theme)
    render_bar(state, screen, theme)


def render_entries(state: ExplorerState, screen: Screen, theme: UITheme) -> None:
    # A single-row terminal only has room for the status bar.
    rows = screen.height - 1
    if rows < 1:
        return
    visible = state.entries[state.window_start : state.window_start + rows]
    for y, entry in enumerate(visible):
        idx = state.window_start + y
        if idx == state.selected_idx:
            screen.draw_text(entry.text, 0, y, theme.entry_selected)
        else:
            _render_unselected_entry(state, screen, theme, entry, idx, y)


def _render_unselected_entry(
    state: ExplorerState,
    screen: Screen,
    theme: UITheme,
    entry: Entry,
    idx: int,
    y: int,
) -> None:
    style = theme.entry_dir if entry.is_dir else theme.entry_file
    span = None
    # "." and ".." are never filtered, so they never carry a match.
    if state.filter.is_active and idx >= SYNTHETIC_ENTRY_COUNT:
        span = match_span(entry.text, state.filter.text)
    if span is None:
        screen.draw_text(entry.text, 0, y, style)
        return
    start, end = span
    x = screen.draw_text(entry.text[:start], 0, y, style)
    x = screen.draw_text(entry.text[start:end], x, y, theme.filter_match)
    screen.draw_text(entry.text[end:], x, y, style)


def render_bar(state: ExplorerState, screen: Screen, theme: UITheme) -> None:
    y = screen.height - 1
    bar_mode = state.bar_mode
    if bar_mode is BarMode.FILTER_ENTRY:
        screen.fill_row(y, theme.bar_filter)
        x = screen.draw_text(FILTER_ENTRY_PROMPT, 0, y, theme.bold + theme.bar_filter)
        screen.draw_text(state.filter.text, x, y, theme.bar_filter)
        cursor_x = x + text_display_width(state.filter.text[: state.filter.cursor])
        screen.show_cursor_at(cursor_x, y)
    elif bar_mode is BarMode.FILTER_APPLIED:
        screen.fill_row(y, theme.bar_filter)
        x = screen.draw_text(FILTER_APPLIED_PROMPT, 0, y, theme.bold + theme.bar_filter)
        screen.draw_text(state.filter.text, x, y, theme.bar_filter)
    else:
        screen.fill_row(y, theme.bar_normal)
        x = screen.draw_text(str(state.current_dir), 0, y, theme.bold + theme.bar_normal)
        screen.draw_text(HELP_HINT, x, y, theme.bar_normal)


def render_help_page(screen: Screen, theme: UITheme) -> None:
    """Draw the full-screen keybind reference."""
    for y, line in enumerate(help_page_lines()):
        screen.draw_text(line, 0, y, theme.help_text)


__all__ = [
    "FILTER_APPLIED_PROMPT",
    "FILTER_ENTRY_PROMPT",
    "HELP_HINT",
    "render_bar",
    "render_entries",
    "render_frame",
    "render_help_page",
    "usable_height",
]
