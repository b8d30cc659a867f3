"""Interactive session setup and main event loop.

Opens the tty, enters raw mode, and pumps events into the ``Explorer`` until
it returns an ``ExitAction``. The terminal is released exactly once on every
exit path, including fatal errors raised from inside the loop.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from .explorer import QUICK_SELECT_AMOUNT, ExitAction, Explorer
from .input import EventSource, ResizeEvent
from .render import render_frame, usable_height
from .screen import Screen
from .terminal import TerminalController, open_tty
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


def run_main_loop(
    explorer: Explorer,
    screen: Screen,
    events: EventSource,
    theme: UITheme,
) -> ExitAction:
    """Render, wait for one event, handle it, and repeat until an exit is requested."""
    render_frame(explorer.state, screen, theme)
    screen.sync()
    while True:
        event = events.next_event()
        if isinstance(event, ResizeEvent):
            logger.debug("resize to %dx%d", event.columns, event.lines)
            explorer.handle_resize()
            screen.request_full_redraw()
        else:
            action = explorer.handle_key(event.key)
            if action is not None:
                return action
        render_frame(explorer.state, screen, theme)
        screen.sync()


def run_picker(
    directory: Path,
    *,
    theme: UITheme = DEFAULT_THEME,
    quick_step: int = QUICK_SELECT_AMOUNT,
    copy_to_clipboard: Callable[[str], None] | None = None,
) -> ExitAction:
    """Run an interactive session rooted at ``directory``.

    ``FatalIOError`` subclasses propagate after the terminal is restored.
    """
    tty_fd = open_tty()
    try:
        terminal = TerminalController(stdin_fd=tty_fd, stdout_fd=tty_fd)
        screen = Screen(tty_fd, terminal)
        events = EventSource(tty_fd, screen.size)
        with terminal.raw_mode():
            try:
                explorer = Explorer(
                    directory,
                    usable_height=lambda: usable_height(screen.size()[1]),
                    copy_to_clipboard=copy_to_clipboard,
                    quick_step=quick_step,
                )
                return run_main_loop(explorer, screen, events, theme)
            finally:
                screen.release()
    finally:
        os.close(tty_fd)


__all__ = ["run_main_loop", "run_picker"]
