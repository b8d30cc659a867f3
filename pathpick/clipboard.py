"""System clipboard sink built on platform clipboard commands.

Unlike a best-effort copy, a failed copy here is fatal: callers rely on the
path being on the clipboard before it is printed.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from .errors import ClipboardError

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate clipboard commands for the running platform."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> None:
    """Copy ``text`` using the first clipboard command that succeeds.

    Raises ``ClipboardError`` when no command is installed or every
    installed command fails.
    """
    attempted: list[str] = []
    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        attempted.append(command[0])
        try:
            proc = subprocess.run(
                command,
                input=os.fsencode(text),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            logger.warning("clipboard command %s failed to start: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            logger.debug("copied %d characters with %s", len(text), command[0])
            return
        logger.warning("clipboard command %s exited with %d", command[0], proc.returncode)

    if not attempted:
        raise ClipboardError("no clipboard command available")
    raise ClipboardError(f"clipboard command failed ({', '.join(attempted)})")


__all__ = ["clipboard_commands", "copy_text_to_clipboard"]
