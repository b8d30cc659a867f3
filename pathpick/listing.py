"""Directory scanning, substring filtering, and entry ordering.

Every recompute re-reads the directory from disk; nothing here is cached.
The two synthetic ``.``/``..`` rows always lead the listing and never filter out.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from .errors import DirectoryReadError

logger = logging.getLogger(__name__)

DIR_MARKER = "/"


@dataclass(frozen=True)
class Entry:
    """One listed row: display text plus directory flag."""

    text: str
    is_dir: bool


DOT_ENTRIES: tuple[Entry, ...] = (
    Entry(text=".", is_dir=True),
    Entry(text="..", is_dir=True),
)
SYNTHETIC_ENTRY_COUNT = len(DOT_ENTRIES)


def list_directory(directory: Path) -> list[tuple[str, bool]]:
    """Return ``(name, is_dir)`` pairs for each child of ``directory``.

    Symlinks are not followed, so a link to a directory lists as a file.
    Raises ``DirectoryReadError`` when the directory cannot be scanned.
    """
    children: list[tuple[str, bool]] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                except OSError:
                    is_dir = False
                children.append((child.name, is_dir))
    except OSError as exc:
        logger.error("failed to read directory %s: %s", directory, exc)
        raise DirectoryReadError(f"Failed to read directory: {exc}") from exc
    return children


def display_text(name: str, is_dir: bool) -> str:
    return name + DIR_MARKER if is_dir else name


def entry_sort_key(entry: Entry) -> tuple[int, bytes]:
    """Directories first, then byte order of the display text as stored on disk."""
    return (0 if entry.is_dir else 1, os.fsencode(entry.text))


def build_entries(children: Iterable[tuple[str, bool]], filter_text: str = "") -> list[Entry]:
    """Decorate, filter, and sort raw children, then prepend ``.`` and ``..``.

    Filtering is a case-sensitive substring test against the decorated display
    text, so a filter of ``"/"`` keeps only directories.
    """
    entries = [
        Entry(text=text, is_dir=is_dir)
        for text, is_dir in ((display_text(name, is_dir), is_dir) for name, is_dir in children)
        if filter_text in text
    ]
    entries.sort(key=entry_sort_key)
    return [*DOT_ENTRIES, *entries]


def match_span(text: str, filter_text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first occurrence of ``filter_text`` in ``text``."""
    if not filter_text:
        return None
    start = text.find(filter_text)
    if start < 0:
        return None
    return start, start + len(filter_text)


def join_entry(directory: Path, entry: Entry) -> Path:
    """Join ``entry`` onto ``directory`` and collapse ``.``/``..`` lexically."""
    return Path(os.path.normpath(os.path.join(directory, entry.text)))


__all__ = [
    "DIR_MARKER",
    "DOT_ENTRIES",
    "SYNTHETIC_ENTRY_COUNT",
    "Entry",
    "build_entries",
    "display_text",
    "entry_sort_key",
    "join_entry",
    "list_directory",
    "match_span",
]
