"""Low-level terminal input decoding and event polling.

Reads raw bytes from the tty and translates them into normalized key tokens.
``EventSource`` turns those tokens, plus terminal size changes noticed
between polls, into the blocking event stream the runtime loop consumes.
"""

from __future__ import annotations

import os
import select
from collections.abc import Callable
from dataclasses import dataclass

ESC_SEQUENCE_TIMEOUT_MS = 25
RESIZE_POLL_MS = 100
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


@dataclass(frozen=True)
class KeyEvent:
    key: str


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    lines: int


Event = KeyEvent | ResizeEvent


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF8:
        return 1
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``lead``."""
    data = lead
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        if nxt[0] & 0xC0 != 0x80:
            # Not a continuation byte: it starts the next key.
            _PENDING_BYTES.append(nxt)
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input or on EOF.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_char(fd, ch)
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    token = _CSI_FINAL_TOKENS.get(seq)
    if token is not None:
        return token
    if seq == b"1":
        # Modified arrows: ESC [ 1 ; <mod> <final>
        seq2 = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq2 != b";":
            return "ESC"
        modifier = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if modifier is None or final is None:
            return "ESC"
        base = _CSI_FINAL_TOKENS.get(final)
        if base is None:
            return "ESC"
        if modifier == b"2":
            return f"SHIFT_{base}"
        return base
    if seq == b"3":
        # Delete: ESC [ 3 ~
        if _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS) == b"~":
            return "DELETE"
        return "ESC"
    return "ESC"


class EventSource:
    """Blocking source of key and resize events for the main loop."""

    def __init__(
        self,
        fd: int,
        size_fn: Callable[[], tuple[int, int]],
        *,
        poll_ms: int = RESIZE_POLL_MS,
    ) -> None:
        self.fd = fd
        self._size_fn = size_fn
        self._poll_ms = poll_ms
        self._last_size = size_fn()

    def next_event(self) -> Event:
        """Block until a key arrives or the terminal size changes."""
        while True:
            key = read_key(self.fd, timeout_ms=self._poll_ms)
            if key:
                return KeyEvent(key)
            size = self._size_fn()
            if size != self._last_size:
                self._last_size = size
                return ResizeEvent(columns=size[0], lines=size[1])


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "RESIZE_POLL_MS",
    "_PENDING_BYTES",
    "Event",
    "EventSource",
    "KeyEvent",
    "ResizeEvent",
    "read_key",
]
