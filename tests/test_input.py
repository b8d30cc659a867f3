"""Regression tests for raw-key decoding and event polling.

Covers ESC timing, arrow/shift sequences, control keys, and UTF-8 input.
These tests protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from pathpick import input as input_mod


def _read_all(data: bytes, count: int) -> list[str]:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, data)
        return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
    finally:
        os.close(read_fd)
        os.close(write_fd)


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = _read_all(b"\x1b", 1)
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(_read_all(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows_are_recognized(self) -> None:
        self.assertEqual(_read_all(b"\x1bOA\x1bOB", 2), ["UP", "DOWN"])

    def test_shift_arrows_are_recognized(self) -> None:
        self.assertEqual(_read_all(b"\x1b[1;2A\x1b[1;2B", 2), ["SHIFT_UP", "SHIFT_DOWN"])

    def test_other_modifiers_fall_back_to_plain_arrow(self) -> None:
        self.assertEqual(_read_all(b"\x1b[1;5B", 1), ["DOWN"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(_read_all(b"\x1ba", 2), ["ESC", "a"])

    def test_control_keys_map_to_tokens(self) -> None:
        keys = _read_all(b"\x03\x7f\x08\r\n", 5)

        self.assertEqual(keys, ["CTRL_C", "BACKSPACE", "BACKSPACE", "ENTER_CR", "ENTER_LF"])

    def test_multibyte_utf8_character_is_one_key(self) -> None:
        self.assertEqual(_read_all("é日".encode("utf-8"), 2), ["é", "日"])

    def test_invalid_lead_byte_does_not_swallow_following_keys(self) -> None:
        self.assertEqual(_read_all(b"\xffab", 3), ["\ufffd", "a", "b"])

    def test_truncated_sequence_leaves_next_key_intact(self) -> None:
        self.assertEqual(_read_all(b"\xe6a/", 3), ["\ufffd", "a", "/"])

    def test_timeout_without_input_returns_empty_string(self) -> None:
        self.assertEqual(_read_all(b"", 1), [""])


class EventSourceTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def test_key_event_is_returned_for_input(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"/")
            source = input_mod.EventSource(read_fd, lambda: (80, 24), poll_ms=10)
            event = source.next_event()
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(event, input_mod.KeyEvent("/"))

    def test_size_change_between_polls_yields_resize_event(self) -> None:
        sizes = iter([(80, 24), (80, 24), (100, 30)])
        read_fd, write_fd = os.pipe()
        try:
            source = input_mod.EventSource(read_fd, lambda: next(sizes), poll_ms=5)
            event = source.next_event()
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(event, input_mod.ResizeEvent(columns=100, lines=30))


if __name__ == "__main__":
    unittest.main()
