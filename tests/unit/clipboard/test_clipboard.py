"""Tests for clipboard command selection and failure reporting."""

from __future__ import annotations

import os
import subprocess
import unittest
from unittest import mock

from pathpick import clipboard
from pathpick.errors import ClipboardError


def _completed(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class ClipboardTests(unittest.TestCase):
    def test_linux_candidates_in_preference_order(self) -> None:
        with mock.patch("pathpick.clipboard.sys.platform", "linux"), mock.patch(
            "pathpick.clipboard.os.name", "posix"
        ):
            commands = clipboard.clipboard_commands()

        self.assertEqual([command[0] for command in commands], ["wl-copy", "xclip", "xsel"])

    def test_macos_uses_pbcopy(self) -> None:
        with mock.patch("pathpick.clipboard.sys.platform", "darwin"):
            self.assertEqual(clipboard.clipboard_commands(), [["pbcopy"]])

    def test_first_available_command_receives_text(self) -> None:
        with mock.patch(
            "pathpick.clipboard.clipboard_commands",
            return_value=[["missing"], ["xclip", "-selection", "clipboard"]],
        ), mock.patch(
            "pathpick.clipboard.shutil.which",
            side_effect=lambda name: None if name == "missing" else f"/usr/bin/{name}",
        ), mock.patch("pathpick.clipboard.subprocess.run", return_value=_completed(0)) as run_mock:
            clipboard.copy_text_to_clipboard("/tmp/a.txt")

        run_mock.assert_called_once()
        self.assertEqual(run_mock.call_args.args[0], ["xclip", "-selection", "clipboard"])
        self.assertEqual(run_mock.call_args.kwargs["input"], b"/tmp/a.txt")
        self.assertNotIn("capture_output", run_mock.call_args.kwargs)
        self.assertIs(run_mock.call_args.kwargs["stdout"], subprocess.DEVNULL)
        self.assertIs(run_mock.call_args.kwargs["stderr"], subprocess.DEVNULL)

    def test_undecodable_path_is_sent_as_original_bytes(self) -> None:
        text = os.fsdecode(b"/tmp/bad\xff.txt")
        with mock.patch("pathpick.clipboard.clipboard_commands", return_value=[["wl-copy"]]), mock.patch(
            "pathpick.clipboard.shutil.which", return_value="/usr/bin/wl-copy"
        ), mock.patch("pathpick.clipboard.subprocess.run", return_value=_completed(0)) as run_mock:
            clipboard.copy_text_to_clipboard(text)

        self.assertEqual(run_mock.call_args.kwargs["input"], b"/tmp/bad\xff.txt")
        self.assertNotIn("text", run_mock.call_args.kwargs)

    def test_falls_through_failed_commands(self) -> None:
        with mock.patch(
            "pathpick.clipboard.clipboard_commands",
            return_value=[["wl-copy"], ["xsel", "--clipboard", "--input"]],
        ), mock.patch("pathpick.clipboard.shutil.which", return_value="/usr/bin/tool"), mock.patch(
            "pathpick.clipboard.subprocess.run",
            side_effect=[_completed(1), _completed(0)],
        ) as run_mock:
            clipboard.copy_text_to_clipboard("x")

        self.assertEqual(run_mock.call_count, 2)

    def test_no_available_command_raises(self) -> None:
        with mock.patch("pathpick.clipboard.shutil.which", return_value=None):
            with self.assertRaises(ClipboardError) as ctx:
                clipboard.copy_text_to_clipboard("x")

        self.assertIn("no clipboard command", str(ctx.exception))

    def test_every_command_failing_raises(self) -> None:
        with mock.patch(
            "pathpick.clipboard.clipboard_commands",
            return_value=[["pbcopy"]],
        ), mock.patch("pathpick.clipboard.shutil.which", return_value="/usr/bin/pbcopy"), mock.patch(
            "pathpick.clipboard.subprocess.run",
            side_effect=OSError("exec format error"),
        ):
            with self.assertRaises(ClipboardError) as ctx:
                clipboard.copy_text_to_clipboard("x")

        self.assertIn("pbcopy", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
