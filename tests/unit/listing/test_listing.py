"""Tests for directory scanning, filtering, and entry ordering."""

from __future__ import annotations

import os
import random
import sys
import tempfile
import unittest
from pathlib import Path

from pathpick.errors import DirectoryReadError
from pathpick.listing import (
    DOT_ENTRIES,
    Entry,
    build_entries,
    join_entry,
    list_directory,
    match_span,
)


class ListDirectoryTests(unittest.TestCase):
    def test_lists_files_and_directories_with_flags(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "docs").mkdir()
            (root / "notes.md").write_text("x", encoding="utf-8")
            (root / ".hidden").write_text("x", encoding="utf-8")

            children = sorted(list_directory(root))

        self.assertEqual(children, [(".hidden", False), ("docs", True), ("notes.md", False)])

    @unittest.skipUnless(sys.platform.startswith("linux"), "needs a filesystem that accepts non-UTF-8 names")
    def test_undecodable_name_is_listed_and_joined_back_to_its_bytes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(os.fsencode(tmp), b"bad\xff.txt"), "wb"):
                pass

            children = list_directory(Path(tmp))
            entries = build_entries(children)
            path = join_entry(Path(tmp), entries[2])

            self.assertEqual(os.fsencode(entries[2].text), b"bad\xff.txt")
            self.assertEqual(os.fsencode(path), os.path.join(os.fsencode(tmp), b"bad\xff.txt"))
            self.assertTrue(os.path.exists(path))

    @unittest.skipUnless(hasattr(os, "symlink"), "symlinks unsupported")
    def test_symlink_to_directory_is_listed_as_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "real").mkdir()
            (root / "link").symlink_to(root / "real", target_is_directory=True)

            children = dict(list_directory(root))

        self.assertTrue(children["real"])
        self.assertFalse(children["link"])

    def test_missing_directory_raises_directory_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DirectoryReadError) as ctx:
                list_directory(Path(tmp) / "gone")

        self.assertIn("Failed to read directory", str(ctx.exception))


class BuildEntriesTests(unittest.TestCase):
    def test_scenario_order_directories_first_then_byte_order(self) -> None:
        entries = build_entries([("b.txt", False), ("a.txt", False), ("Z", True)])

        self.assertEqual([e.text for e in entries], [".", "..", "Z/", "a.txt", "b.txt"])
        self.assertEqual(entries[2], Entry(text="Z/", is_dir=True))

    def test_uppercase_sorts_before_lowercase(self) -> None:
        entries = build_entries([("beta", False), ("Alpha", False), ("alpha", False)])

        self.assertEqual([e.text for e in entries[2:]], ["Alpha", "alpha", "beta"])

    @unittest.skipUnless(os.name == "posix", "surrogate-escaped names are POSIX-only")
    def test_undecodable_names_sort_in_byte_order(self) -> None:
        children = [(os.fsdecode("é.txt".encode("utf-8")), False), (os.fsdecode(b"\x80.txt"), False)]

        entries = build_entries(children)

        self.assertEqual([os.fsencode(e.text) for e in entries[2:]], [b"\x80.txt", b"\xc3\xa9.txt"])

    def test_filter_matches_substring_of_decorated_name(self) -> None:
        children = [("src", True), ("setup.py", False), ("README", False)]

        self.assertEqual([e.text for e in build_entries(children, "s")], [".", "..", "src/", "setup.py"])
        self.assertEqual([e.text for e in build_entries(children, "/")], [".", "..", "src/"])
        self.assertEqual([e.text for e in build_entries(children, "readme")], [".", ".."])

    def test_dot_entries_survive_any_filter(self) -> None:
        entries = build_entries([("a", False)], "no-such-text")

        self.assertEqual(tuple(entries), DOT_ENTRIES)

    def test_random_sets_are_partitioned_and_ordered(self) -> None:
        rng = random.Random(7)
        alphabet = "aAbB.z_9é"
        for _ in range(50):
            names = {"".join(rng.choice(alphabet) for _ in range(rng.randint(1, 5))) for _ in range(15)}
            children = [(name, rng.random() < 0.4) for name in names]
            filter_text = rng.choice(["", "a", "b", ".", "/", "é"])

            entries = build_entries(children, filter_text)
            body = entries[2:]

            self.assertEqual(tuple(entries[:2]), DOT_ENTRIES)
            expected = {
                (name + "/" if is_dir else name)
                for name, is_dir in children
                if filter_text in (name + "/" if is_dir else name)
            }
            self.assertEqual({e.text for e in body}, expected)
            kinds = [e.is_dir for e in body]
            self.assertEqual(kinds, sorted(kinds, reverse=True))
            for group in (True, False):
                texts = [e.text for e in body if e.is_dir is group]
                self.assertEqual(texts, sorted(texts))


class HelperTests(unittest.TestCase):
    def test_match_span_finds_first_occurrence(self) -> None:
        self.assertEqual(match_span("banana", "an"), (1, 3))
        self.assertIsNone(match_span("banana", "x"))
        self.assertIsNone(match_span("banana", ""))

    def test_join_entry_normalizes_dot_entries_and_trailing_marker(self) -> None:
        base = Path("/srv/data")

        self.assertEqual(join_entry(base, Entry(".", True)), base)
        self.assertEqual(join_entry(base, Entry("..", True)), Path("/srv"))
        self.assertEqual(join_entry(base, Entry("raw/", True)), Path("/srv/data/raw"))
        self.assertEqual(join_entry(Path("/"), Entry("..", True)), Path("/"))


if __name__ == "__main__":
    unittest.main()
