"""Tests for ``FileHandle.paste`` and the best-effort tree copy.

Checks copy completeness, destination collisions, partial-failure reports
and the segment-by-segment directory creation helper.
"""

from __future__ import annotations

import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filehandle import DestinationNotDirectoryError, FileHandle, HandleIOError
from filehandle.handle import ensure_directories, paste_tree


def _make_tree(root: Path) -> None:
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_bytes(b"alpha")
    (root / "sub" / "b.txt").write_bytes(b"bravo")
    (root / "sub" / "deeper" / "c.bin").write_bytes(b"\x00\xff")


class PasteFileTests(unittest.TestCase):
    def test_file_paste_writes_bytes_and_overwrites(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source.txt"
            source.write_bytes(b"new content")
            target = root / "target.txt"
            target.write_bytes(b"old content that is longer")
            handle = FileHandle.open(source)

            report = handle.paste(target)

            self.assertEqual(target.read_bytes(), b"new content")
            self.assertTrue(report.ok)
            self.assertEqual(len(report.outcomes), 1)
            self.assertEqual(handle.path, source.as_posix())
            self.assertTrue(source.exists())

    def test_file_paste_into_missing_directory_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "source.txt"
            source.write_bytes(b"x")

            with self.assertRaises(HandleIOError):
                FileHandle.open(source).paste(Path(tmp) / "missing" / "target.txt")


class PasteTreeTests(unittest.TestCase):
    def test_directory_paste_copies_every_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source"
            _make_tree(source)
            destination = root / "out" / "copy"
            handle = FileHandle.open(source)

            report = handle.paste(destination)

            self.assertTrue(report.ok)
            self.assertEqual(report.copied, ["a.txt", "sub/b.txt", "sub/deeper/c.bin"])
            for relative in report.copied:
                self.assertEqual((destination / relative).read_bytes(), (source / relative).read_bytes())
            self.assertFalse((destination / "empty").exists())
            self.assertTrue(handle.is_dir)
            self.assertEqual(handle.path, source.as_posix())

    def test_directory_paste_merges_into_existing_destination(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source"
            _make_tree(source)
            destination = root / "dest"
            (destination / "sub").mkdir(parents=True)
            (destination / "sub" / "b.txt").write_bytes(b"stale")
            (destination / "keep.txt").write_bytes(b"keep")

            FileHandle.open(source).paste(destination)

            self.assertEqual((destination / "sub" / "b.txt").read_bytes(), b"bravo")
            self.assertEqual((destination / "keep.txt").read_bytes(), b"keep")

    def test_destination_file_collision_leaves_file_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source"
            _make_tree(source)
            destination = root / "occupied"
            destination.write_bytes(b"do not touch")

            with self.assertRaises(DestinationNotDirectoryError):
                FileHandle.open(source).paste(destination)

            self.assertEqual(destination.read_bytes(), b"do not touch")

    def test_per_file_failure_does_not_stop_traversal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source"
            _make_tree(source)
            destination = root / "dest"
            real_copyfile = shutil.copyfile

            def flaky_copyfile(src, dst, *args, **kwargs):
                if src.endswith("sub/b.txt"):
                    raise PermissionError(13, "Permission denied", src)
                return real_copyfile(src, dst, *args, **kwargs)

            with mock.patch("filehandle.handle.paste.shutil.copyfile", side_effect=flaky_copyfile):
                with self.assertLogs("filehandle.handle.paste", level="WARNING") as logs:
                    report = FileHandle.open(source).paste(destination)

            self.assertFalse(report.ok)
            self.assertEqual([outcome.relative_path for outcome in report.failed], ["sub/b.txt"])
            self.assertIsInstance(report.failed[0].error, PermissionError)
            self.assertEqual(report.copied, ["a.txt", "sub/deeper/c.bin"])
            self.assertTrue((destination / "sub" / "deeper" / "c.bin").exists())
            self.assertFalse((destination / "sub" / "b.txt").exists())
            self.assertTrue(any("sub/b.txt" in line for line in logs.output))

    def test_intermediate_directory_blocked_by_file_is_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            source = root / "source"
            _make_tree(source)
            destination = root / "dest"
            destination.mkdir()
            (destination / "sub").write_bytes(b"a file where a directory belongs")

            report = FileHandle.open(source).paste(destination)

            self.assertEqual(
                sorted(outcome.relative_path for outcome in report.failed),
                ["sub/b.txt", "sub/deeper/c.bin"],
            )
            self.assertEqual((destination / "a.txt").read_bytes(), b"alpha")

    def test_paste_into_own_subtree_terminates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            source = Path(tmp) / "source"
            _make_tree(source)

            report = FileHandle.open(source).paste(source / "backup")

            self.assertTrue(report.ok)
            self.assertEqual(report.copied, ["a.txt", "sub/b.txt", "sub/deeper/c.bin"])
            self.assertFalse((source / "backup" / "backup").exists())

    def test_paste_tree_accepts_relative_looking_roots(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _make_tree(root / "src" / "src")

            report = paste_tree((root / "src").as_posix(), (root / "dst").as_posix())

            self.assertIn("src/sub/b.txt", report.copied)
            self.assertTrue((root / "dst" / "src" / "sub" / "b.txt").exists())


class EnsureDirectoriesTests(unittest.TestCase):
    def test_creates_missing_segments_and_is_idempotent(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp).as_posix() + "/x/y/z"

            ensure_directories(target)
            ensure_directories(target)

            self.assertTrue(Path(target).is_dir())

    def test_segment_blocked_by_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            (Path(tmp) / "x").write_bytes(b"")

            with self.assertRaises(OSError):
                ensure_directories(Path(tmp).as_posix() + "/x/y")


if __name__ == "__main__":
    unittest.main()
