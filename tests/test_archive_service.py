from __future__ import annotations

import os
import tempfile
import unittest
import zipfile
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import archive_service
from archive_service import (
    ArchiveWriteError,
    SourceUnreadableError,
    archive_entries_for,
    build_archive,
    compression_method,
    resolve_entry_names,
)
from logging_service import SessionLogger
from models import ArchiveEntry, Failed, Translated, TranslatedFile


class BuildArchiveTests(unittest.TestCase):
    def test_duplicate_names_are_both_kept(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            first = base / "one.png"
            second = base / "two.png"
            first.write_bytes(b"first image")
            second.write_bytes(b"second image")
            destination = base / "out.zip"

            names = build_archive(
                [
                    ArchiveEntry(str(first), "x.png"),
                    ArchiveEntry(str(second), "x.png"),
                ],
                destination,
            )

            self.assertEqual(["x.png", "x(1).png"], names)
            with zipfile.ZipFile(destination) as archive:
                self.assertEqual(["x.png", "x(1).png"], archive.namelist())
                self.assertEqual(b"first image", archive.read("x.png"))
                self.assertEqual(b"second image", archive.read("x(1).png"))

    def test_missing_source_fails_without_destination(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            present = base / "present.png"
            present.write_bytes(b"data")
            missing = base / "missing.png"
            destination = base / "out.zip"

            with self.assertRaises(SourceUnreadableError) as ctx:
                build_archive(
                    [
                        ArchiveEntry(str(present), "a.png"),
                        ArchiveEntry(str(missing), "b.png"),
                    ],
                    destination,
                )

            self.assertEqual(str(missing), ctx.exception.source_path)
            self.assertFalse(destination.exists())
            self.assertEqual(["present.png"], sorted(path.name for path in base.iterdir()))

    def test_failure_leaves_existing_destination_untouched(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            destination = base / "out.zip"
            destination.write_bytes(b"previous archive")

            with self.assertRaises(SourceUnreadableError):
                build_archive([ArchiveEntry(str(base / "gone.png"), "gone.png")], destination)

            self.assertEqual(b"previous archive", destination.read_bytes())

    def test_unwritable_destination_raises_write_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            source = base / "a.png"
            source.write_bytes(b"data")
            destination = base / "no_such_dir" / "out.zip"

            with self.assertRaises(ArchiveWriteError):
                build_archive([ArchiveEntry(str(source), "a.png")], destination)

            self.assertFalse(destination.exists())

    def test_destination_is_directory_raises_write_error(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            source = base / "a.png"
            source.write_bytes(b"data")
            destination = base / "folder.zip"
            destination.mkdir()

            with self.assertRaises(ArchiveWriteError):
                build_archive([ArchiveEntry(str(source), "a.png")], destination)

            self.assertEqual(
                ["a.png", "folder.zip"],
                sorted(path.name for path in base.iterdir()),
            )

    def test_far_future_mtime_is_clamped(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            source = base / "a.png"
            source.write_bytes(b"data")
            far_future = datetime(2200, 1, 1).timestamp()
            os.utime(source, (far_future, far_future))
            destination = base / "out.zip"

            self.assertEqual(["a.png"], build_archive([ArchiveEntry(str(source), "a.png")], destination))

            with zipfile.ZipFile(destination) as archive:
                self.assertEqual((2107, 12, 31, 23, 59, 58), archive.getinfo("a.png").date_time)
            self.assertEqual(["a.png", "out.zip"], sorted(path.name for path in base.iterdir()))

    def test_unexpected_write_failure_is_typed_and_cleaned_up(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            source = base / "a.png"
            source.write_bytes(b"data")
            destination = base / "out.zip"
            destination.write_bytes(b"previous archive")

            # A year past the DOS range makes zipfile fail with struct.error.
            with patch.object(
                archive_service, "_entry_date_time", return_value=(2200, 1, 1, 0, 0, 0)
            ):
                with self.assertRaises(ArchiveWriteError) as ctx:
                    build_archive([ArchiveEntry(str(source), "a.png")], destination)

            self.assertNotIsInstance(ctx.exception.cause, OSError)
            self.assertEqual(b"previous archive", destination.read_bytes())
            self.assertEqual(["a.png", "out.zip"], sorted(path.name for path in base.iterdir()))

    def test_entry_names_are_made_safe(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            source = base / "src.png"
            source.write_bytes(b"data")
            destination = base / "out.zip"

            names = build_archive(
                [
                    ArchiveEntry(str(source), "../evil/cat.png"),
                    ArchiveEntry(str(source), "nul\x00.png"),
                    ArchiveEntry(str(source), "   "),
                ],
                destination,
            )

            self.assertEqual([".._evil_cat.png", "nul_.png", "src.png"], names)
            with zipfile.ZipFile(destination) as archive:
                for info in archive.infolist():
                    self.assertNotIn("/", info.filename)

    def test_translated_and_failed_files_scenario(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            cat = base / "猫.png"
            dog = base / "狗.png"
            cat.write_bytes(b"meow")
            dog.write_bytes(b"woof")
            results = [
                TranslatedFile("猫.png", str(cat), Translated(name="cat.png")),
                TranslatedFile("狗.png", str(dog), Failed(kind="network", message="down")),
            ]
            destination = base / "translated.zip"

            entries = archive_entries_for(results)
            names = build_archive(entries, destination, compression=compression_method("deflated"))

            self.assertEqual(["cat.png", "狗.png"], names)
            with zipfile.ZipFile(destination) as archive:
                self.assertEqual(b"meow", archive.read("cat.png"))
                self.assertEqual(b"woof", archive.read("狗.png"))
                self.assertEqual(zipfile.ZIP_DEFLATED, archive.getinfo("cat.png").compress_type)

    def test_empty_entry_list_writes_empty_archive(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            destination = Path(temp_dir) / "empty.zip"
            self.assertEqual([], build_archive([], destination))
            with zipfile.ZipFile(destination) as archive:
                self.assertEqual([], archive.namelist())

    def test_archive_steps_are_logged(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base = Path(temp_dir)
            session_logger = SessionLogger(base / "state")
            with self.assertRaises(SourceUnreadableError):
                build_archive(
                    [ArchiveEntry(str(base / "missing.png"), "m.png")],
                    base / "out.zip",
                    session_logger=session_logger,
                )
            assert session_logger.log_path is not None
            log_text = session_logger.log_path.read_text(encoding="utf-8")
        self.assertIn("unreadable source", log_text)
        self.assertIn("missing.png", log_text)


class EntryNameResolutionTests(unittest.TestCase):
    def test_sanitize_then_disambiguate(self) -> None:
        entries = [
            ArchiveEntry("/in/a.png", "a/b.png"),
            ArchiveEntry("/in/c.png", "a_b.png"),
        ]
        self.assertEqual(["a_b.png", "a_b(1).png"], resolve_entry_names(entries))

    def test_unknown_compression(self) -> None:
        with self.assertRaises(ValueError):
            compression_method("lzma-ultra")


if __name__ == "__main__":
    unittest.main()
