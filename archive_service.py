from __future__ import annotations

import os
import time
import uuid
import zipfile
from pathlib import Path
from typing import Sequence

from logging_service import SessionLogger
from models import ArchiveEntry, TranslatedFile
from naming import sanitize_entry_name, unique_entry_names

COMPRESSION_METHODS = {
    "stored": zipfile.ZIP_STORED,
    "deflated": zipfile.ZIP_DEFLATED,
}

# Range a ZIP header's DOS date and time can hold.
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
_ZIP_LAST_DATE_TIME = (2107, 12, 31, 23, 59, 58)


class ArchiveError(Exception):
    pass


class SourceUnreadableError(ArchiveError):
    def __init__(self, source_path: str, cause: BaseException) -> None:
        super().__init__(f"Cannot read source file '{source_path}': {cause}")
        self.source_path = source_path
        self.cause = cause


class ArchiveWriteError(ArchiveError):
    def __init__(self, destination_path: str, cause: BaseException) -> None:
        super().__init__(f"Cannot write archive '{destination_path}': {cause}")
        self.destination_path = destination_path
        self.cause = cause


def archive_entries_for(results: Sequence[TranslatedFile]) -> list[ArchiveEntry]:
    return [item.archive_entry() for item in results]


def resolve_entry_names(entries: Sequence[ArchiveEntry]) -> list[str]:
    sanitized = [
        sanitize_entry_name(entry.entry_name, fallback=Path(entry.source_path).name)
        for entry in entries
    ]
    return unique_entry_names(sanitized)


def compression_method(name: str) -> int:
    try:
        return COMPRESSION_METHODS[name]
    except KeyError as exc:
        raise ValueError(f"Unsupported compression: {name}") from exc


def _entry_date_time(source_path: Path) -> tuple[int, int, int, int, int, int]:
    try:
        modified = time.localtime(source_path.stat().st_mtime)
    except (OSError, OverflowError, ValueError):
        return _ZIP_EPOCH
    date_time = (
        modified.tm_year,
        modified.tm_mon,
        modified.tm_mday,
        modified.tm_hour,
        modified.tm_min,
        modified.tm_sec,
    )
    if date_time > _ZIP_LAST_DATE_TIME:
        return _ZIP_LAST_DATE_TIME
    if date_time < _ZIP_EPOCH:
        return _ZIP_EPOCH
    return date_time


def _read_source(source_path: str) -> bytes:
    try:
        return Path(source_path).read_bytes()
    except OSError as exc:
        raise SourceUnreadableError(source_path, exc) from exc


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        return


def build_archive(
    entries: Sequence[ArchiveEntry],
    destination_path: str | Path,
    *,
    compression: int = zipfile.ZIP_STORED,
    session_logger: SessionLogger | None = None,
) -> list[str]:
    """Write every entry into one ZIP file at ``destination_path``.

    All or nothing: the archive is assembled in a ``.part`` file next to
    the destination and moved into place only after the last entry is
    written. On failure the partial file is removed and any existing
    destination is left untouched.

    Returns the entry names actually used, in input order.
    """
    destination = Path(destination_path)
    entry_names = resolve_entry_names(entries)
    temp_path = destination.with_name(f".{destination.name}.{uuid.uuid4().hex[:8]}.part")

    if session_logger is not None:
        session_logger.info(
            "Building archive",
            destination=str(destination),
            entries=len(entry_names),
        )

    written = False
    try:
        with zipfile.ZipFile(temp_path, "w", compression=compression) as archive:
            for entry, entry_name in zip(entries, entry_names):
                content = _read_source(entry.source_path)
                info = zipfile.ZipInfo(entry_name, date_time=_entry_date_time(Path(entry.source_path)))
                info.compress_type = compression
                info.external_attr = 0o644 << 16
                archive.writestr(info, content)
        os.replace(temp_path, destination)
        written = True
    except SourceUnreadableError as exc:
        if session_logger is not None:
            session_logger.error(
                "Archive aborted: unreadable source",
                source_path=exc.source_path,
                error=str(exc.cause),
            )
        raise
    except Exception as exc:
        # zipfile can also fail with struct.error or ValueError on header fields.
        if session_logger is not None:
            session_logger.error(
                "Archive aborted: write failed",
                destination=str(destination),
                error=f"{type(exc).__name__}: {exc}",
            )
        raise ArchiveWriteError(str(destination), exc) from exc
    finally:
        if not written:
            _remove_quietly(temp_path)

    if session_logger is not None:
        session_logger.info(
            "Archive written",
            destination=str(destination),
            entries=entry_names,
        )
    return entry_names
