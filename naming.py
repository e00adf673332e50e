from __future__ import annotations

import os
import re

_SEPARATOR_PATTERN = re.compile(r"[/\\]")
_UNSAFE_ENTRY_CHARS = re.compile(r"[/\\\x00]")
_SPACE_RUN = re.compile(r" +")
_RESERVED_ENTRY_NAMES = {".", ".."}
LAST_RESORT_ENTRY_NAME = "unnamed"


def extract_name(full_path: str) -> str:
    """Return the bare file name of ``full_path`` for either separator style.

    Never raises: an empty path gives ``""`` and a path made only of
    separators is returned unchanged.
    """
    if not full_path:
        return full_path
    segments = [segment for segment in _SEPARATOR_PATTERN.split(full_path) if segment]
    if not segments:
        return full_path
    return segments[-1]


def split_extension(name: str) -> tuple[str, str]:
    stem, ext = os.path.splitext(name)
    if not stem:
        return name, ""
    return stem, ext


def compose_translated_name(translated_stem: str, ext: str) -> str:
    cleaned = _SPACE_RUN.sub("_", translated_stem.strip())
    return f"{cleaned}{ext}"


def sanitize_entry_name(name: str, fallback: str = LAST_RESORT_ENTRY_NAME) -> str:
    cleaned = _UNSAFE_ENTRY_CHARS.sub("_", name or "").strip()
    if cleaned and cleaned not in _RESERVED_ENTRY_NAMES:
        return cleaned
    if fallback == LAST_RESORT_ENTRY_NAME:
        return LAST_RESORT_ENTRY_NAME
    return sanitize_entry_name(fallback)


def unique_entry_names(names: list[str]) -> list[str]:
    """Disambiguate repeated names as ``cat.png``, ``cat(1).png``, ``cat(2).png``.

    Earlier entries win. Comparison ignores case so the archive also
    extracts cleanly on case-insensitive file systems.
    """
    used: set[str] = set()
    resolved: list[str] = []

    for name in names:
        candidate = name
        if candidate.casefold() in used:
            stem, ext = split_extension(name)
            counter = 1
            while True:
                candidate = f"{stem}({counter}){ext}"
                if candidate.casefold() not in used:
                    break
                counter += 1
        used.add(candidate.casefold())
        resolved.append(candidate)

    return resolved
