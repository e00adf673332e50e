from __future__ import annotations

import threading
from typing import Callable, Iterable, Optional

from lingua import Language, LanguageDetector, LanguageDetectorBuilder

from config import DETECTION_LANGUAGES

LanguageDetectorFn = Callable[[str], Optional[str]]

_DETECTOR_CACHE_LOCK = threading.Lock()
_DETECTOR_CACHE: dict[tuple[str, ...], LanguageDetector] = {}


def _language_by_code() -> dict[str, Language]:
    return {language.iso_code_639_1.name.lower(): language for language in Language.all()}


def _normalize_candidates(codes: Iterable[str]) -> tuple[str, ...]:
    known = _language_by_code()
    normalized = {code.strip().lower() for code in codes if code and code.strip()}
    return tuple(sorted(code for code in normalized if code in known))


def _get_detector(candidates: tuple[str, ...]) -> LanguageDetector:
    with _DETECTOR_CACHE_LOCK:
        detector = _DETECTOR_CACHE.get(candidates)
        if detector is None:
            known = _language_by_code()
            languages = [known[code] for code in candidates]
            detector = LanguageDetectorBuilder.from_languages(*languages).build()
            _DETECTOR_CACHE[candidates] = detector
        return detector


def detection_candidates(target_language: str, source_language: str = "auto") -> tuple[str, ...]:
    codes = list(DETECTION_LANGUAGES)
    codes.append(target_language)
    if source_language and source_language != "auto":
        codes.append(source_language)
    return _normalize_candidates(codes)


def detect_language(text: str, candidates: Iterable[str] = DETECTION_LANGUAGES) -> str | None:
    """Return the ISO 639-1 code of ``text`` or ``None`` when undetectable."""
    if not text or not text.strip():
        return None
    normalized = _normalize_candidates(candidates)
    # lingua needs at least two languages to choose between.
    if len(normalized) < 2:
        return None
    language = _get_detector(normalized).detect_language_of(text)
    if language is None:
        return None
    return language.iso_code_639_1.name.lower()


def make_language_detector(target_language: str, source_language: str = "auto") -> LanguageDetectorFn:
    candidates = detection_candidates(target_language, source_language)

    def _detect(text: str) -> str | None:
        return detect_language(text, candidates)

    return _detect


def clear_detector_cache() -> None:
    with _DETECTOR_CACHE_LOCK:
        _DETECTOR_CACHE.clear()
