from __future__ import annotations

from dataclasses import dataclass

from naming import extract_name

FAILURE_INVALID_INPUT = "invalid_input"
FAILURE_CONFIGURATION = "configuration"
FAILURE_NETWORK = "network"
FAILURE_TIMEOUT = "timeout"
FAILURE_SERVICE = "service_error"
FAILURE_MALFORMED = "malformed_response"
FAILURE_CANCELLED = "cancelled"
FAILURE_UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class InputFile:
    full_path: str
    display_name: str

    @classmethod
    def from_path(cls, full_path: str) -> InputFile:
        return cls(full_path=full_path, display_name=extract_name(full_path))


@dataclass(frozen=True)
class Translated:
    name: str
    # True when the name was already in the target language and no request was sent.
    skipped: bool = False


@dataclass(frozen=True)
class Failed:
    kind: str
    message: str = ""


TranslationOutcome = Translated | Failed


@dataclass(frozen=True)
class ArchiveEntry:
    source_path: str
    entry_name: str


@dataclass(frozen=True)
class TranslatedFile:
    original_name: str
    full_path: str
    outcome: TranslationOutcome

    @property
    def is_translated(self) -> bool:
        return isinstance(self.outcome, Translated)

    @property
    def translated_name(self) -> str | None:
        if isinstance(self.outcome, Translated):
            return self.outcome.name
        return None

    def archive_entry(self) -> ArchiveEntry:
        return ArchiveEntry(
            source_path=self.full_path,
            entry_name=self.translated_name or self.original_name,
        )


@dataclass
class BatchRunSummary:
    total_items: int
    translated_items: int
    skipped_items: int
    failed_items: int
    cancelled_items: int
    total_seconds: float
