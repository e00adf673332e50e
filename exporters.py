from __future__ import annotations

import csv
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from archive_service import resolve_entry_names
from batch_translator import summarize_batch
from models import Failed, Translated, TranslatedFile

CSV_COLUMNS = [
    "original_name",
    "full_path",
    "translated_name",
    "status",
    "failure_kind",
    "error",
    "archive_name",
]


def _status_of(item: TranslatedFile) -> str:
    outcome = item.outcome
    if isinstance(outcome, Translated):
        return "skipped" if outcome.skipped else "translated"
    return "failed"


def build_rows(results: Sequence[TranslatedFile]) -> list[dict[str, Any]]:
    archive_names = resolve_entry_names([item.archive_entry() for item in results])
    rows: list[dict[str, Any]] = []
    for item, archive_name in zip(results, archive_names):
        outcome = item.outcome
        rows.append(
            {
                "original_name": item.original_name,
                "full_path": item.full_path,
                "translated_name": item.translated_name or "",
                "status": _status_of(item),
                "failure_kind": outcome.kind if isinstance(outcome, Failed) else "",
                "error": outcome.message if isinstance(outcome, Failed) else "",
                "archive_name": archive_name,
            }
        )
    return rows


def export_json(
    results: Sequence[TranslatedFile],
    output_path: Path,
    total_seconds: float = 0.0,
) -> None:
    payload = {
        "generated_at": datetime.now().astimezone().isoformat(),
        "summary": asdict(summarize_batch(results, total_seconds)),
        "items": build_rows(results),
    }
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2),
        encoding="utf-8",
    )


def export_csv(results: Sequence[TranslatedFile], output_path: Path) -> None:
    # utf-8-sig so spreadsheet tools detect the encoding of CJK names.
    with output_path.open("w", encoding="utf-8-sig", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(build_rows(results))


def export_results(
    results: Sequence[TranslatedFile],
    output_path: str | Path,
    output_format: str | None = None,
    total_seconds: float = 0.0,
) -> Path:
    path = Path(output_path)
    fmt = (output_format or path.suffix.lstrip(".")).lower()
    if fmt == "json":
        export_json(results, path, total_seconds=total_seconds)
    elif fmt == "csv":
        export_csv(results, path)
    else:
        raise ValueError(f"Unsupported export format: {fmt or '<none>'}")
    return path
