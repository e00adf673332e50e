from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, Sequence

from config import DEFAULT_MAX_WORKERS
from models import (
    FAILURE_CANCELLED,
    FAILURE_UNEXPECTED,
    BatchRunSummary,
    Failed,
    InputFile,
    Translated,
    TranslatedFile,
    TranslationOutcome,
)

TranslateFn = Callable[[str], TranslationOutcome]
ItemCallback = Callable[[int, int, TranslatedFile], None]

CANCELLED_MESSAGE = "Batch was cancelled before this file was translated."


def make_input_files(paths: Iterable[str]) -> list[InputFile]:
    return [InputFile.from_path(path) for path in paths]


def _translate_one(
    input_file: InputFile,
    translate: TranslateFn,
    cancel_event: threading.Event | None,
) -> TranslatedFile:
    if cancel_event is not None and cancel_event.is_set():
        outcome: TranslationOutcome = Failed(kind=FAILURE_CANCELLED, message=CANCELLED_MESSAGE)
    else:
        try:
            outcome = translate(input_file.display_name)
        except Exception as exc:
            outcome = Failed(kind=FAILURE_UNEXPECTED, message=f"{type(exc).__name__}: {exc}")
        if not isinstance(outcome, (Translated, Failed)):
            outcome = Failed(
                kind=FAILURE_UNEXPECTED,
                message=f"Translator returned {type(outcome).__name__}",
            )
    return TranslatedFile(
        original_name=input_file.display_name,
        full_path=input_file.full_path,
        outcome=outcome,
    )


def translate_batch(
    inputs: Sequence[InputFile],
    translate: TranslateFn,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    cancel_event: threading.Event | None = None,
    item_callback: ItemCallback | None = None,
) -> list[TranslatedFile]:
    """Translate every input concurrently and return results in input order.

    The batch itself never fails: each slot resolves to ``Translated`` or
    ``Failed`` independently, and the call returns only once every slot
    has resolved.
    """
    total = len(inputs)
    if total == 0:
        return []

    results: list[TranslatedFile | None] = [None] * total

    def _run(index: int, input_file: InputFile) -> None:
        translated_file = _translate_one(input_file, translate, cancel_event)
        results[index] = translated_file
        # The slot is written before the callback runs.
        if item_callback is not None:
            item_callback(index, total, translated_file)

    worker_count = max(1, min(int(max_workers), total))
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="TranslationWorker") as executor:
        futures = [executor.submit(_run, index, item) for index, item in enumerate(inputs)]
        wait(futures)

    resolved: list[TranslatedFile] = []
    for index, item in enumerate(results):
        if item is None:
            input_file = inputs[index]
            item = TranslatedFile(
                original_name=input_file.display_name,
                full_path=input_file.full_path,
                outcome=Failed(kind=FAILURE_CANCELLED, message=CANCELLED_MESSAGE),
            )
        resolved.append(item)
    return resolved


def retry_failed(
    results: Sequence[TranslatedFile],
    translate: TranslateFn,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    cancel_event: threading.Event | None = None,
    item_callback: ItemCallback | None = None,
) -> list[TranslatedFile]:
    """Translate only the failed slots again, keeping every other slot as is."""
    failed_indices = [index for index, item in enumerate(results) if not item.is_translated]
    merged = list(results)
    if not failed_indices:
        return merged

    retry_inputs = [
        InputFile(full_path=results[index].full_path, display_name=results[index].original_name)
        for index in failed_indices
    ]

    def _remap_callback(retry_index: int, retry_total: int, translated_file: TranslatedFile) -> None:
        if item_callback is not None:
            item_callback(failed_indices[retry_index], len(results), translated_file)

    retried = translate_batch(
        retry_inputs,
        translate,
        max_workers=max_workers,
        cancel_event=cancel_event,
        item_callback=_remap_callback,
    )
    for index, translated_file in zip(failed_indices, retried):
        merged[index] = translated_file
    return merged


def summarize_batch(results: Sequence[TranslatedFile], total_seconds: float) -> BatchRunSummary:
    translated = 0
    skipped = 0
    failed = 0
    cancelled = 0
    for item in results:
        outcome = item.outcome
        if isinstance(outcome, Translated):
            if outcome.skipped:
                skipped += 1
            else:
                translated += 1
        else:
            failed += 1
            if outcome.kind == FAILURE_CANCELLED:
                cancelled += 1
    return BatchRunSummary(
        total_items=len(results),
        translated_items=translated,
        skipped_items=skipped,
        failed_items=failed,
        cancelled_items=cancelled,
        total_seconds=round(max(0.0, total_seconds), 4),
    )
