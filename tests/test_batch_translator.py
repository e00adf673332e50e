from __future__ import annotations

import random
import threading
import time
import unittest

from batch_translator import make_input_files, retry_failed, summarize_batch, translate_batch
from models import (
    FAILURE_CANCELLED,
    FAILURE_NETWORK,
    FAILURE_UNEXPECTED,
    Failed,
    InputFile,
    Translated,
    TranslatedFile,
)


def _echo_upper(name: str) -> Translated:
    return Translated(name=name.upper())


class TranslateBatchTests(unittest.TestCase):
    def test_preserves_length_and_order_regardless_of_completion(self) -> None:
        paths = [f"/data/file_{index:02d}.png" for index in range(25)]
        rng = random.Random(7)
        delays = {f"file_{index:02d}.png": rng.uniform(0.0, 0.02) for index in range(25)}

        def _slow(name: str) -> Translated:
            time.sleep(delays[name])
            return Translated(name=f"t_{name}")

        results = translate_batch(make_input_files(paths), _slow, max_workers=8)

        self.assertEqual(len(paths), len(results))
        self.assertEqual(paths, [item.full_path for item in results])
        self.assertEqual(
            [f"t_file_{index:02d}.png" for index in range(25)],
            [item.translated_name for item in results],
        )

    def test_all_failures_still_complete(self) -> None:
        def _always_fails(name: str) -> Failed:
            return Failed(kind=FAILURE_NETWORK, message="offline")

        results = translate_batch(make_input_files(["a.png", "b.png", "c.png"]), _always_fails)

        self.assertEqual(3, len(results))
        self.assertTrue(all(isinstance(item.outcome, Failed) for item in results))

    def test_raising_translator_is_isolated_per_file(self) -> None:
        def _flaky(name: str) -> Translated:
            if name == "bad.png":
                raise RuntimeError("boom")
            return Translated(name=f"ok_{name}")

        results = translate_batch(make_input_files(["x/good.png", "x/bad.png", "x/fine.png"]), _flaky)

        self.assertEqual("ok_good.png", results[0].translated_name)
        self.assertEqual(FAILURE_UNEXPECTED, results[1].outcome.kind)
        self.assertEqual("ok_fine.png", results[2].translated_name)

    def test_empty_input_does_not_call_translator(self) -> None:
        calls: list[str] = []

        def _record(name: str) -> Translated:
            calls.append(name)
            return Translated(name=name)

        self.assertEqual([], translate_batch([], _record))
        self.assertEqual([], calls)

    def test_duplicates_are_translated_independently(self) -> None:
        calls: list[str] = []
        lock = threading.Lock()

        def _record(name: str) -> Translated:
            with lock:
                calls.append(name)
            return Translated(name="cat.png")

        results = translate_batch(make_input_files(["/tmp/猫.png", "/tmp/猫.png"]), _record)

        self.assertEqual(["猫.png", "猫.png"], calls)
        self.assertEqual(2, len(results))

    def test_cat_and_dog_scenario(self) -> None:
        def _service(name: str):
            if name == "猫.png":
                return Translated(name="cat.png")
            return Failed(kind=FAILURE_NETWORK, message="service unavailable")

        results = translate_batch(make_input_files(["/tmp/猫.png", "/tmp/狗.png"]), _service)

        self.assertEqual("猫.png", results[0].original_name)
        self.assertEqual(Translated(name="cat.png"), results[0].outcome)
        self.assertEqual("狗.png", results[1].original_name)
        self.assertIsInstance(results[1].outcome, Failed)
        self.assertEqual(
            ["cat.png", "狗.png"],
            [item.archive_entry().entry_name for item in results],
        )

    def test_cancelled_batch_marks_unstarted_items(self) -> None:
        cancel_event = threading.Event()
        cancel_event.set()

        results = translate_batch(
            make_input_files(["a.png", "b.png"]),
            _echo_upper,
            cancel_event=cancel_event,
        )

        self.assertEqual([FAILURE_CANCELLED, FAILURE_CANCELLED], [item.outcome.kind for item in results])

    def test_cancel_mid_batch_keeps_finished_items(self) -> None:
        cancel_event = threading.Event()

        def _cancel_after_first(name: str) -> Translated:
            cancel_event.set()
            return Translated(name=f"done_{name}")

        results = translate_batch(
            make_input_files(["a.png", "b.png", "c.png"]),
            _cancel_after_first,
            max_workers=1,
            cancel_event=cancel_event,
        )

        self.assertEqual("done_a.png", results[0].translated_name)
        self.assertEqual(FAILURE_CANCELLED, results[1].outcome.kind)
        self.assertEqual(FAILURE_CANCELLED, results[2].outcome.kind)

    def test_item_callback_reports_every_slot(self) -> None:
        seen: list[tuple[int, int]] = []
        lock = threading.Lock()

        def _callback(index: int, total: int, translated_file: TranslatedFile) -> None:
            with lock:
                seen.append((index, total))

        translate_batch(make_input_files(["a", "b", "c"]), _echo_upper, item_callback=_callback)

        self.assertEqual([(0, 3), (1, 3), (2, 3)], sorted(seen))

    def test_repeated_runs_are_identical(self) -> None:
        inputs = make_input_files(["/x/一.png", "/x/二.png", "/x/三.png"])
        first = translate_batch(inputs, _echo_upper)
        second = translate_batch(inputs, _echo_upper)
        self.assertEqual(first, second)


class RetryFailedTests(unittest.TestCase):
    def test_only_failed_slots_are_retried(self) -> None:
        previous = [
            TranslatedFile("猫.png", "/tmp/猫.png", Translated(name="cat.png")),
            TranslatedFile("狗.png", "/tmp/狗.png", Failed(kind=FAILURE_NETWORK)),
        ]
        calls: list[str] = []

        def _service(name: str) -> Translated:
            calls.append(name)
            return Translated(name="dog.png")

        merged = retry_failed(previous, _service)

        self.assertEqual(["狗.png"], calls)
        self.assertEqual(["cat.png", "dog.png"], [item.translated_name for item in merged])
        self.assertEqual("/tmp/狗.png", merged[1].full_path)

    def test_nothing_to_retry(self) -> None:
        previous = [TranslatedFile("a.png", "/a.png", Translated(name="A.PNG"))]
        self.assertEqual(previous, retry_failed(previous, _echo_upper))


class SummaryTests(unittest.TestCase):
    def test_counts_each_outcome(self) -> None:
        results = [
            TranslatedFile("a", "a", Translated(name="A")),
            TranslatedFile("b", "b", Translated(name="b", skipped=True)),
            TranslatedFile("c", "c", Failed(kind=FAILURE_NETWORK)),
            TranslatedFile("d", "d", Failed(kind=FAILURE_CANCELLED)),
        ]

        summary = summarize_batch(results, 1.23456)

        self.assertEqual(4, summary.total_items)
        self.assertEqual(1, summary.translated_items)
        self.assertEqual(1, summary.skipped_items)
        self.assertEqual(2, summary.failed_items)
        self.assertEqual(1, summary.cancelled_items)
        self.assertAlmostEqual(1.2346, summary.total_seconds)

    def test_input_file_from_path(self) -> None:
        self.assertEqual(InputFile("C:\\in\\a.png", "a.png"), InputFile.from_path("C:\\in\\a.png"))


if __name__ == "__main__":
    unittest.main()
