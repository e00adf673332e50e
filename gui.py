from __future__ import annotations

import os
import queue
import subprocess
import threading
import time
from dataclasses import asdict
from pathlib import Path
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from config import (
    API_KEY_ENV_VAR,
    APP_TITLE,
    ARCHIVE_DIALOG_TYPES,
    COMPRESSION_OPTIONS,
    DEFAULT_COMPRESSION,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    EXPORT_DIALOG_TYPES,
    INPUT_FILE_DIALOG_TYPES,
    MAX_WORKERS_LIMIT,
    SOURCE_LANGUAGE_OPTIONS,
    TARGET_LANGUAGE_OPTIONS,
)
from archive_service import (
    ArchiveError,
    SourceUnreadableError,
    archive_entries_for,
    build_archive,
    compression_method,
)
from batch_translator import retry_failed, summarize_batch, translate_batch
from exporters import export_results
from job_runner import BatchProgress
from language_service import make_language_detector
from logging_service import SessionLogger
from models import Failed, InputFile, Translated, TranslatedFile
from queue_service import FileQueue
from runtime_env import RuntimeEnvReport, get_api_key, get_endpoint, get_model
from settings_service import load_app_settings, save_app_settings
from translation_service import TranslationClient
import ui_strings as ui


class FileNameTranslatorApp:
    def __init__(self, env_report: RuntimeEnvReport | None = None) -> None:
        self.root = tk.Tk()
        self.root.title(APP_TITLE)
        self.root.geometry("900x720")
        self.root.minsize(760, 600)

        self.ui_queue: queue.Queue[tuple] = queue.Queue()
        self.worker_thread: threading.Thread | None = None
        self.cancel_event = threading.Event()
        self.is_running = False
        self.file_queue = FileQueue()
        self.results: list[TranslatedFile] = []
        self.last_batch_seconds = 0.0
        self.progress: BatchProgress | None = None

        self.source_by_label = {label: code for label, code in SOURCE_LANGUAGE_OPTIONS}
        self.label_by_source = {code: label for label, code in SOURCE_LANGUAGE_OPTIONS}
        self.target_by_label = {label: code for label, code in TARGET_LANGUAGE_OPTIONS}
        self.label_by_target = {code: label for label, code in TARGET_LANGUAGE_OPTIONS}
        self.compression_by_label = {label: code for label, code in COMPRESSION_OPTIONS}
        self.label_by_compression = {code: label for label, code in COMPRESSION_OPTIONS}

        self.source_language_var = tk.StringVar(
            value=self.label_by_source.get(DEFAULT_SOURCE_LANGUAGE, SOURCE_LANGUAGE_OPTIONS[0][0])
        )
        self.target_language_var = tk.StringVar(
            value=self.label_by_target.get(DEFAULT_TARGET_LANGUAGE, TARGET_LANGUAGE_OPTIONS[0][0])
        )
        self.compression_var = tk.StringVar(
            value=self.label_by_compression.get(DEFAULT_COMPRESSION, COMPRESSION_OPTIONS[0][0])
        )
        self.workers_var = tk.StringVar(value=str(DEFAULT_MAX_WORKERS))
        self.timeout_var = tk.StringVar(value=str(DEFAULT_REQUEST_TIMEOUT_SECONDS))
        self.files_status_var = tk.StringVar(value=ui.FILES_STATUS_TEMPLATE.format(count=0))
        self.status_var = tk.StringVar(value=ui.STATUS_READY)
        self.progress_var = tk.DoubleVar(value=0.0)
        self.last_input_dir = ""
        self.last_archive_dir = ""
        self.export_format = DEFAULT_EXPORT_FORMAT

        self.session_logger = SessionLogger()
        self._apply_saved_settings()

        self._build_ui()
        if self.session_logger.log_path is not None:
            self._log(ui.LOG_SESSION_FILE.format(path=self.session_logger.log_path))
        self._log_env_report(env_report)
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_ui(self) -> None:
        container = ttk.Frame(self.root, padding=14)
        container.pack(fill=tk.BOTH, expand=True)
        container.columnconfigure(1, weight=1)
        container.rowconfigure(1, weight=1)
        container.rowconfigure(6, weight=2)
        container.rowconfigure(10, weight=1)

        ttk.Label(container, text=ui.LABEL_FILES).grid(row=0, column=0, sticky=tk.W, pady=4)
        file_tools = ttk.Frame(container)
        file_tools.grid(row=0, column=1, columnspan=2, sticky=tk.EW, pady=4)
        file_tools.columnconfigure(5, weight=1)

        self.add_files_button = ttk.Button(
            file_tools, text=ui.BUTTON_ADD_FILES, command=self._add_files
        )
        self.add_files_button.grid(row=0, column=0, padx=(0, 6))
        self.remove_files_button = ttk.Button(
            file_tools, text=ui.BUTTON_REMOVE_SELECTED, command=self._remove_selected_files
        )
        self.remove_files_button.grid(row=0, column=1, padx=(0, 6))
        self.move_up_button = ttk.Button(
            file_tools, text=ui.BUTTON_MOVE_UP, command=self._move_selected_up
        )
        self.move_up_button.grid(row=0, column=2, padx=(0, 6))
        self.move_down_button = ttk.Button(
            file_tools, text=ui.BUTTON_MOVE_DOWN, command=self._move_selected_down
        )
        self.move_down_button.grid(row=0, column=3, padx=(0, 6))
        self.clear_files_button = ttk.Button(
            file_tools, text=ui.BUTTON_CLEAR_FILES, command=self._clear_files
        )
        self.clear_files_button.grid(row=0, column=4, padx=(0, 6))
        ttk.Label(file_tools, textvariable=self.files_status_var).grid(
            row=0, column=5, sticky=tk.E
        )

        files_frame = ttk.Frame(container)
        files_frame.grid(row=1, column=0, columnspan=3, sticky=tk.NSEW, pady=(0, 6))
        files_frame.columnconfigure(0, weight=1)
        files_frame.rowconfigure(0, weight=1)
        self.files_listbox = tk.Listbox(files_frame, height=6, selectmode=tk.EXTENDED)
        self.files_listbox.grid(row=0, column=0, sticky=tk.NSEW)
        files_scroll = ttk.Scrollbar(
            files_frame, orient=tk.VERTICAL, command=self.files_listbox.yview
        )
        files_scroll.grid(row=0, column=1, sticky=tk.NS)
        self.files_listbox.configure(yscrollcommand=files_scroll.set)

        options = ttk.Frame(container)
        options.grid(row=2, column=0, columnspan=3, sticky=tk.EW, pady=4)

        ttk.Label(options, text=ui.LABEL_SOURCE_LANGUAGE).grid(row=0, column=0, sticky=tk.W)
        self.source_language_combo = ttk.Combobox(
            options,
            textvariable=self.source_language_var,
            values=[label for label, _ in SOURCE_LANGUAGE_OPTIONS],
            state="readonly",
            width=14,
        )
        self.source_language_combo.grid(row=0, column=1, padx=(6, 14))

        ttk.Label(options, text=ui.LABEL_TARGET_LANGUAGE).grid(row=0, column=2, sticky=tk.W)
        self.target_language_combo = ttk.Combobox(
            options,
            textvariable=self.target_language_var,
            values=[label for label, _ in TARGET_LANGUAGE_OPTIONS],
            state="readonly",
            width=14,
        )
        self.target_language_combo.grid(row=0, column=3, padx=(6, 14))

        ttk.Label(options, text=ui.LABEL_WORKERS).grid(row=1, column=0, sticky=tk.W, pady=(6, 0))
        self.workers_spin = ttk.Spinbox(
            options,
            from_=1,
            to=MAX_WORKERS_LIMIT,
            textvariable=self.workers_var,
            width=6,
        )
        self.workers_spin.grid(row=1, column=1, sticky=tk.W, padx=(6, 14), pady=(6, 0))

        ttk.Label(options, text=ui.LABEL_TIMEOUT).grid(row=1, column=2, sticky=tk.W, pady=(6, 0))
        self.timeout_entry = ttk.Entry(options, textvariable=self.timeout_var, width=8)
        self.timeout_entry.grid(row=1, column=3, sticky=tk.W, padx=(6, 14), pady=(6, 0))

        ttk.Label(options, text=ui.LABEL_COMPRESSION).grid(row=0, column=4, sticky=tk.W)
        self.compression_combo = ttk.Combobox(
            options,
            textvariable=self.compression_var,
            values=[label for label, _ in COMPRESSION_OPTIONS],
            state="readonly",
            width=18,
        )
        self.compression_combo.grid(row=0, column=5, padx=(6, 0))

        run_tools = ttk.Frame(container)
        run_tools.grid(row=3, column=0, columnspan=3, sticky=tk.EW, pady=(8, 4))
        self.translate_button = ttk.Button(
            run_tools, text=ui.BUTTON_TRANSLATE, command=self._start_translation
        )
        self.translate_button.grid(row=0, column=0, padx=(0, 6))
        self.cancel_button = ttk.Button(
            run_tools, text=ui.BUTTON_CANCEL, command=self._cancel_translation, state=tk.DISABLED
        )
        self.cancel_button.grid(row=0, column=1, padx=(0, 6))
        self.retry_failed_button = ttk.Button(
            run_tools, text=ui.BUTTON_RETRY_FAILED, command=self._retry_failed
        )
        self.retry_failed_button.grid(row=0, column=2, padx=(0, 6))

        ttk.Progressbar(container, variable=self.progress_var, maximum=100.0).grid(
            row=4, column=0, columnspan=3, sticky=tk.EW, pady=(4, 2)
        )
        ttk.Label(container, textvariable=self.status_var).grid(
            row=5, column=0, columnspan=3, sticky=tk.W
        )

        results_frame = ttk.LabelFrame(container, text=ui.LABEL_RESULTS, padding=6)
        results_frame.grid(row=6, column=0, columnspan=3, sticky=tk.NSEW, pady=(6, 6))
        results_frame.columnconfigure(0, weight=1)
        results_frame.rowconfigure(0, weight=1)
        self.results_tree = ttk.Treeview(
            results_frame,
            columns=("original", "translated", "status"),
            show="headings",
            height=8,
        )
        self.results_tree.heading("original", text=ui.COLUMN_ORIGINAL)
        self.results_tree.heading("translated", text=ui.COLUMN_TRANSLATED)
        self.results_tree.heading("status", text=ui.COLUMN_STATUS)
        self.results_tree.column("original", width=260)
        self.results_tree.column("translated", width=260)
        self.results_tree.column("status", width=200)
        self.results_tree.tag_configure("failed", foreground="#b00020")
        self.results_tree.tag_configure("translated", foreground="#1b5e20")
        self.results_tree.grid(row=0, column=0, sticky=tk.NSEW)
        results_scroll = ttk.Scrollbar(
            results_frame, orient=tk.VERTICAL, command=self.results_tree.yview
        )
        results_scroll.grid(row=0, column=1, sticky=tk.NS)
        self.results_tree.configure(yscrollcommand=results_scroll.set)

        output_tools = ttk.Frame(container)
        output_tools.grid(row=7, column=0, columnspan=3, sticky=tk.EW, pady=(0, 6))
        self.save_archive_button = ttk.Button(
            output_tools, text=ui.BUTTON_SAVE_ARCHIVE, command=self._save_archive
        )
        self.save_archive_button.grid(row=0, column=0, padx=(0, 6))
        self.export_list_button = ttk.Button(
            output_tools, text=ui.BUTTON_EXPORT_LIST, command=self._export_list
        )
        self.export_list_button.grid(row=0, column=1, padx=(0, 6))
        self.view_log_button = ttk.Button(
            output_tools, text=ui.BUTTON_VIEW_LOG, command=self._open_log_file
        )
        self.view_log_button.grid(row=0, column=2, padx=(0, 6))
        self.clear_log_button = ttk.Button(
            output_tools, text=ui.BUTTON_CLEAR_LOG, command=self._clear_log
        )
        self.clear_log_button.grid(row=0, column=3, padx=(0, 6))

        ttk.Label(container, text=ui.LOG_PANEL_TITLE).grid(row=9, column=0, sticky=tk.W)
        log_frame = ttk.Frame(container)
        log_frame.grid(row=10, column=0, columnspan=3, sticky=tk.NSEW)
        log_frame.columnconfigure(0, weight=1)
        log_frame.rowconfigure(0, weight=1)
        self.log_text = tk.Text(log_frame, height=8, state=tk.DISABLED, wrap=tk.WORD)
        self.log_text.grid(row=0, column=0, sticky=tk.NSEW)
        log_scroll = ttk.Scrollbar(log_frame, orient=tk.VERTICAL, command=self.log_text.yview)
        log_scroll.grid(row=0, column=1, sticky=tk.NS)
        self.log_text.configure(yscrollcommand=log_scroll.set)

        self._update_output_buttons_state()

    def _apply_saved_settings(self) -> None:
        settings = load_app_settings()
        source = settings.get("source_language")
        if source in self.label_by_source:
            self.source_language_var.set(self.label_by_source[source])
        target = settings.get("target_language")
        if target in self.label_by_target:
            self.target_language_var.set(self.label_by_target[target])
        compression = settings.get("compression")
        if compression in self.label_by_compression:
            self.compression_var.set(self.label_by_compression[compression])
        workers = settings.get("max_workers", DEFAULT_MAX_WORKERS)
        if 1 <= workers <= MAX_WORKERS_LIMIT:
            self.workers_var.set(str(workers))
        timeout = settings.get("request_timeout_seconds", DEFAULT_REQUEST_TIMEOUT_SECONDS)
        if timeout > 0:
            self.timeout_var.set(str(timeout))
        self.last_input_dir = settings.get("last_input_dir", "")
        self.last_archive_dir = settings.get("last_archive_dir", "")
        self.export_format = settings.get("export_format", DEFAULT_EXPORT_FORMAT)

    def _collect_settings_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "source_language": self._selected_source_language(),
            "target_language": self._selected_target_language(),
            "compression": self.compression_by_label.get(
                self.compression_var.get(), DEFAULT_COMPRESSION
            ),
            "export_format": self.export_format,
            "last_input_dir": self.last_input_dir,
            "last_archive_dir": self.last_archive_dir,
        }
        try:
            payload["max_workers"] = int(self.workers_var.get().strip())
        except ValueError:
            pass
        try:
            payload["request_timeout_seconds"] = float(self.timeout_var.get().strip())
        except ValueError:
            pass
        return payload

    def _save_settings(self) -> None:
        save_app_settings(self._collect_settings_payload())

    def _log_env_report(self, env_report: RuntimeEnvReport | None) -> None:
        if env_report is None:
            return
        if env_report.env_file is not None:
            self._log(ui.LOG_ENV_LOADED.format(path=env_report.env_file))
        else:
            self._log(ui.LOG_ENV_NOT_FOUND)
        if env_report.api_key_present:
            self._log(
                ui.LOG_API_KEY_FOUND.format(
                    env_var=API_KEY_ENV_VAR, masked=env_report.masked_api_key
                )
            )
        else:
            self._log(ui.LOG_API_KEY_MISSING.format(env_var=API_KEY_ENV_VAR), level="WARNING")

    def _selected_source_language(self) -> str:
        return self.source_by_label.get(self.source_language_var.get(), DEFAULT_SOURCE_LANGUAGE)

    def _selected_target_language(self) -> str:
        return self.target_by_label.get(self.target_language_var.get(), DEFAULT_TARGET_LANGUAGE)

    def _read_run_options(self) -> tuple[int, float] | None:
        try:
            workers = int(self.workers_var.get().strip())
            if not 1 <= workers <= MAX_WORKERS_LIMIT:
                raise ValueError
        except ValueError:
            messagebox.showerror(
                ui.TITLE_VALIDATION_ERROR,
                ui.MSG_WORKERS_RANGE.format(limit=MAX_WORKERS_LIMIT),
            )
            return None
        try:
            timeout_seconds = float(self.timeout_var.get().strip())
            if timeout_seconds <= 0:
                raise ValueError
        except ValueError:
            messagebox.showerror(ui.TITLE_VALIDATION_ERROR, ui.MSG_TIMEOUT_POSITIVE)
            return None
        return workers, timeout_seconds

    def _build_client(self, timeout_seconds: float) -> TranslationClient:
        source_language = self._selected_source_language()
        target_language = self._selected_target_language()
        return TranslationClient(
            get_api_key(),
            source_lang=source_language,
            target_lang=target_language,
            model=get_model(),
            endpoint=get_endpoint(),
            timeout_seconds=timeout_seconds,
            session_logger=self.session_logger,
            language_detector=make_language_detector(target_language, source_language),
        )

    # File list

    def _add_files(self) -> None:
        chosen = filedialog.askopenfilenames(
            title=ui.FILE_DIALOG_SELECT_FILES,
            filetypes=INPUT_FILE_DIALOG_TYPES,
            initialdir=self.last_input_dir or str(Path.home()),
        )
        if not chosen:
            return
        added, skipped = self.file_queue.add_paths(list(chosen))
        self.last_input_dir = str(Path(chosen[0]).parent)
        self._files_changed()
        self._log(ui.LOG_FILES_ADDED.format(added=added, skipped=skipped))
        self._save_settings()

    def _remove_selected_files(self) -> None:
        selected = list(self.files_listbox.curselection())
        if not selected:
            return
        removed_count = self.file_queue.remove(selected)
        self._files_changed()
        self._log(ui.LOG_REMOVED_SELECTED.format(count=removed_count))

    def _move_selected_up(self) -> None:
        selected = list(self.files_listbox.curselection())
        if not selected or min(selected) == 0:
            return
        new_selection = self.file_queue.move(selected, -1)
        self._files_changed()
        for index in new_selection:
            self.files_listbox.selection_set(index)
        self._log(ui.LOG_MOVED_UP)

    def _move_selected_down(self) -> None:
        selected = list(self.files_listbox.curselection())
        if not selected or max(selected) >= len(self.file_queue) - 1:
            return
        new_selection = self.file_queue.move(selected, 1)
        self._files_changed()
        for index in new_selection:
            self.files_listbox.selection_set(index)
        self._log(ui.LOG_MOVED_DOWN)

    def _clear_files(self) -> None:
        self.file_queue.clear()
        self._files_changed()
        self._log(ui.LOG_FILES_CLEARED)

    def _files_changed(self) -> None:
        self.files_listbox.delete(0, tk.END)
        for item in self.file_queue.files:
            self.files_listbox.insert(tk.END, item.full_path)
        self.files_status_var.set(ui.FILES_STATUS_TEMPLATE.format(count=len(self.file_queue)))
        # Results always describe the list they were produced from.
        self.results = []
        self._show_pending_rows(self.file_queue.files)
        self._update_output_buttons_state()

    # Results table

    def _show_pending_rows(self, inputs: list[InputFile]) -> None:
        self.results_tree.delete(*self.results_tree.get_children())
        for index, input_file in enumerate(inputs):
            self.results_tree.insert(
                "",
                tk.END,
                iid=str(index),
                values=(input_file.display_name, "", ui.RESULT_PENDING),
            )

    def _show_result_row(self, index: int, translated_file: TranslatedFile) -> None:
        outcome = translated_file.outcome
        if isinstance(outcome, Translated):
            status = ui.RESULT_ALREADY_TARGET if outcome.skipped else ui.RESULT_TRANSLATED
            values = (translated_file.original_name, outcome.name, status)
            tags: tuple[str, ...] = ("translated",)
        else:
            values = (
                translated_file.original_name,
                "",
                ui.RESULT_FAILED_TEMPLATE.format(kind=outcome.kind),
            )
            tags = ("failed",)
        row_id = str(index)
        if self.results_tree.exists(row_id):
            self.results_tree.item(row_id, values=values, tags=tags)
        else:
            self.results_tree.insert("", tk.END, iid=row_id, values=values, tags=tags)

    # Translation

    def _start_translation(self) -> None:
        if self.is_running:
            return
        inputs = self.file_queue.files
        if not inputs:
            messagebox.showerror(ui.TITLE_MISSING_DATA, ui.MSG_ADD_FILES_FIRST)
            return
        options = self._read_run_options()
        if options is None:
            return
        workers, timeout_seconds = options
        self._warn_if_api_key_missing()
        self._save_settings()

        self.results = []
        self._show_pending_rows(inputs)
        self._log(ui.LOG_TRANSLATION_STARTED.format(count=len(inputs), workers=workers))
        self._start_worker(
            self._run_translation_worker,
            total=len(inputs),
            status=ui.STATUS_TRANSLATING,
            kwargs={
                "inputs": inputs,
                "client": self._build_client(timeout_seconds),
                "workers": workers,
            },
        )

    def _retry_failed(self) -> None:
        if self.is_running:
            return
        failed_count = sum(1 for item in self.results if not item.is_translated)
        if failed_count == 0:
            messagebox.showinfo(ui.TITLE_DONE, ui.MSG_NO_FAILED_ITEMS)
            return
        options = self._read_run_options()
        if options is None:
            return
        workers, timeout_seconds = options
        self._warn_if_api_key_missing()
        self._log(ui.LOG_RETRY_STARTED.format(count=failed_count))
        self._start_worker(
            self._run_retry_worker,
            total=failed_count,
            status=ui.STATUS_RETRYING,
            kwargs={
                "previous": list(self.results),
                "client": self._build_client(timeout_seconds),
                "workers": workers,
            },
        )

    def _warn_if_api_key_missing(self) -> None:
        if get_api_key() is None:
            messagebox.showwarning(
                ui.TITLE_ERROR,
                ui.MSG_MISSING_API_KEY.format(env_var=API_KEY_ENV_VAR),
            )

    def _start_worker(self, target, total: int, status: str, kwargs: dict[str, object]) -> None:
        self.cancel_event.clear()
        self._drain_ui_events()
        self.progress = BatchProgress(total=total, stage=status)
        self.progress_var.set(0.0)
        self.status_var.set(status)
        self._set_running_state(True)
        self.worker_thread = threading.Thread(target=target, kwargs=kwargs, daemon=True)
        self.worker_thread.start()
        self.root.after(120, self._process_queue)

    def _item_callback(self, index: int, total: int, translated_file: TranslatedFile) -> None:
        self.ui_queue.put(("item_done", index, total, translated_file))

    def _run_translation_worker(
        self,
        inputs: list[InputFile],
        client: TranslationClient,
        workers: int,
    ) -> None:
        started_at = time.perf_counter()
        try:
            results = translate_batch(
                inputs,
                client.translate,
                max_workers=workers,
                cancel_event=self.cancel_event,
                item_callback=self._item_callback,
            )
            self.ui_queue.put(("batch_done", results, time.perf_counter() - started_at))
        except Exception as exc:
            self.ui_queue.put(("error", str(exc)))
        finally:
            client.close()

    def _run_retry_worker(
        self,
        previous: list[TranslatedFile],
        client: TranslationClient,
        workers: int,
    ) -> None:
        started_at = time.perf_counter()
        try:
            results = retry_failed(
                previous,
                client.translate,
                max_workers=workers,
                cancel_event=self.cancel_event,
                item_callback=self._item_callback,
            )
            self.ui_queue.put(("batch_done", results, time.perf_counter() - started_at))
        except Exception as exc:
            self.ui_queue.put(("error", str(exc)))
        finally:
            client.close()

    def _cancel_translation(self) -> None:
        if not self.is_running:
            return
        self.cancel_event.set()
        self.status_var.set(ui.STATUS_CANCELLING)
        self._log(ui.LOG_CANCELLATION_REQUESTED)

    # Archive and export

    def _save_archive(self) -> None:
        if self.is_running:
            return
        if not self.results:
            messagebox.showerror(ui.TITLE_MISSING_DATA, ui.MSG_NOTHING_TO_ARCHIVE)
            return
        save_path = filedialog.asksaveasfilename(
            title=ui.FILE_DIALOG_SAVE_ARCHIVE,
            defaultextension=".zip",
            filetypes=ARCHIVE_DIALOG_TYPES,
            initialdir=self.last_archive_dir or str(Path.home()),
            initialfile=ui.DEFAULT_ARCHIVE_NAME,
        )
        if not save_path:
            return
        self.last_archive_dir = str(Path(save_path).parent)
        self._save_settings()

        entries = archive_entries_for(self.results)
        compression = compression_method(
            self.compression_by_label.get(self.compression_var.get(), DEFAULT_COMPRESSION)
        )
        self._log(ui.LOG_ARCHIVE_STARTED.format(count=len(entries), path=save_path))
        self._start_worker(
            self._run_archive_worker,
            total=len(entries),
            status=ui.STATUS_ARCHIVING,
            kwargs={"entries": entries, "destination": save_path, "compression": compression},
        )

    def _run_archive_worker(self, entries, destination: str, compression: int) -> None:
        try:
            entry_names = build_archive(
                entries,
                destination,
                compression=compression,
                session_logger=self.session_logger,
            )
            self.ui_queue.put(("archive_done", destination, entry_names))
        except SourceUnreadableError as exc:
            self.ui_queue.put(("archive_source_error", exc.source_path, str(exc.cause)))
        except ArchiveError as exc:
            self.ui_queue.put(("archive_write_error", destination, str(exc)))
        except Exception as exc:
            self.ui_queue.put(("error", str(exc)))

    def _export_list(self) -> None:
        if self.is_running:
            return
        if not self.results:
            messagebox.showerror(ui.TITLE_MISSING_DATA, ui.MSG_NOTHING_TO_ARCHIVE)
            return
        export_path = filedialog.asksaveasfilename(
            title=ui.FILE_DIALOG_EXPORT_LIST,
            defaultextension=f".{self.export_format}",
            filetypes=EXPORT_DIALOG_TYPES,
            initialdir=self.last_archive_dir or str(Path.home()),
            initialfile=ui.DEFAULT_EXPORT_NAME,
        )
        if not export_path:
            return
        try:
            written = export_results(
                self.results,
                export_path,
                total_seconds=self.last_batch_seconds,
            )
        except (OSError, ValueError) as exc:
            message = ui.MSG_EXPORT_FAILED.format(error=str(exc))
            self._log(message, level="ERROR")
            messagebox.showerror(ui.TITLE_EXPORT, message)
            return
        self.export_format = written.suffix.lstrip(".").lower() or self.export_format
        self._save_settings()
        self._log(ui.LOG_EXPORT_SAVED.format(path=written))
        messagebox.showinfo(ui.TITLE_EXPORT, ui.MSG_EXPORT_SAVED.format(path=written))

    def _open_log_file(self) -> None:
        log_path = self.session_logger.log_path
        if log_path is None or not log_path.is_file():
            messagebox.showerror(ui.TITLE_LOG, ui.MSG_NO_LOG_FILE)
            return
        try:
            if os.name == "nt":
                os.startfile(str(log_path))  # type: ignore[attr-defined]
            else:
                subprocess.Popen(["xdg-open", str(log_path)])
            self._log(ui.LOG_OPENED_LOG_FILE.format(path=log_path))
        except OSError as exc:
            message = ui.LOG_FAILED_OPEN_LOG_FILE.format(error=str(exc))
            self._log(message, level="ERROR")
            messagebox.showerror(ui.TITLE_LOG, message)

    # Worker events

    def _process_queue(self) -> None:
        while True:
            try:
                event = self.ui_queue.get_nowait()
            except queue.Empty:
                break

            kind = event[0]
            if kind == "item_done":
                _, index, total, translated_file = event
                self._on_item_done(index, total, translated_file)
            elif kind == "batch_done":
                _, results, total_seconds = event
                self._on_batch_done(results, total_seconds)
            elif kind == "archive_done":
                _, destination, entry_names = event
                self.progress_var.set(100.0)
                self.status_var.set(ui.STATUS_FINISHED)
                self._log(
                    ui.LOG_ARCHIVE_SAVED.format(path=destination),
                    context={"entries": entry_names},
                )
                self._set_running_state(False)
                messagebox.showinfo(ui.TITLE_ARCHIVE, ui.MSG_ARCHIVE_SAVED.format(path=destination))
            elif kind == "archive_source_error":
                _, source_path, error_text = event
                self._on_archive_failed(
                    ui.MSG_ARCHIVE_SOURCE_UNREADABLE.format(path=source_path, error=error_text)
                )
            elif kind == "archive_write_error":
                _, destination, error_text = event
                self._on_archive_failed(
                    ui.MSG_ARCHIVE_WRITE_FAILED.format(path=destination, error=error_text)
                )
            elif kind == "error":
                error_text = event[1]
                self.status_var.set(ui.STATUS_ERROR)
                self._log(ui.LOG_ERROR.format(error=error_text), level="ERROR")
                self._set_running_state(False)
                messagebox.showerror(ui.TITLE_ERROR, error_text)

        if self.worker_thread and self.worker_thread.is_alive():
            self.root.after(120, self._process_queue)
        elif not self.ui_queue.empty():
            self.root.after(0, self._process_queue)

    def _on_item_done(self, index: int, total: int, translated_file: TranslatedFile) -> None:
        self._show_result_row(index, translated_file)
        if self.progress is not None:
            self.progress.advance()
            self.progress_var.set(self.progress.percent)
            self.status_var.set(self.progress.status_line())

        outcome = translated_file.outcome
        if isinstance(outcome, Translated) and outcome.skipped:
            self._log(
                ui.LOG_ITEM_SKIPPED.format(
                    index=index + 1, total=total, original=translated_file.original_name
                )
            )
        elif isinstance(outcome, Translated):
            self._log(
                ui.LOG_ITEM_TRANSLATED.format(
                    index=index + 1,
                    total=total,
                    original=translated_file.original_name,
                    translated=outcome.name,
                )
            )
        elif isinstance(outcome, Failed):
            self._log(
                ui.LOG_ITEM_FAILED.format(
                    index=index + 1,
                    total=total,
                    original=translated_file.original_name,
                    kind=outcome.kind,
                    error=outcome.message,
                ),
                level="WARNING",
            )

    def _on_batch_done(self, results: list[TranslatedFile], total_seconds: float) -> None:
        self.results = results
        self.last_batch_seconds = total_seconds
        for index, translated_file in enumerate(results):
            self._show_result_row(index, translated_file)
        summary = summarize_batch(results, total_seconds)
        self.progress_var.set(100.0)
        self._log(
            ui.LOG_BATCH_FINISHED.format(
                success=summary.translated_items,
                skipped=summary.skipped_items,
                failed=summary.failed_items,
            ),
            context=asdict(summary),
        )
        self._set_running_state(False)

        message = ui.MSG_TRANSLATED_SUMMARY.format(
            success=summary.translated_items,
            skipped=summary.skipped_items,
            failed=summary.failed_items,
        )
        if summary.failed_items == 0:
            self.status_var.set(ui.STATUS_FINISHED)
            messagebox.showinfo(ui.TITLE_DONE, message)
        else:
            if summary.failed_items == summary.total_items:
                self.status_var.set(ui.STATUS_FAILED)
            else:
                self.status_var.set(ui.STATUS_FINISHED_WITH_ERRORS)
            messagebox.showwarning(ui.TITLE_FINISHED_WITH_ERRORS, message)

    def _on_archive_failed(self, message: str) -> None:
        self.status_var.set(ui.STATUS_ERROR)
        self._log(ui.LOG_ARCHIVE_FAILED.format(error=message), level="ERROR")
        self._set_running_state(False)
        messagebox.showerror(ui.TITLE_ARCHIVE_FAILED, message)

    def _update_output_buttons_state(self) -> None:
        if self.is_running or not self.results:
            state = tk.DISABLED
        else:
            state = tk.NORMAL
        self.save_archive_button.configure(state=state)
        self.export_list_button.configure(state=state)
        has_failures = any(not item.is_translated for item in self.results)
        retry_state = tk.NORMAL if has_failures and not self.is_running else tk.DISABLED
        self.retry_failed_button.configure(state=retry_state)

    def _set_running_state(self, running: bool) -> None:
        self.is_running = running
        state = tk.DISABLED if running else tk.NORMAL
        combo_state = tk.DISABLED if running else "readonly"
        self.translate_button.configure(state=state)
        self.cancel_button.configure(state=tk.NORMAL if running else tk.DISABLED)
        for widget in (
            self.add_files_button,
            self.remove_files_button,
            self.move_up_button,
            self.move_down_button,
            self.clear_files_button,
            self.files_listbox,
            self.workers_spin,
            self.timeout_entry,
            self.clear_log_button,
        ):
            widget.configure(state=state)
        for combo in (
            self.source_language_combo,
            self.target_language_combo,
            self.compression_combo,
        ):
            combo.configure(state=combo_state)
        self._update_output_buttons_state()

    def _clear_log(self) -> None:
        self.log_text.configure(state=tk.NORMAL)
        self.log_text.delete("1.0", tk.END)
        self.log_text.configure(state=tk.DISABLED)

    def _log(
        self,
        message: str,
        level: str = "INFO",
        context: dict[str, object] | None = None,
    ) -> None:
        timestamp = time.strftime("%H:%M:%S")
        self.log_text.configure(state=tk.NORMAL)
        self.log_text.insert(tk.END, f"[{timestamp}] {message}\n")
        self.log_text.see(tk.END)
        self.log_text.configure(state=tk.DISABLED)
        payload: dict[str, object] = {"status": self.status_var.get()}
        if context:
            payload.update(context)
        self.session_logger.log(level=level, message=message, context=payload)

    def _drain_ui_events(self) -> None:
        while True:
            try:
                self.ui_queue.get_nowait()
            except queue.Empty:
                break

    def _on_close(self) -> None:
        if self.worker_thread and self.worker_thread.is_alive():
            should_close = messagebox.askyesno(ui.TITLE_EXIT, ui.MSG_EXIT_WHILE_RUNNING)
            if not should_close:
                return
            self.cancel_event.set()
        self._save_settings()
        self.root.destroy()

    def run(self) -> None:
        self.root.mainloop()


def launch_app(env_report: RuntimeEnvReport | None = None) -> None:
    app = FileNameTranslatorApp(env_report=env_report)
    app.run()
