from __future__ import annotations

APP_TITLE = "File Name Translator"

# General UI labels/buttons
LABEL_FILES = "Files"
LABEL_SOURCE_LANGUAGE = "Source language"
LABEL_TARGET_LANGUAGE = "Target language"
LABEL_WORKERS = "Parallel requests"
LABEL_TIMEOUT = "Request timeout (s)"
LABEL_COMPRESSION = "Archive compression"
LABEL_RESULTS = "Translation results"
LOG_PANEL_TITLE = "Log"

COLUMN_ORIGINAL = "Original name"
COLUMN_TRANSLATED = "Translated name"
COLUMN_STATUS = "Status"

BUTTON_ADD_FILES = "Add files..."
BUTTON_REMOVE_SELECTED = "Remove selected"
BUTTON_CLEAR_FILES = "Clear"
BUTTON_MOVE_UP = "Move up"
BUTTON_MOVE_DOWN = "Move down"
BUTTON_TRANSLATE = "Translate"
BUTTON_CANCEL = "Cancel"
BUTTON_RETRY_FAILED = "Retry failed"
BUTTON_SAVE_ARCHIVE = "Save archive..."
BUTTON_EXPORT_LIST = "Export list..."
BUTTON_VIEW_LOG = "View log"
BUTTON_CLEAR_LOG = "Clear log"

# Dialog titles
TITLE_MISSING_DATA = "Missing data"
TITLE_VALIDATION_ERROR = "Validation error"
TITLE_DONE = "Done"
TITLE_FINISHED_WITH_ERRORS = "Finished with errors"
TITLE_ARCHIVE = "Archive"
TITLE_ARCHIVE_FAILED = "Archive failed"
TITLE_EXPORT = "Export"
TITLE_LOG = "Log"
TITLE_ERROR = "Error"
TITLE_EXIT = "Exit"

# Dialog messages
MSG_ADD_FILES_FIRST = "Add files to translate first."
MSG_NOTHING_TO_ARCHIVE = "Translate some files before saving an archive."
MSG_NO_FAILED_ITEMS = "No failed translations to retry."
MSG_WORKERS_RANGE = "Parallel requests must be an integer between 1 and {limit}."
MSG_TIMEOUT_POSITIVE = "Request timeout must be a positive number."
MSG_MISSING_API_KEY = (
    "The {env_var} environment variable is not set. "
    "Every translation will fail until it is configured (a .env file works too)."
)
MSG_TRANSLATED_SUMMARY = "Translated: {success}\nKept original name: {skipped}\nFailed: {failed}"
MSG_ARCHIVE_SAVED = "Archive saved:\n{path}"
MSG_ARCHIVE_SOURCE_UNREADABLE = (
    "Could not read source file:\n{path}\n\n{error}\n\nNo archive was written. Fix the file and try again."
)
MSG_ARCHIVE_WRITE_FAILED = (
    "Could not write archive:\n{path}\n\n{error}\n\nNo archive was written. Try another location."
)
MSG_EXPORT_SAVED = "List exported:\n{path}"
MSG_EXPORT_FAILED = "Could not export list: {error}"
MSG_NO_LOG_FILE = "No log file is available for this session."
MSG_EXIT_WHILE_RUNNING = "A task is still running. Exit and cancel it?"

# File dialog titles
FILE_DIALOG_SELECT_FILES = "Select files to translate"
FILE_DIALOG_SAVE_ARCHIVE = "Save translated files as"
FILE_DIALOG_EXPORT_LIST = "Export translation list"
DEFAULT_ARCHIVE_NAME = "translated_files.zip"
DEFAULT_EXPORT_NAME = "translated_files"

# Status values
STATUS_READY = "Ready"
STATUS_TRANSLATING = "Translating"
STATUS_ARCHIVING = "Writing archive"
STATUS_RETRYING = "Retrying"
STATUS_FINISHED = "Finished"
STATUS_FINISHED_WITH_ERRORS = "Finished with errors"
STATUS_FAILED = "Failed"
STATUS_CANCELLING = "Cancelling..."
STATUS_ERROR = "Error"

# Per-item result labels
RESULT_PENDING = "Pending"
RESULT_TRANSLATED = "Translated"
RESULT_ALREADY_TARGET = "Already in target language"
RESULT_FAILED_TEMPLATE = "Translation failed ({kind})"

# Logs/messages templates
LOG_SESSION_FILE = "Session log file: {path}"
LOG_ENV_LOADED = "Loaded environment file: {path}"
LOG_ENV_NOT_FOUND = "No .env file found; using process environment."
LOG_API_KEY_FOUND = "{env_var} found: {masked}"
LOG_API_KEY_MISSING = "{env_var} is not set."
LOG_FILES_ADDED = "Files added: {added}, skipped: {skipped}."
LOG_REMOVED_SELECTED = "Removed {count} selected file(s)."
LOG_FILES_CLEARED = "File list cleared."
LOG_MOVED_UP = "Moved selected file(s) up."
LOG_MOVED_DOWN = "Moved selected file(s) down."
LOG_TRANSLATION_STARTED = "Translation started for {count} file(s) with {workers} parallel request(s)."
LOG_RETRY_STARTED = "Retrying {count} failed translation(s)."
LOG_ITEM_TRANSLATED = "[{index}/{total}] {original} -> {translated}"
LOG_ITEM_SKIPPED = "[{index}/{total}] {original} already in target language"
LOG_ITEM_FAILED = "[{index}/{total}] {original}: translation failed ({kind}) {error}"
LOG_BATCH_FINISHED = "Batch finished. Translated: {success}, kept: {skipped}, failed: {failed}."
LOG_ARCHIVE_STARTED = "Writing {count} file(s) to {path}"
LOG_ARCHIVE_SAVED = "Archive saved: {path}"
LOG_ARCHIVE_FAILED = "Archive failed: {error}"
LOG_EXPORT_SAVED = "Exported list: {path}"
LOG_CANCELLATION_REQUESTED = "Cancellation requested; in-flight requests will finish."
LOG_OPENED_LOG_FILE = "Opened log file: {path}"
LOG_FAILED_OPEN_LOG_FILE = "Failed to open log file: {error}"
LOG_ERROR = "Error: {error}"

# Status templates
FILES_STATUS_TEMPLATE = "{count} files selected"

# Config-backed UI option labels
SOURCE_LANGUAGE_OPTIONS_UI = [
    ("Auto detect", "auto"),
    ("Chinese", "zh"),
    ("Japanese", "ja"),
    ("Korean", "ko"),
    ("English", "en"),
    ("Russian", "ru"),
]

TARGET_LANGUAGE_OPTIONS_UI = [
    ("English", "en"),
    ("Chinese", "zh"),
    ("Japanese", "ja"),
    ("Korean", "ko"),
    ("Deutsch", "de"),
    ("Francais", "fr"),
    ("Espanol", "es"),
    ("Italiano", "it"),
    ("Polski", "pl"),
    ("Russian", "ru"),
]

COMPRESSION_OPTIONS_UI = [
    ("Store (fast)", "stored"),
    ("Deflate (smaller)", "deflated"),
]

INPUT_FILE_DIALOG_TYPES_UI = [
    ("Image files", "*.png *.jpg *.jpeg *.gif *.webp *.bmp"),
    ("All files", "*.*"),
]

ARCHIVE_DIALOG_TYPES_UI = [
    ("ZIP archive", "*.zip"),
]

EXPORT_DIALOG_TYPES_UI = [
    ("JSON", "*.json"),
    ("CSV", "*.csv"),
]
