from __future__ import annotations

from ui_strings import (
    APP_TITLE,
    ARCHIVE_DIALOG_TYPES_UI,
    COMPRESSION_OPTIONS_UI,
    EXPORT_DIALOG_TYPES_UI,
    INPUT_FILE_DIALOG_TYPES_UI,
    SOURCE_LANGUAGE_OPTIONS_UI,
    TARGET_LANGUAGE_OPTIONS_UI,
)

API_KEY_ENV_VAR = "QWEN_API_KEY"
ENDPOINT_ENV_VAR = "NAME_TRANSLATOR_ENDPOINT"
MODEL_ENV_VAR = "NAME_TRANSLATOR_MODEL"

DEFAULT_ENDPOINT = (
    "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
)
DEFAULT_MODEL = "qwen-max"
DEFAULT_SOURCE_LANGUAGE = "auto"
DEFAULT_TARGET_LANGUAGE = "en"
DEFAULT_MAX_WORKERS = 4
MAX_WORKERS_LIMIT = 16
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_COMPRESSION = "stored"
DEFAULT_EXPORT_FORMAT = "json"

# Languages the detector chooses between, on top of the target language.
DETECTION_LANGUAGES = ("en", "zh", "ja", "ko")

LANGUAGE_NAMES = {
    "en": "English",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "ru": "Russian",
    "pl": "Polish",
}

SOURCE_LANGUAGE_OPTIONS = SOURCE_LANGUAGE_OPTIONS_UI

TARGET_LANGUAGE_OPTIONS = TARGET_LANGUAGE_OPTIONS_UI

COMPRESSION_OPTIONS = COMPRESSION_OPTIONS_UI

INPUT_FILE_DIALOG_TYPES = INPUT_FILE_DIALOG_TYPES_UI

ARCHIVE_DIALOG_TYPES = ARCHIVE_DIALOG_TYPES_UI

EXPORT_DIALOG_TYPES = EXPORT_DIALOG_TYPES_UI

LOG_DIR_NAME = "file-name-translator"
