from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from config import (
    DEFAULT_COMPRESSION,
    DEFAULT_EXPORT_FORMAT,
    DEFAULT_MAX_WORKERS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
)

SETTINGS_FILE_NAME = "settings.json"
SETTINGS_VERSION = 1
APP_DIR_NAME = "NameTranslator"
CONFIG_DIR_ENV_VAR = "NAME_TRANSLATOR_CONFIG_DIR"

# Secrets live in the environment only.
NEVER_PERSISTED_KEYS = {"api_key"}

DEFAULT_SETTINGS: dict[str, Any] = {
    "source_language": DEFAULT_SOURCE_LANGUAGE,
    "target_language": DEFAULT_TARGET_LANGUAGE,
    "max_workers": DEFAULT_MAX_WORKERS,
    "request_timeout_seconds": DEFAULT_REQUEST_TIMEOUT_SECONDS,
    "compression": DEFAULT_COMPRESSION,
    "export_format": DEFAULT_EXPORT_FORMAT,
    "last_input_dir": "",
    "last_archive_dir": "",
}


def _resolve_settings_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / APP_DIR_NAME
        return Path.home() / "AppData" / "Roaming" / APP_DIR_NAME

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / "name-translator"
    return Path.home() / ".config" / "name-translator"


def get_settings_path() -> Path:
    return _resolve_settings_dir() / SETTINGS_FILE_NAME


def _coerce(value: Any, default: Any) -> tuple[bool, Any]:
    if default is None:
        return True, value
    if isinstance(default, bool):
        return (True, value) if isinstance(value, bool) else (False, None)
    if isinstance(default, int):
        if isinstance(value, bool):
            return False, None
        if isinstance(value, int):
            return True, value
        if isinstance(value, float) and value.is_integer():
            return True, int(value)
        return False, None
    if isinstance(default, float):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return True, float(value)
        return False, None
    if isinstance(default, str):
        return (True, value) if isinstance(value, str) else (False, None)
    return True, value


def load_app_settings(defaults: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge saved settings over ``defaults``.

    A saved value whose type does not match its default is ignored, so a
    hand-edited file cannot break the UI.
    """
    base = DEFAULT_SETTINGS if defaults is None else defaults
    result: dict[str, Any] = dict(base)
    settings_path = get_settings_path()
    if not settings_path.is_file():
        return result

    try:
        payload = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return result

    if not isinstance(payload, dict):
        return result

    raw_settings = payload.get("settings")
    if not isinstance(raw_settings, dict):
        return result

    for key, value in raw_settings.items():
        if key in NEVER_PERSISTED_KEYS:
            continue
        ok, coerced = _coerce(value, base.get(key))
        if ok:
            result[key] = coerced
    return result


def save_app_settings(settings: dict[str, Any]) -> bool:
    settings_path = get_settings_path()
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "version": SETTINGS_VERSION,
            "settings": {
                key: value
                for key, value in settings.items()
                if key not in NEVER_PERSISTED_KEYS
            },
        }
        settings_path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        return True
    except OSError:
        return False
