from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from config import (
    API_KEY_ENV_VAR,
    DEFAULT_ENDPOINT,
    DEFAULT_MODEL,
    ENDPOINT_ENV_VAR,
    MODEL_ENV_VAR,
)

ENV_FILE_NAME = ".env"


@dataclass(frozen=True)
class RuntimeEnvReport:
    env_file: Path | None
    api_key_present: bool
    masked_api_key: str


def _env_file_candidates() -> list[Path]:
    if getattr(sys, "frozen", False):
        base_dir = Path(getattr(sys, "_MEIPASS", Path(sys.executable).resolve().parent))
        return [Path(sys.executable).resolve().parent / ENV_FILE_NAME, base_dir / ENV_FILE_NAME]
    return [Path.cwd() / ENV_FILE_NAME, Path(__file__).resolve().parent / ENV_FILE_NAME]


def mask_secret(secret: str | None) -> str:
    if not secret:
        return ""
    if len(secret) > 4:
        return f"{secret[:4]}..."
    return "***"


def get_api_key() -> str | None:
    value = os.environ.get(API_KEY_ENV_VAR, "").strip()
    return value or None


def get_endpoint() -> str:
    return os.environ.get(ENDPOINT_ENV_VAR, "").strip() or DEFAULT_ENDPOINT


def get_model() -> str:
    return os.environ.get(MODEL_ENV_VAR, "").strip() or DEFAULT_MODEL


def configure_runtime_env() -> RuntimeEnvReport:
    """Load the first ``.env`` found; variables already set in the process win."""
    loaded_from: Path | None = None
    for candidate in _env_file_candidates():
        if not candidate.is_file():
            continue
        try:
            load_dotenv(candidate, override=False)
        except OSError:
            continue
        loaded_from = candidate
        break

    api_key = get_api_key()
    return RuntimeEnvReport(
        env_file=loaded_from,
        api_key_present=api_key is not None,
        masked_api_key=mask_secret(api_key),
    )
