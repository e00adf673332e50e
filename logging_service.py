from __future__ import annotations

import json
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from config import LOG_DIR_NAME


def default_log_base_dir() -> Path:
    return Path(tempfile.gettempdir()) / LOG_DIR_NAME


def _prepare_log_path(base_dir: str | Path, session_id: str) -> Path | None:
    try:
        logs_dir = Path(base_dir).expanduser().resolve() / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    return logs_dir / f"session_{session_id}.jsonl"


class SessionLogger:
    """Append-only JSON-lines diagnostic log, one file per session.

    Safe to call from worker threads. Never raises: when the log
    directory cannot be created, ``log_path`` is ``None`` and records are
    dropped.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self._lock = threading.Lock()
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self._log_path = _prepare_log_path(
            default_log_base_dir() if base_dir is None else base_dir,
            session_id,
        )

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def log(self, level: str, message: str, context: dict[str, Any] | None = None) -> None:
        if self._log_path is None:
            return

        # default=str keeps paths and exceptions in the context serializable.
        line = json.dumps(
            {
                "timestamp": datetime.now().astimezone().isoformat(),
                "level": level.upper(),
                "message": message,
                "context": context or {},
            },
            ensure_ascii=False,
            default=str,
        )
        with self._lock:
            try:
                with self._log_path.open("a", encoding="utf-8") as handle:
                    handle.write(line + "\n")
            except OSError:
                return

    def info(self, message: str, **context: Any) -> None:
        self.log("INFO", message, context)

    def error(self, message: str, **context: Any) -> None:
        self.log("ERROR", message, context)
