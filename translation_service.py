from __future__ import annotations

import json
import time
from typing import Any, Callable, Optional

import requests

from config import (
    DEFAULT_ENDPOINT,
    DEFAULT_MODEL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    LANGUAGE_NAMES,
)
from logging_service import SessionLogger
from models import (
    FAILURE_CONFIGURATION,
    FAILURE_INVALID_INPUT,
    FAILURE_MALFORMED,
    FAILURE_NETWORK,
    FAILURE_SERVICE,
    FAILURE_TIMEOUT,
    FAILURE_UNEXPECTED,
    Failed,
    Translated,
    TranslationOutcome,
)
from naming import compose_translated_name, split_extension

LanguageDetectorFn = Callable[[str], Optional[str]]

SYSTEM_PROMPT_TEMPLATE = (
    "You are a translator. Translate the following file name from {source} to {target}. "
    "Only respond with the translation, no explanations or additional text."
)
AUTO_SOURCE_DESCRIPTION = "the detected language"
_READ_CHUNK_BYTES = 1


class TranslationError(Exception):
    def __init__(self, kind: str, message: str) -> None:
        super().__init__(message)
        self.kind = kind

    def to_outcome(self) -> Failed:
        return Failed(kind=self.kind, message=str(self))


def _language_label(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)


def build_system_prompt(source_lang: str, target_lang: str) -> str:
    if not source_lang or source_lang == "auto":
        source = AUTO_SOURCE_DESCRIPTION
    else:
        source = _language_label(source_lang)
    return SYSTEM_PROMPT_TEMPLATE.format(source=source, target=_language_label(target_lang))


def build_request_payload(text: str, model: str, source_lang: str, target_lang: str) -> dict[str, Any]:
    return {
        "model": model,
        "input": {
            "messages": [
                {"role": "system", "content": build_system_prompt(source_lang, target_lang)},
                {"role": "user", "content": text},
            ]
        },
        "parameters": {"result_format": "text"},
    }


def _error_message_from_body(raw_body: bytes) -> str:
    try:
        body = json.loads(raw_body)
    except ValueError:
        return ""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str):
            return message
    return ""


def parse_response_text(body: Any) -> str:
    """Pull ``output.text`` out of a decoded service response.

    Raises TranslationError for any shape the client cannot trust.
    """
    if not isinstance(body, dict):
        raise TranslationError(FAILURE_MALFORMED, "Response body is not a JSON object.")

    code = body.get("code")
    if code not in (None, "", "200", 200):
        message = body.get("message") or "no message"
        raise TranslationError(FAILURE_SERVICE, f"API Error {code}: {message}")

    output = body.get("output")
    if not isinstance(output, dict):
        raise TranslationError(FAILURE_MALFORMED, "Response is missing the 'output' object.")

    text = output.get("text")
    if not isinstance(text, str):
        raise TranslationError(FAILURE_MALFORMED, "Response is missing 'output.text'.")
    if not text.strip():
        raise TranslationError(FAILURE_MALFORMED, "Response 'output.text' is empty.")
    return text


class TranslationClient:
    """Translates one file name at a time through the remote text-generation service."""

    def __init__(
        self,
        api_key: str | None,
        *,
        source_lang: str = DEFAULT_SOURCE_LANGUAGE,
        target_lang: str = DEFAULT_TARGET_LANGUAGE,
        model: str = DEFAULT_MODEL,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        session_logger: SessionLogger | None = None,
        language_detector: LanguageDetectorFn | None = None,
    ) -> None:
        self.api_key = (api_key or "").strip()
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.model = model
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self.session = session if session is not None else requests.Session()
        self.session_logger = session_logger
        self.language_detector = language_detector

    def _log(self, level: str, message: str, context: dict[str, Any]) -> None:
        if self.session_logger is not None:
            self.session_logger.log(level, message, context)

    def _read_body(self, response: Any, deadline: float, text: str) -> bytes:
        """Read the whole response body, failing once the request deadline passes.

        Reads are small so a body that trickles in is caught close to the
        deadline instead of after the last byte.
        """
        too_slow = f"Response for '{text}' took longer than {self.timeout_seconds}s."
        chunks: list[bytes] = []
        try:
            if time.perf_counter() > deadline:
                raise TranslationError(FAILURE_TIMEOUT, too_slow)
            for chunk in response.iter_content(chunk_size=_READ_CHUNK_BYTES):
                if time.perf_counter() > deadline:
                    raise TranslationError(FAILURE_TIMEOUT, too_slow)
                chunks.append(chunk)
        except requests.exceptions.RequestException as exc:
            # requests reports a read timeout while streaming as ConnectionError.
            if isinstance(exc, requests.exceptions.Timeout) or time.perf_counter() >= deadline:
                raise TranslationError(FAILURE_TIMEOUT, too_slow) from exc
            raise TranslationError(
                FAILURE_NETWORK,
                f"Reading the response failed for '{text}': {exc}",
            ) from exc
        finally:
            response.close()
        return b"".join(chunks)

    def request_translation(self, text: str) -> str:
        if not self.api_key:
            raise TranslationError(FAILURE_CONFIGURATION, "Translation API key is not configured.")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = build_request_payload(text, self.model, self.source_lang, self.target_lang)
        deadline = time.perf_counter() + self.timeout_seconds

        try:
            response = self.session.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout_seconds,
                stream=True,
            )
        except requests.exceptions.Timeout as exc:
            raise TranslationError(
                FAILURE_TIMEOUT,
                f"No response within {self.timeout_seconds}s for '{text}'.",
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TranslationError(FAILURE_NETWORK, f"Request failed for '{text}': {exc}") from exc

        raw_body = self._read_body(response, deadline, text)

        if response.status_code >= 400:
            detail = _error_message_from_body(raw_body) or response.reason or "no details"
            raise TranslationError(
                FAILURE_SERVICE,
                f"Service returned HTTP {response.status_code} for '{text}': {detail}",
            )

        try:
            body = json.loads(raw_body)
        except ValueError as exc:
            raise TranslationError(
                FAILURE_MALFORMED,
                f"Failed to parse API response for '{text}': {exc}",
            ) from exc

        return parse_response_text(body)

    def _already_in_target_language(self, stem: str) -> bool:
        if self.language_detector is None:
            return False
        detected = self.language_detector(stem)
        self._log("DEBUG", "Detected language", {"text": stem, "language": detected})
        return detected is not None and detected == self.target_lang

    def translate(self, name: str) -> TranslationOutcome:
        started_at = time.perf_counter()
        self._log("INFO", "Attempting to translate file name", {"name": name})

        try:
            outcome = self._translate(name)
        except TranslationError as exc:
            outcome = exc.to_outcome()
        except Exception as exc:
            outcome = Failed(kind=FAILURE_UNEXPECTED, message=f"{type(exc).__name__}: {exc}")

        context: dict[str, Any] = {
            "name": name,
            "elapsed_seconds": round(max(0.0, time.perf_counter() - started_at), 4),
        }
        if isinstance(outcome, Translated):
            context.update({"result": outcome.name, "skipped": outcome.skipped})
            self._log("INFO", "Translated file name", context)
        else:
            context.update({"failure_kind": outcome.kind, "error": outcome.message})
            self._log("ERROR", "Translation failed", context)
        return outcome

    def _translate(self, name: str) -> Translated:
        if not name or not name.strip():
            raise TranslationError(FAILURE_INVALID_INPUT, "File name is empty.")

        stem, ext = split_extension(name)
        if self._already_in_target_language(stem):
            return Translated(name=name, skipped=True)

        translated_stem = self.request_translation(stem)
        return Translated(name=compose_translated_name(translated_stem, ext))

    def close(self) -> None:
        self.session.close()
