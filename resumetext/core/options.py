"""Configuration for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace
import os

__all__ = ["ExtractionOptions"]


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


DEFAULT_MIN_USABLE_LENGTH = _env_int("RESUMETEXT_MIN_USABLE_LENGTH", 50)
DEFAULT_THIN_TEXT_THRESHOLD = _env_int("RESUMETEXT_THIN_TEXT_THRESHOLD", 300)
DEFAULT_DICTIONARY_WINDOW = _env_int("RESUMETEXT_DICTIONARY_WINDOW", 3000)
DEFAULT_INFLATE_MIN_OUTPUT = 10
DEFAULT_MAX_INFLATED_BYTES = _env_int("RESUMETEXT_MAX_INFLATED_BYTES", 16 * 1024 * 1024)
DEFAULT_MAX_TOTAL_INFLATED_BYTES = _env_int("RESUMETEXT_MAX_TOTAL_INFLATED_BYTES", 64 * 1024 * 1024)
DEFAULT_FALLBACK_MIN_RUN = 4
DEFAULT_PRESERVE_LINE_BREAKS = _env_flag("RESUMETEXT_PRESERVE_LINE_BREAKS", False)
DEFAULT_MAX_WORKERS = _env_int("RESUMETEXT_MAX_WORKERS", 4)
DEFAULT_PROMPT_CHAR_LIMIT = _env_int("RESUMETEXT_PROMPT_CHAR_LIMIT", 20000)


@dataclass(frozen=True, slots=True)
class ExtractionOptions:
    """Thresholds and switches controlling a single extraction."""

    min_usable_length: int = DEFAULT_MIN_USABLE_LENGTH
    thin_text_threshold: int = DEFAULT_THIN_TEXT_THRESHOLD
    dictionary_window: int = DEFAULT_DICTIONARY_WINDOW
    inflate_min_output: int = DEFAULT_INFLATE_MIN_OUTPUT
    max_inflated_bytes: int = DEFAULT_MAX_INFLATED_BYTES
    max_total_inflated_bytes: int = DEFAULT_MAX_TOTAL_INFLATED_BYTES
    fallback_min_run: int = DEFAULT_FALLBACK_MIN_RUN
    preserve_line_breaks: bool = DEFAULT_PRESERVE_LINE_BREAKS
    max_workers: int = DEFAULT_MAX_WORKERS
    prompt_char_limit: int = DEFAULT_PROMPT_CHAR_LIMIT

    def __post_init__(self) -> None:
        if self.dictionary_window < 2:
            raise ValueError("dictionary_window must be at least 2 bytes")
        if self.max_total_inflated_bytes < 1:
            raise ValueError("max_total_inflated_bytes must be at least 1 byte")
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.fallback_min_run < 1:
            raise ValueError("fallback_min_run must be at least 1")

    def with_updates(self, **changes: object) -> "ExtractionOptions":
        updates = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **updates)
