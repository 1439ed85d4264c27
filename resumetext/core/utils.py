"""Logging and diagnostics helpers shared by resumetext components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path

__all__ = ["Diagnostic", "ExtractionLog", "get_logger", "resolve_path"]


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


class Diagnostic(str, Enum):
    """Kinds of events recorded while extracting a single document."""

    STREAM_LOCATED = "stream-located"
    STRUCTURAL_SKIP = "structural-skip"
    DECOMPRESSION_FAILURE = "decompression-failure"
    THIN_EXTRACTION = "thin-extraction"
    FALLBACK_SELECTED = "fallback-selected"
    UNSUPPORTED_ENCODING = "unsupported-encoding"
    UNREADABLE_DOCUMENT = "unreadable-document"
    STATE = "state"
    SUMMARY = "summary"


_LEVELS: dict[Diagnostic, int] = {
    Diagnostic.STREAM_LOCATED: logging.DEBUG,
    Diagnostic.STRUCTURAL_SKIP: logging.DEBUG,
    Diagnostic.DECOMPRESSION_FAILURE: logging.DEBUG,
    Diagnostic.THIN_EXTRACTION: logging.WARNING,
    Diagnostic.FALLBACK_SELECTED: logging.INFO,
    Diagnostic.UNSUPPORTED_ENCODING: logging.WARNING,
    Diagnostic.UNREADABLE_DOCUMENT: logging.WARNING,
    Diagnostic.STATE: logging.DEBUG,
    Diagnostic.SUMMARY: logging.INFO,
}


@dataclass(slots=True)
class ExtractionLog:
    """Collects diagnostics for one extraction and mirrors them to ``logger``.

    A fresh log is created for every extraction unless the caller injects
    one, so records never leak between documents.
    """

    logger: logging.Logger = field(default_factory=lambda: get_logger("resumetext"))
    records: list[tuple[Diagnostic, str]] = field(default_factory=list)

    def record(self, kind: Diagnostic, message: str, *args: object) -> None:
        rendered = message % args if args else message
        self.records.append((kind, rendered))
        self.logger.log(_LEVELS.get(kind, logging.INFO), "[%s] %s", kind.value, rendered)

    def kinds(self) -> list[Diagnostic]:
        return [kind for kind, _ in self.records]

    def messages(self, kind: Diagnostic | None = None) -> list[str]:
        return [message for entry, message in self.records if kind is None or entry is kind]

    def count(self, kind: Diagnostic) -> int:
        return sum(1 for entry, _ in self.records if entry is kind)

    def as_tuple(self) -> tuple[tuple[str, str], ...]:
        return tuple((kind.value, message) for kind, message in self.records)
