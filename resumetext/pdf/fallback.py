"""Printable-run scanner used when structured extraction comes up short."""

from __future__ import annotations

import re

from ..core.options import DEFAULT_FALLBACK_MIN_RUN

__all__ = ["FallbackScanner", "PDF_KEYWORDS", "scan_printable_runs"]

PDF_KEYWORDS = frozenset(
    keyword.lower()
    for keyword in (
        "obj",
        "endobj",
        "stream",
        "endstream",
        "xref",
        "trailer",
        "startxref",
        "FlateDecode",
        "Filter",
        "Font",
        "Page",
        "Encoding",
        "Resources",
        "Type",
        "Catalog",
        "MediaBox",
        "Contents",
    )
)

_OBJECT_REFERENCE = re.compile(r"\d+\s+\d+\s+R")
_WHITESPACE = re.compile(r"\s+")


def _run_pattern(min_run: int) -> re.Pattern[str]:
    return re.compile(r"[A-Za-z][A-Za-z0-9@.,:()\-+/\s]{%d,}" % max(min_run - 1, 0))


def _keep(run: str) -> bool:
    stripped = run.strip()
    if len(stripped.split()) < 2:
        return False
    if stripped.lower() in PDF_KEYWORDS:
        return False
    return _OBJECT_REFERENCE.fullmatch(stripped) is None


def scan_printable_runs(data: bytes, *, min_run: int = DEFAULT_FALLBACK_MIN_RUN) -> str:
    """Return the space-joined printable runs found directly in ``data``."""

    return FallbackScanner(min_run).scan(data)


class FallbackScanner:
    def __init__(self, min_run: int = DEFAULT_FALLBACK_MIN_RUN) -> None:
        self.min_run = min_run
        self._pattern = _run_pattern(min_run)

    def scan(self, data: bytes) -> str:
        decoded = data.decode("utf-8", errors="replace")
        runs = [run for run in self._pattern.findall(decoded) if _keep(run)]
        return _WHITESPACE.sub(" ", " ".join(runs)).strip()
