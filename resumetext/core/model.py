"""Shared domain models used across resumetext components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class StreamKind(str, Enum):
    """Classification assigned to every located PDF stream."""

    FLATE_CONTENT = "flate-content"
    RAW_CONTENT = "raw-content"
    IMAGE = "image"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Uploaded bytes plus the file name used to pick an extractor."""

    data: bytes
    filename: str = ""


@dataclass(frozen=True, slots=True)
class StreamRecord:
    """A ``stream ... endstream`` payload located inside a PDF.

    ``start`` and ``end`` delimit the payload bytes (``[start, end)``), with
    the end-of-line marker preceding ``endstream`` already trimmed.
    """

    start: int
    end: int
    dictionary: str
    kind: StreamKind

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_text_candidate(self) -> bool:
        return self.kind in (StreamKind.FLATE_CONTENT, StreamKind.RAW_CONTENT)

    def payload(self, data: bytes) -> bytes:
        return data[self.start : self.end]


@dataclass(frozen=True, slots=True)
class TextFragment:
    text: str
    line_break: bool = False


@dataclass(slots=True)
class ExtractedText:
    """Plain text recovered from one document, ready for the field extractor."""

    text: str
    source: str
    structured_length: int = 0
    fallback_used: bool = False
    stream_count: int = 0
    prompt_char_limit: int | None = None
    records: tuple[tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def length(self) -> int:
        return len(self.text)

    def excerpt(self, limit: int | None = None) -> str:
        """Return the bounded prefix handed to the downstream extractor."""

        bound = limit if limit is not None else self.prompt_char_limit
        if bound is None or bound <= 0:
            return self.text
        return self.text[:bound]

    def as_dict(self, *, limit: int | None = None) -> dict[str, object]:
        return {
            "source": self.source,
            "length": self.length,
            "structured_length": self.structured_length,
            "fallback_used": self.fallback_used,
            "stream_count": self.stream_count,
            "text": self.excerpt(limit),
        }
