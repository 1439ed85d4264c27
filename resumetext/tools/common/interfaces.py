"""Core interfaces and context objects shared by format extractors."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...core.model import ExtractedText, RawDocument
from ...core.options import ExtractionOptions
from ...core.utils import ExtractionLog


@dataclass
class ExtractionContext:
    """Holds the state of one extraction call."""

    document: RawDocument
    options: ExtractionOptions = field(default_factory=ExtractionOptions)
    log: ExtractionLog = field(default_factory=ExtractionLog)


class BaseExtractor:
    """Base class for all pluggable format extractors."""

    name: str
    suffixes: tuple[str, ...] = ()

    def __init__(self, context: ExtractionContext) -> None:
        self.context = context

    def result(self, text: str, **details: object) -> ExtractedText:
        return ExtractedText(
            text=text,
            source=self.name,
            prompt_char_limit=self.context.options.prompt_char_limit,
            **details,  # type: ignore[arg-type]
        )

    def run(self) -> ExtractedText:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError
