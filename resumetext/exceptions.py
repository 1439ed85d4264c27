"""Custom exceptions raised by :mod:`resumetext`."""

from __future__ import annotations

DEFAULT_UNREADABLE_MESSAGE = (
    "Could not extract readable text from this file. "
    "The PDF may be image-based (scanned). Please upload a text-based PDF or DOCX file."
)


class ResumeTextError(Exception):
    """Base exception for all errors raised by :mod:`resumetext`."""


class UnreadableDocumentError(ResumeTextError):
    """Raised when a document yields too little text to be worth parsing."""

    def __init__(
        self,
        filename: str | None = None,
        *,
        extracted_length: int = 0,
        min_length: int | None = None,
        message: str | None = None,
    ) -> None:
        self.filename = filename
        self.extracted_length = extracted_length
        self.min_length = min_length
        self.message = message or DEFAULT_UNREADABLE_MESSAGE
        super().__init__(self.message)


class ExtractorRegistrationError(ResumeTextError, ValueError):
    """Raised when two extractors claim the same name."""


class UnknownExtractorError(ResumeTextError, KeyError):
    """Raised when an extractor name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Extractor '{name}' is not registered")

    def __str__(self) -> str:
        return self.args[0]
