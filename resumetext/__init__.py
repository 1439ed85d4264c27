"""Dependency-free résumé text extraction for PDF and DOCX uploads."""

from __future__ import annotations

from .core.model import ExtractedText, RawDocument, StreamKind, StreamRecord, TextFragment
from .core.options import ExtractionOptions
from .core.utils import Diagnostic, ExtractionLog
from .docx import DocxExtractor
from .exceptions import (
    ExtractorRegistrationError,
    ResumeTextError,
    UnknownExtractorError,
    UnreadableDocumentError,
)
from .extractor import ExtractionState, Extractor, extract_file, extract_text
from .pdf import PdfTextPipeline, locate_streams

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "DocxExtractor",
    "ExtractedText",
    "ExtractionLog",
    "ExtractionOptions",
    "ExtractionState",
    "Extractor",
    "ExtractorRegistrationError",
    "PdfTextPipeline",
    "RawDocument",
    "ResumeTextError",
    "StreamKind",
    "StreamRecord",
    "TextFragment",
    "UnknownExtractorError",
    "UnreadableDocumentError",
    "extract_file",
    "extract_text",
    "locate_streams",
]
