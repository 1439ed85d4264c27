"""Shared models, options and diagnostics for resumetext."""

from __future__ import annotations

from .model import ExtractedText, RawDocument, StreamKind, StreamRecord, TextFragment
from .options import ExtractionOptions
from .utils import Diagnostic, ExtractionLog, get_logger

__all__ = [
    "Diagnostic",
    "ExtractedText",
    "ExtractionLog",
    "ExtractionOptions",
    "RawDocument",
    "StreamKind",
    "StreamRecord",
    "TextFragment",
    "get_logger",
]
