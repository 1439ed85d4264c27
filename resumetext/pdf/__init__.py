"""Dependency-free PDF text extraction."""

from __future__ import annotations

from .assembler import AssembledText, TextAssembler, repair_glued_words
from .fallback import FallbackScanner, scan_printable_runs
from .inflate import Inflator, inflate
from .locator import StreamLocator, classify_dictionary, locate_streams
from .pipeline import PdfExtraction, PdfTextPipeline, extract_pdf_text
from .tokenizer import ContentTokenizer, decode_content, decode_hex, decode_literal, tokenize_content

__all__ = [
    "AssembledText",
    "ContentTokenizer",
    "FallbackScanner",
    "Inflator",
    "PdfExtraction",
    "PdfTextPipeline",
    "StreamLocator",
    "TextAssembler",
    "classify_dictionary",
    "decode_content",
    "decode_hex",
    "decode_literal",
    "extract_pdf_text",
    "inflate",
    "locate_streams",
    "repair_glued_words",
    "scan_printable_runs",
    "tokenize_content",
]
