"""DOCX paragraph text extraction."""

from __future__ import annotations

from .extractor import DOCUMENT_PART, DocxExtractor, decode_plain_text, paragraph_texts

__all__ = ["DOCUMENT_PART", "DocxExtractor", "decode_plain_text", "paragraph_texts"]
