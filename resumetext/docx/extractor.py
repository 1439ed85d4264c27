"""Paragraph text extraction from DOCX packages."""

from __future__ import annotations

from io import BytesIO
from typing import Iterable
from xml.etree.ElementTree import Element, ParseError, fromstring
from zipfile import BadZipFile, ZipFile
import zlib

from ..core.options import ExtractionOptions
from ..core.utils import Diagnostic, ExtractionLog
from ..pdf.fallback import FallbackScanner

__all__ = ["DOCUMENT_PART", "DocxExtractor", "decode_plain_text", "paragraph_texts"]

ZIP_MAGIC = b"PK"
DOCUMENT_PART = "word/document.xml"
WORDPROCESSING_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

_W = f"{{{WORDPROCESSING_NS}}}"
_BODY = f"{_W}body"
_PARAGRAPH = f"{_W}p"
_TEXT = f"{_W}t"
_TAB = f"{_W}tab"
_BREAKS = frozenset({f"{_W}br", f"{_W}cr"})

# zipfile errors for damaged packages that still carry the PK signature.
_ARCHIVE_ERRORS = (
    BadZipFile,
    NotImplementedError,
    RuntimeError,
    ValueError,
    EOFError,
    OSError,
    zlib.error,
)


def decode_plain_text(data: bytes) -> str:
    return data.decode("utf-8-sig", errors="replace")


def _collect(element: Element, paragraphs: list[str], current: list[str] | None) -> None:
    for child in element:
        tag = child.tag
        if tag == _PARAGRAPH:
            runs: list[str] = []
            _collect(child, paragraphs, runs)
            paragraphs.append("".join(runs))
        elif current is None:
            _collect(child, paragraphs, None)
        elif tag == _TEXT:
            current.append(child.text or "")
        elif tag == _TAB:
            current.append("\t")
        elif tag in _BREAKS:
            current.append("\n")
        else:
            _collect(child, paragraphs, current)


def paragraph_texts(body: Element) -> list[str]:
    """Return the run text of every paragraph under ``body`` in document order.

    Paragraphs nested in text boxes are emitted before the paragraph that
    anchors them.
    """

    paragraphs: list[str] = []
    _collect(body, paragraphs, None)
    return paragraphs


def _join(paragraphs: Iterable[str]) -> str:
    return "\n".join(text for text in paragraphs if text.strip())


class DocxExtractor:
    """Extracts ``<w:t>`` run text per ``<w:p>`` paragraph from ``word/document.xml``."""

    def __init__(self, options: ExtractionOptions | None = None) -> None:
        self.options = options or ExtractionOptions()
        self.scanner = FallbackScanner(self.options.fallback_min_run)

    def extract(self, data: bytes, log: ExtractionLog | None = None) -> str:
        log = log if log is not None else ExtractionLog()
        if not data.startswith(ZIP_MAGIC):
            log.record(
                Diagnostic.UNSUPPORTED_ENCODING,
                "Missing ZIP signature; decoding upload as plain text.",
            )
            return decode_plain_text(data)

        body = self._load_body(data, log)
        if body is None:
            return self.scanner.scan(data)

        paragraphs = paragraph_texts(body)
        text = _join(paragraphs)
        log.record(
            Diagnostic.SUMMARY,
            "Extracted %d characters from %d paragraphs.",
            len(text),
            len(paragraphs),
        )
        return text

    def _load_body(self, data: bytes, log: ExtractionLog) -> Element | None:
        try:
            with ZipFile(BytesIO(data)) as archive:
                info = archive.getinfo(DOCUMENT_PART)
                if info.file_size > self.options.max_inflated_bytes:
                    log.record(
                        Diagnostic.UNSUPPORTED_ENCODING,
                        "%s expands to %d bytes; refusing to inflate.",
                        DOCUMENT_PART,
                        info.file_size,
                    )
                    return None
                payload = archive.read(info)
        except _ARCHIVE_ERRORS as exc:
            log.record(Diagnostic.UNSUPPORTED_ENCODING, "Unreadable ZIP archive: %s", exc)
            return None
        except KeyError:
            log.record(Diagnostic.UNSUPPORTED_ENCODING, "Archive has no %s part.", DOCUMENT_PART)
            return None

        try:
            root = fromstring(payload)
        except ParseError as exc:
            log.record(Diagnostic.UNSUPPORTED_ENCODING, "%s is not well-formed: %s", DOCUMENT_PART, exc)
            return None

        body = root.find(_BODY)
        if body is None:
            log.record(Diagnostic.UNSUPPORTED_ENCODING, "No <w:body> element in %s.", DOCUMENT_PART)
        return body
