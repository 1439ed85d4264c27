from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable
import sys
import zipfile
import zlib

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

RESUME_LINES = [
    "Jordan Rivera",
    "Senior Backend Engineer",
    "jordan.rivera@example.org | +1 415 555 0199 | Oakland, CA",
    "Summary: Backend engineer with eight years building payment and logistics platforms.",
    "Skills: Python, PostgreSQL, Kafka, Kubernetes, Terraform, AWS, FastAPI, Redis",
    "Experience: Staff Engineer at Northwind Logistics, Jan 2021 to Present",
    "Experience: Software Engineer at Contoso Payments, Mar 2016 to Dec 2020",
    "Education: BSc Computer Science, University of Washington, 2015",
]


def escape_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def content_stream(lines: list[str]) -> bytes:
    """Build a content stream showing one ``Tj`` line per positioned text block."""

    chunks = []
    for index, line in enumerate(lines):
        chunks.append(f"BT /F1 11 Tf 72 {720 - 14 * index} Td ({escape_literal(line)}) Tj ET\n")
    return "".join(chunks).encode("latin-1")


def build_pdf(*streams: tuple[str, bytes]) -> bytes:
    """Assemble a minimal PDF body from ``(dictionary, payload)`` pairs."""

    chunks = [b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n"]
    for number, (dictionary, payload) in enumerate(streams, start=1):
        chunks.append(f"{number} 0 obj\n<<{dictionary}>>\nstream\n".encode("latin-1"))
        chunks.append(payload)
        chunks.append(b"\nendstream\nendobj\n")
    chunks.append(b"%%EOF\n")
    return b"".join(chunks)


def raw_text_pdf(lines: list[str]) -> bytes:
    payload = content_stream(lines)
    return build_pdf((f"/Length {len(payload)}", payload))


def flate_text_pdf(lines: list[str]) -> bytes:
    payload = zlib.compress(content_stream(lines))
    return build_pdf((f"/Filter /FlateDecode /Length {len(payload)}", payload))


def build_docx_bytes(paragraphs: list[list[str]]) -> bytes:
    """Zip a bare ``word/document.xml`` whose paragraphs hold the given runs."""

    body = "".join(
        "<w:p>" + "".join(f"<w:r><w:t>{run}</w:t></w:r>" for run in runs) + "</w:p>"
        for runs in paragraphs
    )
    document = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'
    )
    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", "<Types/>")
        archive.writestr("word/document.xml", document)
    return buffer.getvalue()


@pytest.fixture()
def resume_lines() -> list[str]:
    return list(RESUME_LINES)


@pytest.fixture()
def resume_pdf_bytes(resume_lines: list[str]) -> bytes:
    return flate_text_pdf(resume_lines)


@pytest.fixture()
def image_only_pdf_bytes() -> bytes:
    return build_pdf(("/Subtype/Image", b"\xff\xd8\xff\xe0\x00\x10\x00\x01\xff\xd9"))


@pytest.fixture()
def pypdf_factory(tmp_path: Path) -> Callable[..., Path]:
    """Write a single-page PDF through pypdf with the given content stream."""

    def _create(filename: str, content: bytes, *, compress: bool = False) -> Path:
        from pypdf import PdfWriter
        from pypdf.generic import DictionaryObject, NameObject, NumberObject, StreamObject

        writer = PdfWriter()
        page = writer.add_blank_page(width=612, height=792)
        font_dict = DictionaryObject(
            {
                NameObject("/Type"): NameObject("/Font"),
                NameObject("/Subtype"): NameObject("/Type1"),
                NameObject("/BaseFont"): NameObject("/Helvetica"),
            }
        )
        font_ref = writer._add_object(font_dict)
        page[NameObject("/Resources")] = DictionaryObject(
            {NameObject("/Font"): DictionaryObject({NameObject("/F1"): font_ref})}
        )
        data = zlib.compress(content) if compress else content
        stream = StreamObject()
        if compress:
            stream[NameObject("/Filter")] = NameObject("/FlateDecode")
        stream[NameObject("/Length")] = NumberObject(len(data))
        stream._data = data
        page[NameObject("/Contents")] = writer._add_object(stream)

        path = tmp_path / filename
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def docx_factory(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Write a real DOCX through python-docx."""

    def _create(filename: str, paragraphs: list[str]) -> Path:
        from docx import Document

        document = Document()
        for text in paragraphs:
            document.add_paragraph(text)
        path = tmp_path / filename
        document.save(str(path))
        return path

    return _create


@pytest.fixture()
def pdf_builder() -> Callable[..., bytes]:
    return build_pdf


@pytest.fixture()
def content_builder() -> Callable[[list[str]], bytes]:
    return content_stream


@pytest.fixture()
def docx_builder() -> Callable[[list[list[str]]], bytes]:
    return build_docx_bytes


@pytest.fixture()
def resume_text_pdf_bytes(resume_lines: list[str]) -> bytes:
    return raw_text_pdf(resume_lines)
