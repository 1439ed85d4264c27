from __future__ import annotations

import zlib

import pytest

from resumetext.core.options import ExtractionOptions
from resumetext.core.utils import Diagnostic, ExtractionLog
from resumetext.pdf.pipeline import PdfTextPipeline, extract_pdf_text

HELLO = b"BT /F1 12 Tf 72 712 Td (Hello World) Tj ET"


def test_uncompressed_content_stream(pdf_builder) -> None:
    data = pdf_builder((f"/Length {len(HELLO)}", HELLO))

    outcome = PdfTextPipeline(ExtractionOptions(thin_text_threshold=0)).run(data)

    assert outcome.text == "Hello World"
    assert outcome.structured_text == "Hello World"
    assert outcome.fallback_used is False
    assert outcome.stream_count == 1


def test_flate_content_stream(pdf_builder) -> None:
    payload = zlib.compress(HELLO)
    data = pdf_builder((f"/Filter /FlateDecode /Length {len(payload)}", payload))

    outcome = extract_pdf_text(data)

    assert outcome.structured_text == "Hello World"
    assert outcome.decoded_streams == 1


def test_pypdf_written_document(pypdf_factory) -> None:
    path = pypdf_factory("hello.pdf", HELLO, compress=True)

    outcome = extract_pdf_text(path.read_bytes())

    assert outcome.structured_text == "Hello World"


def test_resume_length_text_skips_fallback(resume_pdf_bytes: bytes) -> None:
    log = ExtractionLog()

    outcome = PdfTextPipeline().run(resume_pdf_bytes, log)

    assert outcome.fallback_used is False
    assert outcome.text == outcome.structured_text
    assert outcome.text.startswith("Jordan Rivera Senior Backend Engineer")
    assert "Staff Engineer at Northwind Logistics" in outcome.text
    assert "University of Washington" in outcome.text
    assert Diagnostic.THIN_EXTRACTION not in log.kinds()


def test_preserve_line_breaks_option(resume_text_pdf_bytes: bytes) -> None:
    options = ExtractionOptions(preserve_line_breaks=True)

    outcome = PdfTextPipeline(options).run(resume_text_pdf_bytes)

    lines = outcome.text.splitlines()
    assert lines[0] == "Jordan Rivera"
    assert lines[1] == "Senior Backend Engineer"
    assert len(lines) == 8


@pytest.mark.parametrize("workers", [1, 4])
def test_stream_order_is_preserved(pdf_builder, workers: int) -> None:
    streams = []
    for index in range(12):
        payload = zlib.compress(f"BT (Part {index}) Tj ET".encode("ascii"))
        streams.append((f"/Filter /FlateDecode /Length {len(payload)}", payload))
    data = pdf_builder(*streams)

    outcome = PdfTextPipeline(ExtractionOptions(max_workers=workers)).run(data)

    assert outcome.structured_text == " ".join(f"Part {index}" for index in range(12))


def test_mixed_raw_and_flate_streams_keep_byte_order(pdf_builder) -> None:
    first = b"BT (First section) Tj ET"
    second = zlib.compress(b"BT (Second section) Tj ET")
    third = b"BT (Third section) Tj ET"
    data = pdf_builder(
        ("/Length 24", first),
        ("/Filter /FlateDecode", second),
        ("/Length 24", third),
    )

    outcome = extract_pdf_text(data)

    assert outcome.structured_text == "First section Second section Third section"


def test_image_only_document_uses_fallback(image_only_pdf_bytes: bytes) -> None:
    log = ExtractionLog()

    outcome = PdfTextPipeline().run(image_only_pdf_bytes, log)

    assert outcome.structured_text == ""
    assert outcome.fallback_used is True
    assert len(outcome.text) < 50
    assert log.kinds()[:2] == [Diagnostic.STREAM_LOCATED, Diagnostic.STRUCTURAL_SKIP]
    assert log.count(Diagnostic.THIN_EXTRACTION) == 1
    assert log.count(Diagnostic.FALLBACK_SELECTED) == 1


def test_undecodable_stream_is_skipped(pdf_builder) -> None:
    log = ExtractionLog()
    good = zlib.compress(HELLO)
    data = pdf_builder(
        ("/Filter /FlateDecode", b"\x00\x01 definitely not deflate \xff"),
        ("/Filter /FlateDecode", good),
    )

    outcome = PdfTextPipeline().run(data, log)

    assert outcome.structured_text == "Hello World"
    assert log.count(Diagnostic.DECOMPRESSION_FAILURE) == 1
    assert "Stream 0" in log.messages(Diagnostic.DECOMPRESSION_FAILURE)[0]


def test_document_without_streams() -> None:
    log = ExtractionLog()

    outcome = PdfTextPipeline().run(b"%PDF-1.4\n%\xe2\xe3\nnothing to see here\n%%EOF", log)

    assert outcome.stream_count == 0
    assert log.messages(Diagnostic.STRUCTURAL_SKIP) == ["No dictionary/stream pairs found."]
    assert outcome.text == "nothing to see here"


def test_fallback_never_shortens_the_result(pdf_builder) -> None:
    payload = zlib.compress(HELLO)
    data = pdf_builder((f"/Filter /FlateDecode /Length {len(payload)}", payload))

    outcome = extract_pdf_text(data)

    assert len(outcome.text) >= len(outcome.structured_text)


@pytest.mark.parametrize("workers", [1, 4])
def test_total_inflated_budget_stops_decompression(pdf_builder, workers: int) -> None:
    log = ExtractionLog()
    streams = []
    for index in range(5):
        payload = zlib.compress(f"BT (Part {index}) Tj ET".encode("ascii") + b" " * 1000)
        streams.append((f"/Filter /FlateDecode /Length {len(payload)}", payload))
    data = pdf_builder(*streams)
    options = ExtractionOptions(max_workers=workers, max_total_inflated_bytes=2500)

    outcome = PdfTextPipeline(options).run(data, log)

    assert outcome.structured_text == "Part 0 Part 1 Part 2"
    assert outcome.inflated_bytes == 2500
    assert outcome.decoded_streams == 3
    assert log.messages(Diagnostic.STRUCTURAL_SKIP) == [
        "Inflated byte budget of 2500 exhausted; skipped 2 remaining flate streams."
    ]
    assert log.count(Diagnostic.DECOMPRESSION_FAILURE) == 0
