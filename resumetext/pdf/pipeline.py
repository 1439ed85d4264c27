"""PDF text pipeline: locate → inflate → tokenize → assemble → fallback."""

from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import partial

from ..core.model import StreamKind, StreamRecord, TextFragment
from ..core.options import ExtractionOptions
from ..core.utils import Diagnostic, ExtractionLog
from .assembler import TextAssembler
from .fallback import FallbackScanner
from .inflate import Inflator
from .locator import StreamLocator
from .tokenizer import ContentTokenizer, decode_content

__all__ = ["PdfExtraction", "PdfTextPipeline", "extract_pdf_text"]

_PREVIEW_CHARS = 500


@dataclass(slots=True)
class PdfExtraction:
    """Outcome of one run of :class:`PdfTextPipeline`."""

    text: str
    structured_text: str
    fallback_used: bool = False
    stream_count: int = 0
    decoded_streams: int = 0
    inflated_bytes: int = 0
    records: list[StreamRecord] = field(default_factory=list)


@dataclass(slots=True)
class _PipelineState:
    data: bytes
    log: ExtractionLog
    records: list[StreamRecord] = field(default_factory=list)
    fragments: list[TextFragment] = field(default_factory=list)
    decoded_streams: int = 0
    inflated_bytes: int = 0
    budget_exhausted: bool = False
    skipped_over_budget: int = 0


class PdfTextPipeline:
    """Runs the structured PDF extraction with its printable-run safety net."""

    def __init__(self, options: ExtractionOptions | None = None) -> None:
        self.options = options or ExtractionOptions()
        self.locator = StreamLocator(self.options.dictionary_window)
        self.inflator = Inflator(self.options.inflate_min_output, self.options.max_inflated_bytes)
        self.tokenizer = ContentTokenizer()
        self.assembler = TextAssembler(
            thin_threshold=self.options.thin_text_threshold,
            preserve_line_breaks=self.options.preserve_line_breaks,
        )
        self.scanner = FallbackScanner(self.options.fallback_min_run)

    def run(self, data: bytes, log: ExtractionLog | None = None) -> PdfExtraction:
        state = _PipelineState(data=data, log=log if log is not None else ExtractionLog())
        self._locate(state)
        self._extract_streams(state)

        assembled = self.assembler.assemble(state.fragments)
        structured = assembled.text
        state.log.record(
            Diagnostic.SUMMARY,
            "Structured extraction produced %d characters from %d content streams.",
            len(structured),
            state.decoded_streams,
        )
        state.log.logger.debug("Preview: %s", structured[:_PREVIEW_CHARS])

        text = structured
        fallback_used = False
        if assembled.is_thin:
            state.log.record(
                Diagnostic.THIN_EXTRACTION,
                "Structured text is shorter than %d characters; scanning printable runs.",
                assembled.threshold,
            )
            fallback = self.scanner.scan(data)
            if len(fallback) > len(text):
                state.log.record(
                    Diagnostic.FALLBACK_SELECTED,
                    "Fallback produced better text (%d chars).",
                    len(fallback),
                )
                text = fallback
                fallback_used = True

        return PdfExtraction(
            text=text,
            structured_text=structured,
            fallback_used=fallback_used,
            stream_count=len(state.records),
            decoded_streams=state.decoded_streams,
            inflated_bytes=state.inflated_bytes,
            records=state.records,
        )

    # ------------------------------------------------------------------
    # Stage helpers
    # ------------------------------------------------------------------
    def _locate(self, state: _PipelineState) -> None:
        state.records = self.locator.locate(state.data)
        for index, record in enumerate(state.records):
            state.log.record(
                Diagnostic.STREAM_LOCATED,
                "Stream %d at bytes %d-%d classified as %s.",
                index,
                record.start,
                record.end,
                record.kind.value,
            )
        if not state.records:
            state.log.record(Diagnostic.STRUCTURAL_SKIP, "No dictionary/stream pairs found.")

    def _extract_streams(self, state: _PipelineState) -> None:
        """Decode and tokenize streams in byte order, one batch of ``max_workers`` at a time.

        Inflated bytes are tokenized immediately and dropped, so at most one
        batch of decompressed payloads is alive at once. Once the document's
        inflated total reaches ``max_total_inflated_bytes`` the remaining
        flate streams are skipped.
        """

        flate_count = sum(1 for record in state.records if record.kind is StreamKind.FLATE_CONTENT)
        workers = min(self.options.max_workers, flate_count)
        if workers <= 1:
            self._extract_batches(state, None, 1)
        else:
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resumetext-inflate") as pool:
                self._extract_batches(state, pool, workers)

        if state.skipped_over_budget:
            state.log.record(
                Diagnostic.STRUCTURAL_SKIP,
                "Inflated byte budget of %d exhausted; skipped %d remaining flate streams.",
                self.options.max_total_inflated_bytes,
                state.skipped_over_budget,
            )

    def _extract_batches(self, state: _PipelineState, pool: Executor | None, size: int) -> None:
        budget = self.options.max_total_inflated_bytes
        for offset in range(0, len(state.records), size):
            batch = list(enumerate(state.records[offset : offset + size], start=offset))
            flate = [
                (index, record.payload(state.data))
                for index, record in batch
                if record.kind is StreamKind.FLATE_CONTENT and not state.budget_exhausted
            ]
            inflate = partial(self.inflator.inflate, max_output=budget - state.inflated_bytes)
            payloads = [payload for _, payload in flate]
            outputs = pool.map(inflate, payloads) if pool is not None else map(inflate, payloads)
            inflated = dict(zip((index for index, _ in flate), outputs))

            for index, record in batch:
                if record.kind is StreamKind.RAW_CONTENT:
                    self._tokenize(state, record.payload(state.data))
                elif record.kind is StreamKind.FLATE_CONTENT:
                    self._take_inflated(state, index, inflated.pop(index, None), budget)
                else:
                    state.log.record(
                        Diagnostic.STRUCTURAL_SKIP,
                        "Skipped %s stream %d.",
                        record.kind.value,
                        index,
                    )

    def _take_inflated(
        self,
        state: _PipelineState,
        index: int,
        output: bytes | None,
        budget: int,
    ) -> None:
        if state.budget_exhausted:
            state.skipped_over_budget += 1
            return
        if output is None:
            state.log.record(
                Diagnostic.DECOMPRESSION_FAILURE,
                "Stream %d could not be decompressed; skipping.",
                index,
            )
            return
        remaining = budget - state.inflated_bytes
        if len(output) >= remaining:
            output = output[:remaining]
            state.budget_exhausted = True
        state.inflated_bytes += len(output)
        self._tokenize(state, output)

    def _tokenize(self, state: _PipelineState, content: bytes) -> None:
        state.decoded_streams += 1
        state.fragments.extend(self.tokenizer.tokenize(decode_content(content)))


def extract_pdf_text(
    data: bytes,
    *,
    options: ExtractionOptions | None = None,
    log: ExtractionLog | None = None,
) -> PdfExtraction:
    """Convenience wrapper around :meth:`PdfTextPipeline.run`."""

    return PdfTextPipeline(options).run(data, log)
