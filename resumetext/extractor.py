"""Extraction façade dispatching uploads to the PDF, DOCX or plain-text path.

Each call walks ``Idle → Dispatched{pdf|docx|text} → Extracted | Failed``.
The transitions are recorded in the call's :class:`ExtractionLog`; nothing is
kept on the :class:`Extractor` itself, so one instance can serve concurrent
callers.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from .core.model import ExtractedText, RawDocument
from .core.options import ExtractionOptions
from .core.utils import Diagnostic, ExtractionLog, get_logger, resolve_path
from .exceptions import UnreadableDocumentError
from .tools import load_builtin_plugins
from .tools.common.interfaces import ExtractionContext
from .tools.common.pipeline import ExtractorRegistry, registry as default_registry

__all__ = ["ExtractionState", "Extractor", "extract_file", "extract_text"]

LOGGER = get_logger("resumetext.extractor")


class ExtractionState(str, Enum):
    IDLE = "idle"
    DISPATCHED = "dispatched"
    EXTRACTED = "extracted"
    FAILED = "failed"


class Extractor:
    """Entry point used by the résumé ingestion caller.

    Built-in extractors are loaded into the module-level registry only. A
    custom ``registry`` is used as given and must already hold an extractor
    for every name it can resolve, its default included.
    """

    def __init__(
        self,
        options: ExtractionOptions | None = None,
        *,
        registry: ExtractorRegistry | None = None,
    ) -> None:
        load_builtin_plugins()
        self.options = options or ExtractionOptions()
        self.registry = registry if registry is not None else default_registry

    def dispatch(self, filename: str | None) -> str:
        return self.registry.resolve(filename)

    def extract(self, document: RawDocument, *, log: ExtractionLog | None = None) -> ExtractedText:
        """Return the plain text of ``document``.

        Raises :class:`UnreadableDocumentError` when fewer than
        ``options.min_usable_length`` characters survive trimming.
        """

        log = log if log is not None else ExtractionLog(logger=LOGGER)
        log.record(Diagnostic.STATE, ExtractionState.IDLE.value)
        name = self.dispatch(document.filename)
        log.record(Diagnostic.STATE, "%s{%s}", ExtractionState.DISPATCHED.value, name)

        context = ExtractionContext(document=document, options=self.options, log=log)
        result = self.registry.create(name, context).run()
        result.text = result.text.strip()

        if result.length < self.options.min_usable_length:
            log.record(
                Diagnostic.UNREADABLE_DOCUMENT,
                "'%s' produced %d usable characters (minimum %d).",
                document.filename,
                result.length,
                self.options.min_usable_length,
            )
            log.record(Diagnostic.STATE, ExtractionState.FAILED.value)
            raise UnreadableDocumentError(
                document.filename,
                extracted_length=result.length,
                min_length=self.options.min_usable_length,
            )

        log.record(Diagnostic.STATE, ExtractionState.EXTRACTED.value)
        log.record(Diagnostic.SUMMARY, "Final text length: %d", result.length)
        result.records = log.as_tuple()
        return result


def extract_text(
    data: bytes,
    filename: str,
    *,
    options: ExtractionOptions | None = None,
    log: ExtractionLog | None = None,
) -> ExtractedText:
    """Convenience wrapper around :meth:`Extractor.extract`."""

    return Extractor(options).extract(RawDocument(data=data, filename=filename), log=log)


def extract_file(
    path: str | Path,
    *,
    options: ExtractionOptions | None = None,
    log: ExtractionLog | None = None,
) -> ExtractedText:
    resolved = resolve_path(path)
    return extract_text(resolved.read_bytes(), resolved.name, options=options, log=log)
