"""Built-in extractors for PDF, DOCX and plain-text uploads."""

from __future__ import annotations

from ..docx.extractor import DocxExtractor, decode_plain_text
from ..pdf.pipeline import PdfTextPipeline
from .common.interfaces import BaseExtractor
from .common.pipeline import register_extractor


@register_extractor("pdf")
class PdfTool(BaseExtractor):
    suffixes = (".pdf",)

    def run(self):
        context = self.context
        outcome = PdfTextPipeline(context.options).run(context.document.data, context.log)
        return self.result(
            outcome.text,
            structured_length=len(outcome.structured_text),
            fallback_used=outcome.fallback_used,
            stream_count=outcome.stream_count,
        )


@register_extractor("docx")
class DocxTool(BaseExtractor):
    suffixes = (".docx",)

    def run(self):
        context = self.context
        text = DocxExtractor(context.options).extract(context.document.data, context.log)
        return self.result(text, structured_length=len(text))


@register_extractor("text")
class TextTool(BaseExtractor):
    """Uploads of any other type are assumed to already be text."""

    def run(self):
        text = decode_plain_text(self.context.document.data)
        return self.result(text, structured_length=len(text))
