from __future__ import annotations

import pytest

from resumetext.core.model import RawDocument
from resumetext.exceptions import ExtractorRegistrationError, UnknownExtractorError
from resumetext.tools import load_builtin_plugins
from resumetext.tools.common.interfaces import BaseExtractor, ExtractionContext
from resumetext.tools.common.pipeline import ExtractorRegistry, registry


def setup_module(module):
    load_builtin_plugins()


class UpperTool(BaseExtractor):
    name = "upper"
    suffixes = (".UPR",)

    def run(self):
        return self.result(self.context.document.data.decode("ascii").upper())


def test_builtin_extractors_are_registered() -> None:
    assert list(registry.names()) == ["docx", "pdf", "text"]
    assert registry.resolve("CV.pdf") == "pdf"


def test_registry_creates_tool_for_context() -> None:
    context = ExtractionContext(document=RawDocument(b"plain words", "notes.txt"))

    result = registry.create("text", context).run()

    assert result.text == "plain words"
    assert result.source == "text"
    assert result.prompt_char_limit == context.options.prompt_char_limit


def test_custom_registry_dispatch() -> None:
    custom = ExtractorRegistry(default="upper")
    custom.register("upper", UpperTool)

    assert custom.resolve("data.upr") == "upper"
    assert custom.resolve(None) == "upper"
    assert custom.resolve("inbox/.UPR") == "upper"

    context = ExtractionContext(document=RawDocument(b"shout", "data.upr"))
    assert custom.create("upper", context).run().text == "SHOUT"


def test_duplicate_names_and_suffixes_are_rejected() -> None:
    custom = ExtractorRegistry()
    custom.register("upper", UpperTool)

    with pytest.raises(ExtractorRegistrationError):
        custom.register("upper", UpperTool)

    class OtherTool(UpperTool):
        suffixes = (".upr",)

    with pytest.raises(ExtractorRegistrationError, match="already claimed"):
        custom.register("other", OtherTool)


def test_unknown_extractor() -> None:
    context = ExtractionContext(document=RawDocument(b"", "x.bin"))

    with pytest.raises(UnknownExtractorError, match="'missing' is not registered"):
        ExtractorRegistry().create("missing", context)

    assert ExtractorRegistry().get("missing") is None
