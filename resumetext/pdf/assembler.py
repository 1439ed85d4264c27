"""Join text fragments into plain text and repair glued words."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable

from ..core.model import TextFragment
from ..core.options import DEFAULT_THIN_TEXT_THRESHOLD

__all__ = ["AssembledText", "TextAssembler", "repair_glued_words"]

_WHITESPACE_RUN = re.compile(r"\s{2,}")
_HORIZONTAL_RUN = re.compile(r"[^\S\n]{2,}")
_LINE_BREAK_RUN = re.compile(r"[^\S\n]*\n\s*")
_LOWER_UPPER = re.compile(r"([a-z])([A-Z])")
_LETTER_DIGIT = re.compile(r"([a-zA-Z])(\d)")
_DIGIT_LETTER = re.compile(r"(\d)([a-zA-Z])")


def repair_glued_words(text: str) -> str:
    """Split camel-case and letter/digit joins left behind by tight kerning."""

    text = _LOWER_UPPER.sub(r"\1 \2", text)
    text = _LETTER_DIGIT.sub(r"\1 \2", text)
    return _DIGIT_LETTER.sub(r"\1 \2", text)


@dataclass(frozen=True, slots=True)
class AssembledText:
    text: str
    threshold: int

    @property
    def is_thin(self) -> bool:
        return len(self.text) < self.threshold


class TextAssembler:
    """Layout-aware joiner with a quality gate on the result length."""

    def __init__(
        self,
        *,
        thin_threshold: int = DEFAULT_THIN_TEXT_THRESHOLD,
        preserve_line_breaks: bool = False,
    ) -> None:
        self.thin_threshold = thin_threshold
        self.preserve_line_breaks = preserve_line_breaks

    @property
    def line_separator(self) -> str:
        return "\n" if self.preserve_line_breaks else " "

    def join(self, fragments: Iterable[TextFragment]) -> str:
        parts: list[str] = []
        for fragment in fragments:
            if fragment.text:
                parts.append(fragment.text)
            if fragment.line_break:
                parts.append(self.line_separator)
        return " ".join(parts)

    def collapse_whitespace(self, text: str) -> str:
        if not self.preserve_line_breaks:
            return _WHITESPACE_RUN.sub(" ", text)
        text = _LINE_BREAK_RUN.sub("\n", text)
        return _HORIZONTAL_RUN.sub(" ", text)

    def assemble(self, fragments: Iterable[TextFragment]) -> AssembledText:
        text = self.collapse_whitespace(self.join(fragments))
        text = repair_glued_words(text).strip()
        return AssembledText(text=text, threshold=self.thin_threshold)
