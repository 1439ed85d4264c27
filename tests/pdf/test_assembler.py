from __future__ import annotations

import pytest

from resumetext.core.model import TextFragment
from resumetext.pdf.assembler import TextAssembler, repair_glued_words


@pytest.mark.parametrize(
    ("glued", "expected"),
    [
        ("SeniorEngineer", "Senior Engineer"),
        ("Python3years", "Python 3 years"),
        ("since2019at", "since 2019 at"),
        ("ALLCAPS stays", "ALLCAPS stays"),
    ],
)
def test_repair_glued_words(glued: str, expected: str) -> None:
    assert repair_glued_words(glued) == expected


def test_repair_glued_words_is_idempotent() -> None:
    once = repair_glued_words("JohnDoe worked at Acme2015to2020asLeadEngineer")

    assert repair_glued_words(once) == once


def test_assemble_collapses_whitespace_and_line_breaks() -> None:
    fragments = [
        TextFragment("Jane   Doe"),
        TextFragment("", line_break=True),
        TextFragment("\tData  Scientist "),
    ]

    assembled = TextAssembler().assemble(fragments)

    assert assembled.text == "Jane Doe Data Scientist"


def test_assemble_can_preserve_line_breaks() -> None:
    fragments = [
        TextFragment("Jane Doe"),
        TextFragment("", line_break=True),
        TextFragment("Data   Scientist"),
        TextFragment("", line_break=True),
    ]

    assembled = TextAssembler(preserve_line_breaks=True).assemble(fragments)

    assert assembled.text == "Jane Doe\nData Scientist"


def test_thin_gate_uses_threshold() -> None:
    assembler = TextAssembler(thin_threshold=10)

    assert assembler.assemble([TextFragment("short")]).is_thin
    assert not assembler.assemble([TextFragment("long enough text")]).is_thin
    assert TextAssembler(thin_threshold=0).assemble([]).is_thin is False
