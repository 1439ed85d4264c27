"""Content-stream tokenizer turning text-showing operators into fragments."""

from __future__ import annotations

import re
from string import hexdigits
from typing import Iterator

from ..core.model import TextFragment

__all__ = [
    "ContentTokenizer",
    "decode_content",
    "decode_hex",
    "decode_literal",
    "tokenize_content",
]

_WHITESPACE = "\x00\t\n\r\f "
_DELIMITERS = "()<>[]{}/%"
_WHITESPACE_RUN = re.compile(r"[\x00\t\n\r\f ]+")
_REGULAR_RUN = re.compile(r"[^\x00\t\n\r\f ()<>\[\]{}/%]*")
_COMMENT = re.compile(r"%[^\r\n]*")
_LITERAL_SPECIAL = re.compile(r"[\\()]")
_NUMBER_CHARS = frozenset("+-.0123456789")
_OCTAL = "01234567"
_HEX = frozenset(hexdigits)

_LITERAL_ESCAPES = {
    "n": " ",
    "r": " ",
    "t": "\t",
    "b": "",
    "f": " ",
    "(": "(",
    ")": ")",
    "\\": "\\",
}

# Token kinds produced by ``_lex``.
STRING = "string"
NUMBER = "number"
NAME = "name"
OPERATOR = "operator"
ARRAY_OPEN = "array-open"
ARRAY_CLOSE = "array-close"
DICT_OPEN = "dict-open"
DICT_CLOSE = "dict-close"
ARRAY = "array"

_POSITIONING = frozenset({"Td", "TD", "Tm", "T*"})
_SHOW_STRING = frozenset({"Tj", "'", '"'})
_NEXT_LINE_SHOW = frozenset({"'", '"'})


def decode_content(data: bytes) -> str:
    """Decode content-stream bytes, keeping one character per byte on failure."""

    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def decode_literal(body: str) -> str:
    """Resolve the escape sequences of a PDF literal string body."""

    if "\\" not in body:
        return body
    out: list[str] = []
    index = 0
    length = len(body)
    while index < length:
        char = body[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue
        index += 1
        if index >= length:
            break
        char = body[index]
        if char in _OCTAL:
            end = index
            while end < length and end - index < 3 and body[end] in _OCTAL:
                end += 1
            out.append(chr(int(body[index:end], 8) & 0xFF))
            index = end
            continue
        if char == "\r":
            index += 1
            if index < length and body[index] == "\n":
                index += 1
            continue
        if char == "\n":
            index += 1
            continue
        out.append(_LITERAL_ESCAPES.get(char, char))
        index += 1
    return "".join(out)


def _decode_wide(raw: bytes) -> str:
    units = [int.from_bytes(raw[offset : offset + 2], "big") for offset in range(0, len(raw), 2)]
    kept = [unit for unit in units if 31 < unit < 0xFFFE]
    if kept and kept[0] == 0xFEFF:
        kept = kept[1:]
    if not kept:
        return ""
    payload = b"".join(unit.to_bytes(2, "big") for unit in kept)
    return payload.decode("utf-16-be", errors="ignore")


def decode_hex(body: str) -> str:
    """Decode a hex string body as UTF-16BE when plausible, else one byte per char."""

    digits = "".join(char for char in body if char in _HEX)
    if not digits:
        return ""
    wide_candidate = len(digits) % 4 == 0
    if len(digits) % 2:
        digits += "0"
    raw = bytes.fromhex(digits)
    if wide_candidate:
        text = _decode_wide(raw)
        if text.strip():
            return text
    return "".join(chr(byte) for byte in raw if byte >= 32)


def _read_literal(content: str, index: int) -> tuple[str, int]:
    """Return the body of the literal string opening at ``index`` and the next index."""

    depth = 1
    start = index + 1
    cursor = start
    length = len(content)
    while True:
        match = _LITERAL_SPECIAL.search(content, cursor)
        if match is None:
            break
        cursor = match.start()
        char = content[cursor]
        if char == "\\":
            cursor += 2
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return content[start:cursor], cursor + 1
        cursor += 1
    return content[start:length], length


def _skip_inline_image(content: str, index: int) -> int:
    length = len(content)
    cursor = index
    while True:
        found = content.find("EI", cursor)
        if found == -1:
            return length
        before_ok = found == 0 or content[found - 1] in _WHITESPACE
        after = found + 2
        after_ok = after >= length or content[after] in _WHITESPACE or content[after] in _DELIMITERS
        if before_ok and after_ok:
            return after
        cursor = found + 1


def _lex(content: str) -> Iterator[tuple[str, object]]:
    index = 0
    length = len(content)
    while index < length:
        char = content[index]
        if char in _WHITESPACE:
            index = _WHITESPACE_RUN.match(content, index).end()
        elif char == "%":
            index = _COMMENT.match(content, index).end()
        elif char == "(":
            body, index = _read_literal(content, index)
            yield STRING, decode_literal(body)
        elif char == "<":
            if content.startswith("<<", index):
                index += 2
                yield DICT_OPEN, None
                continue
            end = content.find(">", index + 1)
            if end == -1:
                end = length
            yield STRING, decode_hex(content[index + 1 : end])
            index = end + 1
        elif char == ">":
            if content.startswith(">>", index):
                index += 2
                yield DICT_CLOSE, None
            else:
                index += 1
        elif char == "[":
            index += 1
            yield ARRAY_OPEN, None
        elif char == "]":
            index += 1
            yield ARRAY_CLOSE, None
        elif char in "{}":
            index += 1
        elif char == "/":
            end = _REGULAR_RUN.match(content, index + 1).end()
            yield NAME, content[index:end]
            index = end
        else:
            end = _REGULAR_RUN.match(content, index).end()
            if end == index:
                # stray ")"
                index += 1
                continue
            word = content[index:end]
            index = end
            if all(symbol in _NUMBER_CHARS for symbol in word):
                yield NUMBER, word
                continue
            yield OPERATOR, word
            if word == "ID":
                index = _skip_inline_image(content, index)


def _last_string(operands: list[tuple[str, object]]) -> str | None:
    if operands and operands[-1][0] == STRING:
        return operands[-1][1]  # type: ignore[return-value]
    return None


def _array_text(operands: list[tuple[str, object]]) -> str | None:
    if not operands or operands[-1][0] != ARRAY:
        return None
    items = operands[-1][1]
    return "".join(value for kind, value in items if kind == STRING)  # type: ignore[misc]


def tokenize_content(content: str) -> list[TextFragment]:
    """Return the text fragments shown inside ``BT ... ET`` blocks of ``content``.

    Every block containing a positioning operator contributes one trailing
    fragment flagged ``line_break`` after its text fragments.
    """

    fragments: list[TextFragment] = []
    block: list[TextFragment] | None = None
    block_break = False
    operands: list[tuple[str, object]] = []
    arrays: list[list[tuple[str, object]]] = []

    for kind, value in _lex(content):
        if kind == ARRAY_OPEN:
            arrays.append([])
            continue
        if kind == ARRAY_CLOSE:
            if arrays:
                items = arrays.pop()
                target = arrays[-1] if arrays else operands
                target.append((ARRAY, items))
            continue
        if kind != OPERATOR:
            target = arrays[-1] if arrays else operands
            target.append((kind, value))
            continue

        operator = value
        arrays.clear()
        if operator == "BT":
            block = []
            block_break = False
        elif operator == "ET":
            if block is not None:
                fragments.extend(block)
                if block_break:
                    fragments.append(TextFragment("", line_break=True))
            block = None
        elif block is not None:
            if operator in _POSITIONING:
                block_break = True
            elif operator in _SHOW_STRING:
                text = _last_string(operands)
                if text:
                    block.append(TextFragment(text))
                if operator in _NEXT_LINE_SHOW:
                    block_break = True
            elif operator == "TJ":
                text = _array_text(operands)
                if text:
                    block.append(TextFragment(text))
        operands.clear()

    return fragments


class ContentTokenizer:
    """Tokenizer facade accepting either decoded text or raw stream bytes."""

    def tokenize(self, content: str | bytes) -> list[TextFragment]:
        if isinstance(content, (bytes, bytearray)):
            content = decode_content(bytes(content))
        return tokenize_content(content)
