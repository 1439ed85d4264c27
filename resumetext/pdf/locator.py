"""Locate and classify ``stream ... endstream`` payloads in raw PDF bytes.

The scan is index based: every ``stream`` keyword is visited once, the
dictionary in front of it is matched by walking backwards over at most
``window`` bytes, and the search resumes after the matching ``endstream``.
Malformed input can therefore never trigger unbounded backtracking.
"""

from __future__ import annotations

import re

from ..core.model import StreamKind, StreamRecord
from ..core.options import DEFAULT_DICTIONARY_WINDOW

__all__ = ["StreamLocator", "classify_dictionary", "locate_streams"]

_WHITESPACE = b"\x00\t\n\r\f "
_STREAM = b"stream"
_ENDSTREAM = b"endstream"
_DICT_OPEN = b"<<"
_DICT_CLOSE = b">>"

_IMAGE_SUBTYPE = re.compile(r"/Subtype\s*/Image\b")
_NON_TEXT_TYPE = re.compile(r"/Type\s*/(?:XRef|ObjStm|Metadata)\b")
_FONT_PROGRAM = re.compile(r"/Length[123]\b")
_FILTER_KEY = re.compile(r"/Filter\b")
_FLATE_FILTER = re.compile(r"/Filter\s*/FlateDecode\b")
_FLATE_FILTER_ARRAY = re.compile(r"/Filter\s*\[[^\]]*/FlateDecode\b")


def classify_dictionary(dictionary: str) -> StreamKind:
    """Assign exactly one :class:`StreamKind` to a stream dictionary."""

    if _IMAGE_SUBTYPE.search(dictionary):
        return StreamKind.IMAGE
    if _NON_TEXT_TYPE.search(dictionary) or _FONT_PROGRAM.search(dictionary):
        return StreamKind.SKIP
    if _FLATE_FILTER.search(dictionary) or _FLATE_FILTER_ARRAY.search(dictionary):
        return StreamKind.FLATE_CONTENT
    if not _FILTER_KEY.search(dictionary):
        return StreamKind.RAW_CONTENT
    return StreamKind.SKIP


def _payload_start(data: bytes, index: int) -> int | None:
    if data.startswith(b"\r\n", index):
        return index + 2
    if data.startswith(b"\n", index) or data.startswith(b"\r", index):
        return index + 1
    return None


def _dictionary_close(data: bytes, keyword: int, window: int) -> int | None:
    """Return the offset of the ``>>`` directly preceding ``keyword``."""

    floor = max(0, keyword - window)
    index = keyword - 1
    while index >= floor and data[index] in _WHITESPACE:
        index -= 1
    if index - 1 < floor or not data.startswith(_DICT_CLOSE, index - 1):
        return None
    return index - 1


def _dictionary_open(data: bytes, close: int, window: int) -> int | None:
    """Walk backwards from ``close`` to the ``<<`` that balances it."""

    floor = max(0, close - window)
    depth = 0
    index = close
    while index >= floor:
        if data.startswith(_DICT_CLOSE, index):
            depth += 1
            index -= 2
            continue
        if data.startswith(_DICT_OPEN, index):
            depth -= 1
            if depth == 0:
                return index
            index -= 2
            continue
        index -= 1
    return None


def _trim_eol(data: bytes, start: int, end: int) -> int:
    if end > start and data[end - 1] == 0x0A:
        end -= 1
    if end > start and data[end - 1] == 0x0D:
        end -= 1
    return end


def locate_streams(data: bytes, *, window: int = DEFAULT_DICTIONARY_WINDOW) -> list[StreamRecord]:
    """Return every dictionary-backed stream in ``data`` in byte order."""

    records: list[StreamRecord] = []
    position = 0
    while True:
        keyword = data.find(_STREAM, position)
        if keyword == -1:
            break
        after = keyword + len(_STREAM)
        position = after
        if data[max(0, keyword - 3) : keyword] == b"end":
            continue
        payload_start = _payload_start(data, after)
        if payload_start is None:
            continue
        close = _dictionary_close(data, keyword, window)
        if close is None:
            continue
        opening = _dictionary_open(data, close, window)
        if opening is None:
            continue
        end_marker = data.find(_ENDSTREAM, payload_start)
        if end_marker == -1:
            break
        dictionary = data[opening + len(_DICT_OPEN) : close].decode("latin-1")
        records.append(
            StreamRecord(
                start=payload_start,
                end=_trim_eol(data, payload_start, end_marker),
                dictionary=dictionary,
                kind=classify_dictionary(dictionary),
            )
        )
        position = end_marker + len(_ENDSTREAM)
    return records


class StreamLocator:
    """Callable wrapper binding the dictionary window."""

    def __init__(self, window: int = DEFAULT_DICTIONARY_WINDOW) -> None:
        self.window = window

    def locate(self, data: bytes) -> list[StreamRecord]:
        return locate_streams(data, window=self.window)
