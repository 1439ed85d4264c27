"""FlateDecode decompression for PDF content streams."""

from __future__ import annotations

import zlib

from ..core.options import DEFAULT_INFLATE_MIN_OUTPUT, DEFAULT_MAX_INFLATED_BYTES

__all__ = ["Inflator", "inflate"]

# zlib-wrapped deflate first, then headerless deflate for non-conformant writers.
_WBITS_ATTEMPTS = (zlib.MAX_WBITS, -zlib.MAX_WBITS)


def _attempt(data: bytes, wbits: int, max_output: int) -> bytes | None:
    decompressor = zlib.decompressobj(wbits)
    try:
        output = decompressor.decompress(data, max_output)
        if len(output) < max_output:
            output += decompressor.flush()
    except zlib.error:
        return None
    return output


def inflate(
    data: bytes,
    *,
    min_output: int = DEFAULT_INFLATE_MIN_OUTPUT,
    max_output: int = DEFAULT_MAX_INFLATED_BYTES,
) -> bytes | None:
    """Decompress ``data`` or return ``None`` when neither attempt is useful.

    Truncated streams keep whatever prefix could be recovered; output of
    ``min_output`` bytes or fewer counts as failure.
    """

    if not data:
        return None
    for wbits in _WBITS_ATTEMPTS:
        output = _attempt(data, wbits, max_output)
        if output is not None and len(output) > min_output:
            return output[:max_output]
    return None


class Inflator:
    def __init__(
        self,
        min_output: int = DEFAULT_INFLATE_MIN_OUTPUT,
        max_output: int = DEFAULT_MAX_INFLATED_BYTES,
    ) -> None:
        self.min_output = min_output
        self.max_output = max_output

    def inflate(self, data: bytes, max_output: int | None = None) -> bytes | None:
        """Inflate ``data``, optionally with a tighter cap than ``self.max_output``."""

        cap = self.max_output if max_output is None else min(max_output, self.max_output)
        return inflate(data, min_output=self.min_output, max_output=cap)
