"""Locate UTF-8 character boundaries in a lazily supplied byte stream."""

from __future__ import annotations

from collections.abc import Iterable

from stringring.const import (
    CONTINUATION_MASK,
    CONTINUATION_TAG,
    MAX_UTF8_SEQUENCE_LEN,
)
from stringring.exceptions import InvariantViolationError


def is_char_boundary(byte: int) -> bool:
    """Return True if ``byte`` starts a codepoint (ASCII or a leading byte)."""
    return byte & CONTINUATION_MASK != CONTINUATION_TAG


def ceil_char_boundary_offset(src: Iterable[int]) -> int:
    """Count the bytes to skip from ``src`` to reach a character boundary.

    ``src`` yields the bytes of a UTF-8 string starting at an arbitrary offset.
    At most four bytes are consumed, so callers may pass an unbounded
    iterator.

    Args:
        src: Bytes following a candidate cut point.

    Returns:
        The smallest ``k`` in ``0..3`` such that skipping ``k`` bytes lands on
        the start of a codepoint or the end of input. Empty input returns 0.

    Raises:
        InvariantViolationError: If four continuation bytes appear in a row,
            which cannot happen in well-formed UTF-8.
    """
    it = iter(src)
    for offset in range(MAX_UTF8_SEQUENCE_LEN):
        byte = next(it, None)
        if byte is None:
            return offset
        if is_char_boundary(byte):
            return offset
    raise InvariantViolationError(
        f"no character boundary within {MAX_UTF8_SEQUENCE_LEN} bytes"
    )
