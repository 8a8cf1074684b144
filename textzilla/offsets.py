"""
Byte to code-point offset maps.

An offset map is a `numpy.int64` array with one entry per byte of an encoded
buffer, holding the index of the code point that byte belongs to. Values are
non-decreasing and cover `0 .. length - 1`, so lookups in both directions
are either a direct index or a binary search.
"""

import enum
import logging

import numpy as np

from textzilla.encodings import is_utf8

logger = logging.getLogger(__name__)

NOT_FOUND = -1


class Direction(enum.Enum):
    BYTE_TO_CODEPOINT = "byte-to-codepoint"
    CODEPOINT_TO_BYTE = "codepoint-to-byte"


def codepoint_widths(decoded: str, codec: str) -> np.ndarray:
    """Number of bytes each code point of `decoded` occupies under `codec`."""
    return np.fromiter(
        (len(char.encode(codec)) for char in decoded),
        dtype=np.int64,
        count=len(decoded),
    )


def build_offset_map(buffer: bytes, decoded: str, codec: str) -> np.ndarray:
    if not buffer:
        return np.zeros(0, dtype=np.int64)

    if is_utf8(codec):
        # Every byte that is not a continuation byte `10xxxxxx` starts a new code point
        raw = np.frombuffer(buffer, dtype=np.uint8)
        starts = (raw & 0xC0) != 0x80
        offset_map = np.cumsum(starts, dtype=np.int64) - 1
    else:
        widths = codepoint_widths(decoded, codec)
        offset_map = np.repeat(np.arange(len(decoded), dtype=np.int64), widths)

    logger.debug("Built offset map of %d bytes for %d code points (%s)", len(buffer), len(decoded), codec)
    return offset_map


def lookup(offset_map: np.ndarray, offset: int, direction: Direction) -> int:
    """Translate `offset` between coordinate spaces, returning `NOT_FOUND` when it is not covered."""
    if offset < 0:
        return NOT_FOUND

    if direction is Direction.BYTE_TO_CODEPOINT:
        if offset >= len(offset_map):
            return NOT_FOUND
        return int(offset_map[offset])

    position = int(np.searchsorted(offset_map, offset, side="left"))
    if position >= len(offset_map) or offset_map[position] != offset:
        return NOT_FOUND
    return position


def is_boundary(offset_map: np.ndarray, byte_offset: int) -> bool:
    """Checks if a code point starts at `byte_offset`; the end of the buffer counts as a boundary."""
    if byte_offset <= 0 or byte_offset >= len(offset_map):
        return byte_offset == 0 or byte_offset == len(offset_map)
    return bool(offset_map[byte_offset] != offset_map[byte_offset - 1])

