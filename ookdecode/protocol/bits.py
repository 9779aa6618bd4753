# ookdecode/protocol/bits.py
"""
Sub-byte field extraction for fixed-layout radio packets.

All helpers read MSB-first: for multi-byte fields the earlier packet byte
holds the more significant bits. Reading past the end of the buffer raises
IndexError; decoders are expected to know their own layout length.
"""
from __future__ import annotations

from typing import Sequence


def _byte_at(buf: Sequence[int], index: int) -> int:
    if index < 0 or index >= len(buf):
        raise IndexError(f"Byte index {index} out of range for {len(buf)}-byte packet")
    return int(buf[index]) & 0xFF


def bits(buf: Sequence[int], index: int, mask: int = 0xFF, shift: int = 0) -> int:
    """Return (buf[index] & mask) >> shift."""
    return (_byte_at(buf, index) & mask) >> shift


def bit(buf: Sequence[int], index: int, position: int) -> bool:
    return bool(_byte_at(buf, index) & (1 << position))


def field(buf: Sequence[int], index: int, width: int, offset: int) -> int:
    """
    Extract `width` bits starting `offset` bits into the packet, counted from
    the MSB of buf[index]. The field may span at most two adjacent bytes.
    """
    if width <= 0:
        raise ValueError(f"Field width must be positive (got {width})")
    if offset < 0 or offset > 7:
        raise ValueError(f"Bit offset must be in 0..7 (got {offset})")
    if offset + width > 16:
        raise ValueError(f"Field of {width} bits at offset {offset} spans more than two bytes")

    if offset + width <= 8:
        word, span = _byte_at(buf, index), 8
    else:
        word, span = (_byte_at(buf, index) << 8) | _byte_at(buf, index + 1), 16

    return (word >> (span - offset - width)) & ((1 << width) - 1)


def concat(*parts: tuple[int, int]) -> int:
    """
    Join (value, width) pairs into one unsigned integer, first part most
    significant.
    """
    out = 0
    for value, width in parts:
        if value < 0 or value >> width:
            raise ValueError(f"Value {value} does not fit in {width} bits")
        out = (out << width) | value
    return out


def uint_be(buf: Sequence[int], index: int, size: int) -> int:
    """Unsigned big-endian integer from `size` whole bytes."""
    out = 0
    for i in range(index, index + size):
        out = (out << 8) | _byte_at(buf, i)
    return out
