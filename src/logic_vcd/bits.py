"""Bit access into packed logic samples."""

from __future__ import annotations


def get_bit(buffer: bytes | bytearray | memoryview, index: int) -> int:
    """Return the logic level (0 or 1) of bit ``index`` in a packed buffer."""
    return (buffer[index // 8] >> (index % 8)) & 1
