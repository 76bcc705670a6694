"""Whitening and inversion applied before a frame's bytes are meaningful.

All transforms return new bytes; the extracted message is never changed
in place.
"""

from __future__ import annotations

from collections.abc import Iterable

from rf_weather_decoder.core.config import INVERSION_MASK, WHITENING_MASK


def whiten(message: bytes, mask: int = WHITENING_MASK) -> bytes:
    """XOR every byte with a constant mask."""
    return bytes(b ^ mask for b in message)


def invert(data: bytes) -> bytes:
    """Bitwise complement of every byte."""
    return whiten(data, INVERSION_MASK)


def invert_ranges(message: bytes, ranges: Iterable[slice]) -> bytes:
    """Complement the bytes covered by ``ranges``, leaving the rest as is.

    Example:
        >>> invert_ranges(bytes([0x00, 0x0F, 0xF0]), [slice(1, 3)])
        b'\\x00\\xf0\\x0f'
    """
    out = bytearray(message)
    for sel in ranges:
        out[sel] = invert(bytes(out[sel]))
    return bytes(out)


def mirror_halves(message: bytes) -> tuple[bytes, bytes]:
    """Split a mirrored frame into its first half and de-inverted second half."""
    half = len(message) // 2
    return message[:half], invert(message[half : 2 * half])
