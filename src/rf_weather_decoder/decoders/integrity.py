"""Integrity checks used by the Bresser protocol family.

Three schemes, selected by variant:

- parity mirror (5-in-1): the second half of the frame is the bitwise
  complement of the first half
- additive checksum (6-in-1): the byte sum over the payload ends in 0xFF
- LFSR-16 digest (6-in-1, 7-in-1): keyed digest compared with the first
  two message bytes
"""

from __future__ import annotations

from rf_weather_decoder.core.config import CHECKSUM_TARGET, LFSR_GENERATOR
from rf_weather_decoder.decoders.conditioning import mirror_halves


def parity_mismatch(message: bytes) -> int | None:
    """Find the first byte that is not mirrored by its complement.

    Args:
        message: Frame whose second half should invert the first half.

    Returns:
        Index of the first mismatching byte pair, or None if all match.
    """
    first, restored = mirror_halves(message)
    for col, (a, b) in enumerate(zip(first, restored)):
        if a != b:
            return col
    return None


def add_bytes(data: bytes) -> int:
    """Plain integer sum of all bytes."""
    return sum(data)


def checksum_ok(data: bytes, target: int = CHECKSUM_TARGET) -> bool:
    """True if the low eight bits of the byte sum equal ``target``."""
    return (add_bytes(data) & 0xFF) == target


def lfsr_digest16(data: bytes, gen: int = LFSR_GENERATOR, key: int = 0) -> int:
    """Compute a 16-bit LFSR digest.

    Bits are consumed MSB first. A set data bit XORs the current key into
    the digest; the key then rolls one step right, feeding the generator
    back in when the bit shifted out was 1.

    Args:
        data: Payload bytes.
        gen: Generator polynomial.
        key: Initial key.

    Returns:
        16-bit digest.
    """
    digest = 0
    for byte in data:
        for i in range(7, -1, -1):
            if (byte >> i) & 1:
                digest ^= key
            if key & 1:
                key = (key >> 1) ^ gen
            else:
                key >>= 1
    return digest & 0xFFFF


def stored_digest(message: bytes) -> int:
    """Big-endian digest carried in the first two message bytes."""
    return int.from_bytes(message[:2], "big")


def digest_ok(
    message: bytes,
    key: int,
    start: int,
    length: int,
    final_xor: int = 0,
    gen: int = LFSR_GENERATOR,
) -> bool:
    """Verify the LFSR digest of ``message[start:start + length]``."""
    digest = lfsr_digest16(message[start : start + length], gen, key)
    return (stored_digest(message) ^ digest) == final_xor


def popcount(data: bytes) -> int:
    """Number of set bits."""
    return sum(bin(b).count("1") for b in data)
