"""Nibble and BCD helpers for the field layouts."""

from __future__ import annotations

from collections.abc import Sequence

from rf_weather_decoder.core.config import (
    TEMPERATURE_WRAP_LIMIT,
    TEMPERATURE_WRAP_OFFSET,
    TENTHS,
)


def nibble(message: bytes, index: int) -> int:
    """Return nibble ``index``: even indices are high nibbles, odd are low.

    Example:
        >>> nibble(bytes([0x12, 0x34]), 2)
        3
    """
    byte = message[index // 2]
    return byte & 0x0F if index % 2 else byte >> 4


def digits(message: bytes, positions: Sequence[int], base: int = 10) -> int:
    """Combine nibbles into a number, most significant position first.

    With the default base each nibble is one BCD digit. Positions need not
    be in message order; several layouts send the leading digit after the
    others.

    Args:
        message: Conditioned message bytes.
        positions: Nibble indices, most significant first.
        base: Digit base (10 for BCD, 16 for plain binary nibbles).

    Returns:
        Combined value.
    """
    value = 0
    for pos in positions:
        value = value * base + nibble(message, pos)
    return value


def wrap_temperature(raw: int) -> int:
    """Undo the wrap-around encoding of negative temperatures (tenths)."""
    if raw > TEMPERATURE_WRAP_LIMIT:
        return raw - TEMPERATURE_WRAP_OFFSET
    return raw


def scale(raw: int, factor: float = TENTHS) -> float:
    """Scale a raw count and round to one decimal."""
    return round(raw * factor, 1)
