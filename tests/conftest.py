"""Pytest configuration and fixtures."""

from __future__ import annotations

from types import SimpleNamespace

import numpy as np
import pytest

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import (
    DIGEST_KEY_6IN1,
    DIGEST_KEY_7IN1,
    DIGEST_XOR_7IN1,
    PREAMBLE_LONG,
    PREAMBLE_SHORT,
)
from rf_weather_decoder.decoders.conditioning import invert, whiten
from rf_weather_decoder.decoders.integrity import lfsr_digest16

# ============================================================================
# Reference captures
# ============================================================================

# 7-in-1 outdoor sensor: full preamble plus the documented {271} row
CAPTURE_7IN1 = (
    "{327}aaaaaaaaaa2dd4"
    "631d05c09e9a18abaabaaaaaaaaa8adacbacff9cafcaaaaaaa000000000000000000"
)

# 6-in-1 raw row as received, sync word ends at bit 55 (not byte aligned)
CAPTURE_6IN1 = "{205}55555555545ba999263100058631fffffe66d006092bffe0cff8"

# 6-in-1 messages (the 18 bytes after the sync word)
MSG_6IN1_TEMP = bytes.fromhex("5eaa188002c318fa8ffb2768118481fff072")
MSG_6IN1_BAD_DIGEST = bytes.fromhex("aed1188002c318fa8dfb2678fffffffe02db")
MSG_6IN1_RAIN = bytes.fromhex("b2f31234567813edcafb2700ffedcb0560e3")

# 5-in-1 messages (26 bytes)
MSG_5IN1 = bytes.fromhex("ee937ff7bffbef9efeaebfffff116c8008400410610151400000")
MSG_5IN1_NEG_TEMP = bytes.fromhex("eda1ffff1fffef8fffd6dfff77125e0000e00010700029200088")
MSG_5IN1_HIGH_WIND = bytes.fromhex("e3fd7f897e8aed68feaf9bfdff1c028076817512970150640200")


def _bits(data: bytes) -> list[int]:
    return np.unpackbits(np.frombuffer(data, dtype=np.uint8)).tolist()


def build_bitbuffer(
    message: bytes,
    preamble: bytes = PREAMBLE_LONG,
    pad_bits: int = 0,
    trailer: bytes = b"",
) -> BitBuffer:
    """Single-row buffer: zero padding, preamble, message, trailer."""
    return BitBuffer([[0] * pad_bits + _bits(preamble) + _bits(message) + _bits(trailer)])


def build_6in1(body: bytes) -> bytes:
    """Complete a 15-byte 6-in-1 payload (bytes 2..16) with digest and checksum."""
    assert len(body) == 15
    checksum = (0xFF - sum(body)) & 0xFF
    digest = lfsr_digest16(body, key=DIGEST_KEY_6IN1)
    return digest.to_bytes(2, "big") + body + bytes([checksum])


def build_7in1(body: bytes) -> bytes:
    """Complete a 23-byte de-whitened 7-in-1 payload and whiten it for the air."""
    assert len(body) == 23
    digest = lfsr_digest16(body, key=DIGEST_KEY_7IN1) ^ DIGEST_XOR_7IN1
    return whiten(digest.to_bytes(2, "big") + body)


def build_5in1(payload: bytes) -> bytes:
    """Prefix a 13-byte 5-in-1 payload with its complement."""
    assert len(payload) == 13
    return invert(payload) + payload


def flip_bit(data: bytes, bit: int) -> bytes:
    """Flip one bit, numbered MSB first."""
    out = bytearray(data)
    out[bit // 8] ^= 0x80 >> (bit % 8)
    return bytes(out)


@pytest.fixture
def frames() -> SimpleNamespace:
    """Reference messages and frame builders."""
    return SimpleNamespace(
        capture_7in1=CAPTURE_7IN1,
        capture_6in1=CAPTURE_6IN1,
        msg_6in1_temp=MSG_6IN1_TEMP,
        msg_6in1_bad_digest=MSG_6IN1_BAD_DIGEST,
        msg_6in1_rain=MSG_6IN1_RAIN,
        msg_5in1=MSG_5IN1,
        msg_5in1_neg_temp=MSG_5IN1_NEG_TEMP,
        msg_5in1_high_wind=MSG_5IN1_HIGH_WIND,
        short_preamble=PREAMBLE_SHORT,
        long_preamble=PREAMBLE_LONG,
        bitbuffer=build_bitbuffer,
        build_6in1=build_6in1,
        build_7in1=build_7in1,
        build_5in1=build_5in1,
        flip_bit=flip_bit,
    )


@pytest.fixture
def capture_7in1() -> BitBuffer:
    """Documented 7-in-1 outdoor sensor capture."""
    return BitBuffer.parse(CAPTURE_7IN1)


@pytest.fixture
def capture_6in1() -> BitBuffer:
    """Documented 6-in-1 raw row."""
    return BitBuffer.parse(CAPTURE_6IN1)


@pytest.fixture
def capture_5in1() -> BitBuffer:
    """Documented 5-in-1 frame behind its preamble."""
    return build_bitbuffer(MSG_5IN1)
