"""Decoders for the Bresser 7-in-1, 6-in-1 and 5-in-1 weather sensors.

All three share FSK PCM framing with a 0xAA preamble and a 0x2DD4 sync
word but differ in frame size, conditioning, integrity scheme and field
layout.

7-in-1 outdoor sensor, 25 bytes after ``aa aa aa 2d d4``, whitened with 0xAA::

    DIGEST:8h8h ID:8h8h WDIR:8h4h 4h 8h WGUST:8h.4h WAVG:8h.4h RAIN:8h8h4h.4h
    ?:8h TEMP:8h.4h 4h HUM:8h LIGHT:8h4h,4h ?:8h8h4h TRAILER:8h8h8h4h

    LFSR-16 digest over bytes 2..24, generator 0x8810, key 0xba95,
    final xor 0x6df1. Light is reported in klx.

6-in-1 (also the 7-in-1 indoor sensor), 18 bytes after ``aa aa 2d d4``::

    DIGEST:8h8h ID:8h8h8h8h FLAGS:4h BATT:1b CH:3d WSPEED:~8h~4h ~4h~8h
    WDIR:12h ?4h TEMP:8h.4h ?4h HUM:8h UV:~12h ?4h CHKSUM:8h

    LFSR-16 digest over bytes 2..16, generator 0x8810, key 0x5412.
    Bytes 2..17 add up to 0xff (mod 256). Temperature and rain share
    bytes 12..14; rain is only present when temperature is not.

5-in-1, 26 bytes after ``aa aa aa 2d d4``; bytes 0..12 are the complement
of bytes 13..25 and the fields are read from the second half::

    CC CC CC CC CC CC CC CC CC CC CC CC CC uu II    GG DG WW  W TT  T HH RR  R Bt
                                              G-MSB ^     ^ W-MSB

    uu = number of set bits in bytes 14..25, II = id, G = gust (binary),
    D = direction index, W = average (BCD), T = temperature (BCD),
    t = sign, H = humidity, R = rain, B = battery (0 ok, 8 low).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import (
    COMPASS_STEP_DEG,
    DIGEST_KEY_6IN1,
    DIGEST_KEY_7IN1,
    DIGEST_XOR_7IN1,
    FIELD_ABSENT,
    FRAME_5IN1,
    FRAME_6IN1,
    FRAME_7IN1,
    VERBOSE_FIELDS,
    VERBOSE_FRAMES,
    DecoderConfig,
    DigestPolicy,
    load_config,
)
from rf_weather_decoder.decoders.conditioning import invert_ranges, whiten
from rf_weather_decoder.decoders.fields import digits, nibble, scale, wrap_temperature
from rf_weather_decoder.decoders.framing import read_frame
from rf_weather_decoder.decoders.integrity import (
    add_bytes,
    checksum_ok,
    digest_ok,
    lfsr_digest16,
    parity_mismatch,
    popcount,
    stored_digest,
)
from rf_weather_decoder.decoders.models import (
    MIC_CHECKSUM,
    MIC_CRC,
    MIC_UNVERIFIED,
    DecodedReading,
    DecodeOutcome,
    DecodeStatus,
    SensorVariant,
)

logger = logging.getLogger(__name__)

VariantDecoder = Callable[[BitBuffer, DecoderConfig], DecodeOutcome]

# Nibble positions (2 * byte index, +1 for the low nibble), most significant first
LAYOUT_7IN1: dict[str, tuple[int, ...]] = {
    "wind_dir": (8, 9, 10),
    "wind_gust": (14, 15, 16),
    "wind_avg": (17, 18, 19),
    "rain": (20, 21, 22, 23, 24, 25),
    "temperature": (28, 29, 30),
    "humidity": (32, 33),
    "light": (34, 35, 36, 37),
}

LAYOUT_6IN1: dict[str, tuple[int, ...]] = {
    "temperature": (24, 25, 26),
    "humidity": (28, 29),
    "uv": (30, 31, 32),
    "unknown": (30, 31),
    "wind_gust": (14, 15, 16),
    "wind_avg": (18, 19, 17),
    "wind_dir": (20, 21, 22),
    "rain": (26, 27, 28, 29),
}

LAYOUT_5IN1: dict[str, tuple[int, ...]] = {
    "temperature": (43, 40, 41),
    "humidity": (44, 45),
    "wind_gust": (35, 32, 33),  # binary nibbles, not BCD
    "wind_avg": (39, 36, 37),
    "rain": (49, 46, 47),
}

WIND_BYTES_6IN1 = slice(7, 10)
RAIN_BYTES_6IN1 = slice(13, 15)


# =============================================================================
# 7-in-1
# =============================================================================


def parse_7in1(message: bytes, mic: str = MIC_CRC) -> DecodedReading:
    """Decode fields from a whitened 7-in-1 message."""
    lay = LAYOUT_7IN1
    return DecodedReading(
        variant=SensorVariant.BRESSER_7IN1,
        id=int.from_bytes(message[2:4], "big"),
        mic=mic,
        temperature_c=scale(wrap_temperature(digits(message, lay["temperature"]))),
        humidity=digits(message, lay["humidity"]),
        wind_max_m_s=scale(digits(message, lay["wind_gust"])),
        wind_avg_m_s=scale(digits(message, lay["wind_avg"])),
        wind_dir_deg=digits(message, lay["wind_dir"]),
        rain_mm=scale(digits(message, lay["rain"])),
        light_klx=scale(digits(message, lay["light"])),
        raw=message,
    )


def decode_7in1(bitbuffer: BitBuffer, config: DecoderConfig | None = None) -> DecodeOutcome:
    """Decode a Bresser 7-in-1 outdoor sensor transmission.

    Args:
        bitbuffer: Capture from the host demodulator.
        config: Decoder settings. Defaults to DEFAULT_CONFIG.

    Returns:
        DecodeOutcome for the 7-in-1 variant.
    """
    config = load_config(config)
    variant = SensorVariant.BRESSER_7IN1

    frame = read_frame(bitbuffer, FRAME_7IN1, variant, config)
    if isinstance(frame, DecodeOutcome):
        return frame
    if config.traces(VERBOSE_FRAMES):
        logger.debug("%s: MSG: %s", variant.value, frame.hex())

    if frame[21] == 0x00:
        return DecodeOutcome.failure(variant, DecodeStatus.REJECTED_SANITY, "byte 21 is zero")

    message = whiten(frame)
    if config.traces(VERBOSE_FRAMES):
        logger.debug("%s: XOR: %s", variant.value, message.hex())

    mic = MIC_CRC
    if not digest_ok(message, DIGEST_KEY_7IN1, 2, 23, DIGEST_XOR_7IN1):
        chk = stored_digest(message)
        digest = lfsr_digest16(message[2:25], key=DIGEST_KEY_7IN1)
        detail = f"digest check failed {chk:04x} vs {digest:04x} ({chk ^ digest:04x})"
        if config.traces(VERBOSE_FRAMES):
            logger.debug("%s: %s", variant.value, detail)
        if config.digest_policy == DigestPolicy.STRICT:
            return DecodeOutcome.failure(variant, DecodeStatus.FAILED_INTEGRITY, detail)
        mic = MIC_UNVERIFIED

    return DecodeOutcome.success(parse_7in1(message, mic))


# =============================================================================
# 6-in-1
# =============================================================================


def parse_6in1(message: bytes, config: DecoderConfig | None = None) -> DecodedReading:
    """Decode fields from a verified 6-in-1 message.

    Wind and rain bytes are sent inverted; they are read from a
    de-inverted copy while the remaining fields come from the message
    as received.
    """
    config = load_config(config)
    lay = LAYOUT_6IN1

    temp_ok = message[12] != FIELD_ABSENT
    humidity_ok = message[14] != FIELD_ABSENT
    uv_ok = (message[16] & 0xF0) != 0xF0

    wind = invert_ranges(message, [WIND_BYTES_6IN1])
    wind_ok = all(b <= 0x99 for b in wind[WIND_BYTES_6IN1])
    rain = invert_ranges(message, [RAIN_BYTES_6IN1])

    if config.traces(VERBOSE_FIELDS):
        logger.debug(
            "Gust %d %d %d, Avg %d %d %d",
            *(nibble(wind, p) for p in lay["wind_gust"]),
            *(nibble(wind, p) for p in lay["wind_avg"]),
        )

    return DecodedReading(
        variant=SensorVariant.BRESSER_6IN1,
        id=int.from_bytes(message[2:6], "big"),
        mic=MIC_CRC,
        temperature_c=(
            scale(wrap_temperature(digits(message, lay["temperature"]))) if temp_ok else None
        ),
        humidity=digits(message, lay["humidity"]) if humidity_ok else None,
        wind_max_m_s=scale(digits(wind, lay["wind_gust"])) if wind_ok else None,
        wind_avg_m_s=scale(digits(wind, lay["wind_avg"])) if wind_ok else None,
        wind_dir_deg=digits(message, lay["wind_dir"]) if wind_ok else None,
        rain_mm=None if temp_ok else scale(digits(rain, lay["rain"])),
        uv=scale(digits(message, lay["uv"])) if uv_ok else None,
        unknown=None if uv_ok else digits(message, lay["unknown"]),
        battery_ok=not (message[6] >> 3) & 1,
        channel=message[6] & 0x07,
        flags=message[6] >> 4,
        raw=message,
    )


def decode_6in1(bitbuffer: BitBuffer, config: DecoderConfig | None = None) -> DecodeOutcome:
    """Decode a Bresser 6-in-1 sensor transmission.

    Both the LFSR digest and the additive checksum must pass.
    """
    config = load_config(config)
    variant = SensorVariant.BRESSER_6IN1

    message = read_frame(bitbuffer, FRAME_6IN1, variant, config)
    if isinstance(message, DecodeOutcome):
        return message
    if config.traces(VERBOSE_FRAMES):
        logger.debug("%s: MSG: %s", variant.value, message.hex())

    if not digest_ok(message, DIGEST_KEY_6IN1, 2, 15):
        digest = lfsr_digest16(message[2:17], key=DIGEST_KEY_6IN1)
        detail = f"digest check failed {stored_digest(message):04x} vs {digest:04x}"
        if config.traces(VERBOSE_FRAMES):
            logger.debug("%s: %s", variant.value, detail)
        return DecodeOutcome.failure(variant, DecodeStatus.FAILED_INTEGRITY, detail)

    if not checksum_ok(message[2:18]):
        detail = f"checksum failed {message[17]:02x} vs {add_bytes(message[2:18]):04x}"
        if config.traces(VERBOSE_FRAMES):
            logger.debug("%s: %s", variant.value, detail)
        return DecodeOutcome.failure(variant, DecodeStatus.FAILED_INTEGRITY, detail)

    return DecodeOutcome.success(parse_6in1(message, config))


# =============================================================================
# 5-in-1
# =============================================================================


def parse_5in1(message: bytes) -> DecodedReading:
    """Decode fields from the second half of a verified 5-in-1 message."""
    lay = LAYOUT_5IN1

    temp_raw = digits(message, lay["temperature"])
    if message[25] & 0x0F:
        temp_raw = -temp_raw

    return DecodedReading(
        variant=SensorVariant.BRESSER_5IN1,
        id=message[14],
        mic=MIC_CHECKSUM,
        temperature_c=scale(temp_raw),
        humidity=digits(message, lay["humidity"]),
        wind_max_m_s=scale(digits(message, lay["wind_gust"], base=16)),
        wind_avg_m_s=scale(digits(message, lay["wind_avg"])),
        wind_dir_deg=scale(nibble(message, 34), COMPASS_STEP_DEG),
        rain_mm=scale(digits(message, lay["rain"])),
        battery_ok=(message[25] & 0x80) == 0,
        raw=message,
    )


def decode_5in1(bitbuffer: BitBuffer, config: DecoderConfig | None = None) -> DecodeOutcome:
    """Decode a Bresser 5-in-1 sensor transmission.

    The frame carries its own complement, which serves as the parity
    check.
    """
    config = load_config(config)
    variant = SensorVariant.BRESSER_5IN1

    message = read_frame(bitbuffer, FRAME_5IN1, variant, config)
    if isinstance(message, DecodeOutcome):
        return message
    if config.traces(VERBOSE_FRAMES):
        logger.debug("%s: MSG: %s", variant.value, message.hex())

    col = parity_mismatch(message)
    if col is not None:
        if config.traces(VERBOSE_FIELDS):
            logger.debug("%s: parity wrong at %d", variant.value, col)
        return DecodeOutcome.failure(
            variant, DecodeStatus.FAILED_INTEGRITY, f"parity wrong at {col}"
        )

    # Byte 13 counts the set bits of the payload; informational only
    if config.traces(VERBOSE_FIELDS) and popcount(message[14:26]) != message[13]:
        logger.debug(
            "%s: bit count %d vs %d", variant.value, popcount(message[14:26]), message[13]
        )

    return DecodeOutcome.success(parse_5in1(message))


VARIANT_DECODERS: tuple[tuple[SensorVariant, VariantDecoder], ...] = (
    (SensorVariant.BRESSER_7IN1, decode_7in1),
    (SensorVariant.BRESSER_6IN1, decode_6in1),
    (SensorVariant.BRESSER_5IN1, decode_5in1),
)
