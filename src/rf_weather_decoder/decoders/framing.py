"""Preamble synchronisation and frame extraction.

Each step answers with a value or None; the variant decoders turn a None
into the matching rejection outcome so the dispatcher can move on to the
next protocol.
"""

from __future__ import annotations

import logging

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import VERBOSE_FIELDS, DecoderConfig, FrameSpec
from rf_weather_decoder.decoders.models import DecodeOutcome, DecodeStatus, SensorVariant

logger = logging.getLogger(__name__)


def check_row(bitbuffer: BitBuffer, spec: FrameSpec) -> DecodeStatus | None:
    """Check row count and row length against the variant bounds.

    Args:
        bitbuffer: Capture to check.
        spec: Variant framing parameters.

    Returns:
        Rejection status, or None if the row is acceptable.
    """
    if bitbuffer.num_rows != 1:
        return DecodeStatus.REJECTED_ROW_COUNT_OR_LENGTH

    num_bits = bitbuffer.bits_per_row(0)
    if num_bits < spec.min_row_bits:
        return DecodeStatus.REJECTED_TOO_FEW_BITS
    if spec.max_row_bits is not None and num_bits > spec.max_row_bits:
        return DecodeStatus.REJECTED_ROW_COUNT_OR_LENGTH
    return None


def find_preamble(bitbuffer: BitBuffer, preamble: bytes, row: int = 0) -> int | None:
    """Locate a preamble and return the bit offset just past it.

    Args:
        bitbuffer: Capture to search.
        preamble: Preamble bytes.
        row: Row index.

    Returns:
        Offset of the first bit after the preamble, or None if not found.
    """
    pos = bitbuffer.search(row, preamble)
    if pos >= bitbuffer.bits_per_row(row):
        return None
    return pos + len(preamble) * 8


def extract_message(
    bitbuffer: BitBuffer, offset: int, length: int, row: int = 0
) -> bytes | None:
    """Copy a fixed-size message following a sync offset.

    Bits beyond ``length`` bytes are ignored.

    Returns:
        ``length`` bytes, or None if fewer than ``length * 8`` bits remain.
    """
    if bitbuffer.bits_per_row(row) - offset < length * 8:
        return None
    return bitbuffer.extract_bytes(row, offset, length * 8)


def read_frame(
    bitbuffer: BitBuffer,
    spec: FrameSpec,
    variant: SensorVariant,
    config: DecoderConfig,
) -> bytes | DecodeOutcome:
    """Run row checks, preamble search and extraction for one variant.

    Returns:
        The message bytes, or the rejecting DecodeOutcome.
    """
    rejection = check_row(bitbuffer, spec)
    if rejection is not None:
        num_bits = bitbuffer.bits_per_row(0) if bitbuffer.num_rows else 0
        detail = f"{bitbuffer.num_rows} rows, {num_bits} bits"
        if config.traces(VERBOSE_FIELDS):
            logger.debug("%s: bits per row out of range (%s)", variant.value, detail)
        return DecodeOutcome.failure(variant, rejection, detail)

    offset = find_preamble(bitbuffer, spec.preamble)
    if offset is None:
        if config.traces(VERBOSE_FIELDS):
            logger.debug("%s: preamble not found", variant.value)
        return DecodeOutcome.failure(variant, DecodeStatus.REJECTED_PREAMBLE_NOT_FOUND)

    message = extract_message(bitbuffer, offset, spec.message_bytes)
    if message is None:
        remaining = bitbuffer.bits_per_row(0) - offset
        if config.traces(VERBOSE_FIELDS):
            logger.debug("%s: message too short (%d bits)", variant.value, remaining)
        return DecodeOutcome.failure(
            variant,
            DecodeStatus.REJECTED_TOO_SHORT_AFTER_SYNC,
            f"{remaining} bits after sync, {spec.message_bits} needed",
        )
    return message
