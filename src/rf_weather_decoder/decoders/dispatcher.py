"""Variant dispatch: try each Bresser protocol against the same capture.

The host cannot tell which sensor model sent a transmission, so the
variants are tried in a fixed order. Longer preambles go first: the
shorter 6-in-1 pattern also matches inside a 7-in-1 or 5-in-1 preamble.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import VERBOSE_FIELDS, DecoderConfig, load_config
from rf_weather_decoder.decoders.bresser import VARIANT_DECODERS
from rf_weather_decoder.decoders.models import DecodeOutcome

logger = logging.getLogger(__name__)


def decode(
    bitbuffer: BitBuffer,
    config: DecoderConfig | Mapping[str, Any] | None = None,
) -> DecodeOutcome:
    """Decode one capture, trying 7-in-1, then 6-in-1, then 5-in-1.

    Args:
        bitbuffer: Capture from the host demodulator.
        config: Decoder settings, a mapping of them, or None for defaults.

    Returns:
        The first DECODED outcome, otherwise the last variant's outcome.

    Example:
        >>> outcome = decode(BitBuffer.parse(code))
        >>> if outcome.decoded:
        ...     print(outcome.reading.to_dict())
    """
    config = load_config(config)

    outcome: DecodeOutcome | None = None
    for variant, decoder in VARIANT_DECODERS:
        outcome = decoder(bitbuffer, config)
        if outcome.decoded:
            return outcome
        if config.traces(VERBOSE_FIELDS):
            logger.debug("%s: %s %s", variant.value, outcome.status.value, outcome.detail)

    assert outcome is not None
    return outcome


def decode_code(
    code: str,
    config: DecoderConfig | Mapping[str, Any] | None = None,
) -> DecodeOutcome:
    """Parse an rtl_433 bit code and decode it.

    Raises:
        BitCodeError: If the code is malformed.
    """
    return decode(BitBuffer.parse(code), config)


def decode_all(
    bitbuffers: Iterable[BitBuffer],
    config: DecoderConfig | Mapping[str, Any] | None = None,
) -> list[DecodeOutcome]:
    """Decode several independent captures.

    Args:
        bitbuffers: Captures to decode.
        config: Decoder settings shared by all calls.

    Returns:
        One outcome per capture, in input order.
    """
    config = load_config(config)
    return [decode(buf, config) for buf in bitbuffers]
