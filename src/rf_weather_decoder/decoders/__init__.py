"""Bresser weather sensor decoders.

This module turns demodulated bit buffers into weather readings:
- Bresser 7-in-1 outdoor sensor (whitened, LFSR digest)
- Bresser 6-in-1 and 7-in-1 indoor sensor (LFSR digest + checksum)
- Bresser 5-in-1 (parity mirror)

Use ``decode`` to try all variants in priority order.
"""

from __future__ import annotations

from rf_weather_decoder.decoders.bresser import (
    VARIANT_DECODERS,
    decode_5in1,
    decode_6in1,
    decode_7in1,
)
from rf_weather_decoder.decoders.dispatcher import decode, decode_all, decode_code
from rf_weather_decoder.decoders.models import (
    DecodedReading,
    DecodeOutcome,
    DecodeStatus,
    SensorVariant,
)

__all__ = [
    # Dispatch
    "decode",
    "decode_all",
    "decode_code",
    # Variant decoders
    "decode_7in1",
    "decode_6in1",
    "decode_5in1",
    "VARIANT_DECODERS",
    # Data models
    "DecodedReading",
    "DecodeOutcome",
    "DecodeStatus",
    "SensorVariant",
]
