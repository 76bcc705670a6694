"""RF Weather Decoder - Bresser 5/6/7-in-1 weather sensor protocol decoding."""

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import (
    BRESSER_REGISTRATION,
    DecoderConfig,
    DigestPolicy,
)
from rf_weather_decoder.core.exceptions import (
    BitBufferError,
    BitCodeError,
    ConfigurationError,
    DecoderError,
)
from rf_weather_decoder.decoders import (
    DecodedReading,
    DecodeOutcome,
    DecodeStatus,
    SensorVariant,
    decode,
    decode_all,
    decode_code,
)

__version__ = "0.1.0"

__all__ = [
    # Input
    "BitBuffer",
    # Decoding
    "decode",
    "decode_all",
    "decode_code",
    "DecodedReading",
    "DecodeOutcome",
    "DecodeStatus",
    "SensorVariant",
    # Config
    "DecoderConfig",
    "DigestPolicy",
    "BRESSER_REGISTRATION",
    # Exceptions
    "DecoderError",
    "BitBufferError",
    "BitCodeError",
    "ConfigurationError",
]
