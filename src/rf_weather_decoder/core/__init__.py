"""Core decoder support - bit buffers, configuration, exceptions."""

from rf_weather_decoder.core.bitbuffer import BitBuffer
from rf_weather_decoder.core.config import (
    BRESSER_REGISTRATION,
    DEFAULT_CONFIG,
    FRAME_5IN1,
    FRAME_6IN1,
    FRAME_7IN1,
    OUTPUT_FIELDS,
    DecoderConfig,
    DeviceRegistration,
    DigestPolicy,
    FrameSpec,
    load_config,
)
from rf_weather_decoder.core.exceptions import (
    BitBufferError,
    BitCodeError,
    ConfigurationError,
    DecoderError,
    RowIndexError,
)

__all__ = [
    "BitBuffer",
    "BRESSER_REGISTRATION",
    "DEFAULT_CONFIG",
    "FRAME_5IN1",
    "FRAME_6IN1",
    "FRAME_7IN1",
    "OUTPUT_FIELDS",
    "DecoderConfig",
    "DeviceRegistration",
    "DigestPolicy",
    "FrameSpec",
    "load_config",
    "DecoderError",
    "BitBufferError",
    "BitCodeError",
    "ConfigurationError",
    "RowIndexError",
]
