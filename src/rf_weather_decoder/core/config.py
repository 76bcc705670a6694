"""Configuration constants and decoder settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from rf_weather_decoder.core.exceptions import ConfigurationError

# =============================================================================
# Preambles
# =============================================================================
PREAMBLE_SHORT: bytes = bytes([0xAA, 0xAA, 0x2D, 0xD4])  # 6-in-1
PREAMBLE_LONG: bytes = bytes([0xAA, 0xAA, 0xAA, 0x2D, 0xD4])  # 7-in-1, 5-in-1

# =============================================================================
# Conditioning
# =============================================================================
WHITENING_MASK: int = 0xAA  # 7-in-1 line whitening
INVERSION_MASK: int = 0xFF
FIELD_ABSENT: int = 0xFF  # sentinel byte for fields that were not transmitted

# =============================================================================
# Integrity
# =============================================================================
LFSR_GENERATOR: int = 0x8810
DIGEST_KEY_6IN1: int = 0x5412
DIGEST_KEY_7IN1: int = 0xBA95
DIGEST_XOR_7IN1: int = 0x6DF1
CHECKSUM_TARGET: int = 0xFF

# =============================================================================
# Field scaling
# =============================================================================
TEMPERATURE_WRAP_LIMIT: int = 600  # tenths of a degree
TEMPERATURE_WRAP_OFFSET: int = 1000
COMPASS_STEP_DEG: float = 22.5  # 5-in-1 wind direction index
TENTHS: float = 0.1

# =============================================================================
# Verbosity levels (rtl_433 convention)
# =============================================================================
VERBOSE_FRAMES: int = 1  # hex dumps, integrity mismatch detail
VERBOSE_FIELDS: int = 2  # per-field and rejection traces
MAX_VERBOSE: int = 3


@dataclass(frozen=True)
class FrameSpec:
    """Framing parameters of one protocol variant."""

    preamble: bytes
    message_bytes: int
    min_row_bits: int
    max_row_bits: int | None = None

    @property
    def message_bits(self) -> int:
        return self.message_bytes * 8


FRAME_7IN1 = FrameSpec(preamble=PREAMBLE_LONG, message_bytes=25, min_row_bits=160)
FRAME_6IN1 = FrameSpec(
    preamble=PREAMBLE_SHORT, message_bytes=18, min_row_bits=160, max_row_bits=440
)
FRAME_5IN1 = FrameSpec(
    preamble=PREAMBLE_LONG, message_bytes=26, min_row_bits=248, max_row_bits=440
)

# Sink record keys, in output order
OUTPUT_FIELDS: tuple[str, ...] = (
    "model",
    "id",
    "channel",
    "battery",
    "battery_ok",
    "temperature_C",
    "humidity",
    "wind_max_m_s",
    "wind_avg_m_s",
    "wind_dir_deg",
    "rain_mm",
    "light_klx",
    "uv",
    "unknown",
    "flags",
    "mic",
)


@dataclass(frozen=True)
class DeviceRegistration:
    """Host registration entry: how the host assembles bit buffers for us."""

    name: str
    modulation: str
    short_width_us: int
    long_width_us: int
    reset_limit_us: int
    fields: tuple[str, ...] = OUTPUT_FIELDS


BRESSER_REGISTRATION = DeviceRegistration(
    name="Bresser Weather Center 5-in-1",
    modulation="FSK_PULSE_PCM",
    short_width_us=124,
    long_width_us=124,
    reset_limit_us=25000,
)


class DigestPolicy(str, Enum):
    """What the 7-in-1 decoder does with a failed LFSR digest."""

    STRICT = "strict"  # reject, try the next variant
    BEST_EFFORT = "best_effort"  # emit the reading tagged UNVERIFIED


class DecoderConfig(BaseModel):
    """Per-call decoder settings.

    Passed explicitly into every decode call; the decoders never read
    ambient state.
    """

    model_config = ConfigDict(frozen=True)

    verbose: int = Field(default=0, ge=0, le=MAX_VERBOSE)
    digest_policy: DigestPolicy = DigestPolicy.STRICT

    def traces(self, level: int) -> bool:
        """True if diagnostics at ``level`` should be logged."""
        return self.verbose >= level


DEFAULT_CONFIG = DecoderConfig()


def load_config(options: DecoderConfig | Mapping[str, Any] | None = None) -> DecoderConfig:
    """Resolve decoder settings from a config, a mapping, or defaults.

    Args:
        options: Existing config, mapping of DecoderConfig fields, or None.

    Returns:
        Validated DecoderConfig.

    Raises:
        ConfigurationError: If the mapping does not validate.
    """
    if options is None:
        return DEFAULT_CONFIG
    if isinstance(options, DecoderConfig):
        return options
    try:
        return DecoderConfig.model_validate(dict(options))
    except ValidationError as e:
        raise ConfigurationError("Invalid decoder configuration", str(e)) from e
