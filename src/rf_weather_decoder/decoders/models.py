"""Data models for decoded weather sensor transmissions.

Defines the protocol variant and outcome enums, the DecodedReading
handed to the output sink, and the DecodeOutcome returned by every
decode attempt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from rf_weather_decoder.core.config import OUTPUT_FIELDS

MIC_CRC = "CRC"
MIC_CHECKSUM = "CHECKSUM"
MIC_UNVERIFIED = "UNVERIFIED"


class SensorVariant(str, Enum):
    """Bresser protocol variants, valued by their output model name."""

    BRESSER_7IN1 = "Bresser-7in1"
    BRESSER_6IN1 = "Bresser-6in1"
    BRESSER_5IN1 = "Bresser-5in1"


class DecodeStatus(str, Enum):
    """Terminal outcome of one variant decode attempt."""

    DECODED = "decoded"
    REJECTED_TOO_FEW_BITS = "rejected_too_few_bits"
    REJECTED_PREAMBLE_NOT_FOUND = "rejected_preamble_not_found"
    REJECTED_TOO_SHORT_AFTER_SYNC = "rejected_too_short_after_sync"
    REJECTED_ROW_COUNT_OR_LENGTH = "rejected_row_count_or_length"
    REJECTED_SANITY = "rejected_sanity"
    FAILED_INTEGRITY = "failed_integrity"

    @property
    def is_rejection(self) -> bool:
        return self not in (DecodeStatus.DECODED, DecodeStatus.FAILED_INTEGRITY)


# rtl_433 decoder return codes
DECODE_ABORT_LENGTH = -1
DECODE_ABORT_EARLY = -2
DECODE_FAIL_MIC = -3
DECODE_FAIL_SANITY = -4

STATUS_CODES: dict[DecodeStatus, int] = {
    DecodeStatus.DECODED: 1,
    DecodeStatus.REJECTED_TOO_FEW_BITS: DECODE_ABORT_LENGTH,
    DecodeStatus.REJECTED_TOO_SHORT_AFTER_SYNC: DECODE_ABORT_LENGTH,
    DecodeStatus.REJECTED_PREAMBLE_NOT_FOUND: DECODE_ABORT_EARLY,
    DecodeStatus.REJECTED_ROW_COUNT_OR_LENGTH: DECODE_ABORT_EARLY,
    DecodeStatus.FAILED_INTEGRITY: DECODE_FAIL_MIC,
    DecodeStatus.REJECTED_SANITY: DECODE_FAIL_SANITY,
}


@dataclass(frozen=True)
class DecodedReading:
    """Telemetry decoded from one verified frame.

    Optional fields are None when the variant does not define them or
    the frame flagged them as not transmitted.
    """

    # Core fields
    variant: SensorVariant
    id: int
    mic: str

    # Telemetry
    temperature_c: float | None = None
    humidity: int | None = None
    wind_max_m_s: float | None = None
    wind_avg_m_s: float | None = None
    wind_dir_deg: float | None = None
    rain_mm: float | None = None
    light_klx: float | None = None
    uv: float | None = None

    # Status
    battery_ok: bool | None = None
    channel: int | None = None
    flags: int | None = None
    unknown: int | None = None

    # Conditioned message bytes, for diagnostics
    raw: bytes = field(default=b"", repr=False, compare=False)

    @property
    def model(self) -> str:
        return self.variant.value

    def to_dict(self) -> dict[str, Any]:
        """Convert to the sink record, keyed and ordered like rtl_433 output."""
        values: dict[str, Any] = {
            "model": self.model,
            "id": self.id,
            "channel": self.channel,
            "temperature_C": self.temperature_c,
            "humidity": self.humidity,
            "wind_max_m_s": self.wind_max_m_s,
            "wind_avg_m_s": self.wind_avg_m_s,
            "wind_dir_deg": self.wind_dir_deg,
            "rain_mm": self.rain_mm,
            "light_klx": self.light_klx,
            "uv": self.uv,
            "unknown": self.unknown,
            "flags": self.flags,
            "mic": self.mic,
        }
        # 5-in-1 reports a battery string, 6-in-1 a battery_ok flag
        if self.battery_ok is not None:
            if self.variant == SensorVariant.BRESSER_5IN1:
                values["battery"] = "OK" if self.battery_ok else "LOW"
            else:
                values["battery_ok"] = int(self.battery_ok)

        return {key: values[key] for key in OUTPUT_FIELDS if values.get(key) is not None}


@dataclass(frozen=True)
class DecodeOutcome:
    """Result of one decode attempt.

    ``reading`` is set only for DECODED outcomes.
    """

    status: DecodeStatus
    variant: SensorVariant
    reading: DecodedReading | None = None
    detail: str = ""

    @property
    def decoded(self) -> bool:
        return self.status == DecodeStatus.DECODED

    @property
    def code(self) -> int:
        """rtl_433 style return code (1 on success, negative on failure)."""
        return STATUS_CODES[self.status]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": self.status.value,
            "variant": self.variant.value,
            "code": self.code,
            "detail": self.detail,
            "reading": self.reading.to_dict() if self.reading else None,
        }

    @classmethod
    def success(cls, reading: DecodedReading) -> DecodeOutcome:
        return cls(status=DecodeStatus.DECODED, variant=reading.variant, reading=reading)

    @classmethod
    def failure(
        cls, variant: SensorVariant, status: DecodeStatus, detail: str = ""
    ) -> DecodeOutcome:
        return cls(status=status, variant=variant, detail=detail)
