"""Tests for decoded reading and outcome models."""

from __future__ import annotations

from rf_weather_decoder.decoders.models import (
    STATUS_CODES,
    DecodedReading,
    DecodeOutcome,
    DecodeStatus,
    SensorVariant,
)
from rf_weather_decoder.decoders.dispatcher import decode


class TestDecodedReading:
    """Tests for the sink record conversion."""

    def test_7in1_record(self, capture_7in1) -> None:
        """Keys follow rtl_433 output order and omit absent fields."""
        record = decode(capture_7in1).reading.to_dict()
        assert list(record) == [
            "model",
            "id",
            "temperature_C",
            "humidity",
            "wind_max_m_s",
            "wind_avg_m_s",
            "wind_dir_deg",
            "rain_mm",
            "light_klx",
            "mic",
        ]
        assert record["model"] == "Bresser-7in1"
        assert record["id"] == 44906
        assert record["light_klx"] == 65.5

    def test_6in1_record(self, capture_6in1) -> None:
        """Zero values are kept, battery is an integer flag."""
        record = decode(capture_6in1).reading.to_dict()
        assert record["channel"] == 0
        assert record["battery_ok"] == 0
        assert record["flags"] == 1
        assert record["unknown"] == 165
        assert "battery" not in record
        assert "rain_mm" not in record
        assert "uv" not in record

    def test_5in1_battery_string(self) -> None:
        """5-in-1 reports battery as OK or LOW."""
        reading = DecodedReading(
            variant=SensorVariant.BRESSER_5IN1, id=1, mic="CHECKSUM", battery_ok=True
        )
        assert reading.to_dict()["battery"] == "OK"
        assert "battery_ok" not in reading.to_dict()

    def test_raw_not_compared(self) -> None:
        """Readings compare by decoded values only."""
        a = DecodedReading(variant=SensorVariant.BRESSER_7IN1, id=1, mic="CRC", raw=b"\x00")
        b = DecodedReading(variant=SensorVariant.BRESSER_7IN1, id=1, mic="CRC", raw=b"\x01")
        assert a == b
        assert a.model == "Bresser-7in1"


class TestDecodeOutcome:
    """Tests for DecodeOutcome."""

    def test_success(self) -> None:
        reading = DecodedReading(variant=SensorVariant.BRESSER_6IN1, id=7, mic="CRC")
        outcome = DecodeOutcome.success(reading)
        assert outcome.decoded
        assert outcome.variant == SensorVariant.BRESSER_6IN1
        assert outcome.code == 1

    def test_failure_to_dict(self) -> None:
        outcome = DecodeOutcome.failure(
            SensorVariant.BRESSER_5IN1, DecodeStatus.FAILED_INTEGRITY, "parity wrong at 4"
        )
        assert outcome.to_dict() == {
            "status": "failed_integrity",
            "variant": "Bresser-5in1",
            "code": -3,
            "detail": "parity wrong at 4",
            "reading": None,
        }

    def test_every_status_has_a_code(self) -> None:
        """Each status maps to an rtl_433 return code."""
        assert set(STATUS_CODES) == set(DecodeStatus)
        assert STATUS_CODES[DecodeStatus.REJECTED_SANITY] == -4
        assert STATUS_CODES[DecodeStatus.REJECTED_PREAMBLE_NOT_FOUND] == -2
        assert STATUS_CODES[DecodeStatus.REJECTED_TOO_FEW_BITS] == -1

    def test_is_rejection(self) -> None:
        """Rejections are distinct from integrity failures."""
        assert DecodeStatus.REJECTED_SANITY.is_rejection
        assert not DecodeStatus.FAILED_INTEGRITY.is_rejection
        assert not DecodeStatus.DECODED.is_rejection
