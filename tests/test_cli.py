"""Tests for CLI entry points."""

from __future__ import annotations

import json
import sys
from unittest.mock import patch

import pytest

RAW_7IN1 = bytes.fromhex("631d05c09e9a18abaabaaaaaaaaa8adacbacff9cafcaaaaaaa")


def run_decode(*argv: str) -> int:
    """Run the decode CLI and return its exit code."""
    from rf_weather_decoder.cli.main import decode

    with patch.object(sys, "argv", ["bresser-decode", *argv]):
        with pytest.raises(SystemExit) as exc_info:
            decode()
    return exc_info.value.code


class TestCLIImports:
    """Test that CLI modules import without error."""

    def test_main_imports(self) -> None:
        from rf_weather_decoder.cli import main

        assert callable(main.decode)
        assert callable(main.setup_logging)


class TestCLIArguments:
    """Test CLI argument parsing."""

    def test_help(self) -> None:
        assert run_decode("--help") == 0

    def test_no_codes(self, capsys) -> None:
        """Nothing to decode is a usage error."""
        assert run_decode() == 2
        assert "No bit codes given" in capsys.readouterr().out

    def test_malformed_code(self, capsys) -> None:
        assert run_decode("{8}zz") == 2
        assert "Invalid bit code" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys) -> None:
        assert run_decode("--file", str(tmp_path / "missing.txt")) == 2
        assert "Cannot read" in capsys.readouterr().out


class TestDecodeCommand:
    """Tests for decoding through the CLI."""

    def test_json_output(self, frames, capsys) -> None:
        """One JSON record per code."""
        assert run_decode("--json", frames.capture_7in1, frames.capture_6in1) == 0

        lines = capsys.readouterr().out.splitlines()
        records = [json.loads(line) for line in lines]
        assert [r["model"] for r in records] == ["Bresser-7in1", "Bresser-6in1"]
        assert records[0]["temperature_C"] == 20.7
        assert records[1]["battery_ok"] == 0

    def test_not_decoded(self, capsys) -> None:
        """Captures that no variant accepts exit with 1."""
        assert run_decode("--json", "{16}2dd4") == 1

        record = json.loads(capsys.readouterr().out)
        assert record["status"] == "rejected_too_few_bits"
        assert record["variant"] == "Bresser-5in1"
        assert record["reading"] is None

    def test_any_decoded_is_success(self, frames, capsys) -> None:
        assert run_decode("--json", "{16}2dd4", frames.capture_6in1) == 0

    def test_codes_from_file(self, frames, tmp_path, capsys) -> None:
        """Comment lines and blank lines are skipped."""
        path = tmp_path / "codes.txt"
        path.write_text(f"# captured 2024-05-01\n\n{frames.capture_6in1}  # outdoor\n")

        assert run_decode("--json", "--file", str(path)) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["id"] == 0x188002C3

    def test_best_effort_digest(self, frames, capsys) -> None:
        """Corrupted 7-in-1 frames decode only with --best-effort-digest."""
        code = "{240}aaaaaa2dd4" + frames.flip_bit(RAW_7IN1, 100).hex()

        assert run_decode("--json", code) == 1
        capsys.readouterr()

        assert run_decode("--json", "--best-effort-digest", code) == 0
        record = json.loads(capsys.readouterr().out)
        assert record["mic"] == "UNVERIFIED"

    def test_table_output(self, frames, capsys) -> None:
        """Without --json, readings are shown as tables."""
        assert run_decode(frames.capture_7in1) == 0
        out = capsys.readouterr().out
        assert "Bresser-7in1" in out
        assert "Temperature" in out
        assert "20.7 C" in out

    def test_table_output_not_decoded(self, capsys) -> None:
        assert run_decode("{16}2dd4") == 1
        out = capsys.readouterr().out
        assert "Not Decoded" in out
        assert "rejected_too_few_bits" in out
