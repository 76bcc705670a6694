"""CLI entry points for RF Weather Decoder."""

from rf_weather_decoder.cli.main import decode

__all__ = ["decode"]
