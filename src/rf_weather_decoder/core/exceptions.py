"""Custom exception hierarchy for decoder host-boundary errors.

Decode attempts report their result as a DecodeOutcome value. These
exceptions are only raised when the caller hands over something that
cannot be a capture or a configuration at all.
"""

from __future__ import annotations


class DecoderError(Exception):
    """Base exception for all decoder-related errors."""

    def __init__(self, message: str, details: str | None = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class BitBufferError(DecoderError):
    """Malformed bit buffer or rtl_433 bit code."""

    pass


class BitCodeError(BitBufferError):
    """A bit code string could not be parsed."""

    def __init__(self, code: str, details: str | None = None) -> None:
        self.code = code
        shown = code if len(code) <= 40 else f"{code[:37]}..."
        super().__init__(f"Invalid bit code '{shown}'", details)


class RowIndexError(BitBufferError):
    """Row index or bit range outside the buffer."""

    def __init__(self, row: int, details: str | None = None) -> None:
        self.row = row
        super().__init__(f"Invalid row {row}", details)


class ConfigurationError(DecoderError):
    """Invalid decoder configuration."""

    pass
