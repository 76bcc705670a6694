"""Bit buffer handed over by the host demodulator.

A BitBuffer holds one or more rows of demodulated bits. Rows are stored
unpacked (one uint8 per bit) in read-only numpy arrays so that pattern
search and byte extraction stay vectorised and no decode attempt can
modify the capture.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

import numpy as np

from rf_weather_decoder.core.exceptions import BitCodeError, BitBufferError, RowIndexError

if TYPE_CHECKING:
    from numpy.typing import NDArray

# {N}hexdigits, as printed by rtl_433 and accepted by its -y option
_CODE_RE = re.compile(r"^(?:\{(\d+)\})?([0-9a-fA-F]*)$")


def _bytes_to_bits(data: bytes, num_bits: int | None) -> NDArray[np.uint8]:
    bits = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))
    if num_bits is None:
        return bits
    if num_bits < 0 or num_bits > bits.size:
        raise BitBufferError(
            "Bit count out of range", f"{num_bits} bits requested from {len(data)} bytes"
        )
    return bits[:num_bits]


class BitBuffer:
    """Read-only capture of one or more rows of bits.

    Example:
        >>> buf = BitBuffer.parse("{16}2dd4")
        >>> buf.search(0, bytes([0x2D, 0xD4]))
        0

    Attributes:
        num_rows: Number of rows in the capture.
    """

    def __init__(self, rows: Iterable[Sequence[int] | NDArray[np.uint8]] = ()) -> None:
        """Create a buffer from per-row bit sequences.

        Args:
            rows: Iterable of rows, each a sequence of 0/1 values.

        Raises:
            BitBufferError: If a row is not one-dimensional or holds values
                other than 0 and 1.
        """
        self._rows: tuple[NDArray[np.uint8], ...] = tuple(self._freeze(r) for r in rows)

    @staticmethod
    def _freeze(bits: Sequence[int] | NDArray[np.uint8]) -> NDArray[np.uint8]:
        arr = np.array(bits, dtype=np.uint8)
        if arr.ndim != 1:
            raise BitBufferError("Row must be one-dimensional", f"got shape {arr.shape}")
        if arr.size and int(arr.max()) > 1:
            raise BitBufferError("Row values must be 0 or 1")
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_bytes(cls, data: bytes, num_bits: int | None = None) -> BitBuffer:
        """Create a single-row buffer from packed bytes (MSB first).

        Args:
            data: Packed row bytes.
            num_bits: Row length in bits. Defaults to ``len(data) * 8``.
        """
        return cls([_bytes_to_bits(data, num_bits)])

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[bytes, int | None]]) -> BitBuffer:
        """Create a buffer from ``(packed_bytes, num_bits)`` pairs."""
        return cls([_bytes_to_bits(data, num_bits) for data, num_bits in rows])

    @classmethod
    def from_hex(cls, hex_str: str, num_bits: int | None = None) -> BitBuffer:
        """Create a single-row buffer from a hex string."""
        return cls([cls._parse_row(hex_str, num_bits)])

    @classmethod
    def parse(cls, code: str) -> BitBuffer:
        """Parse rtl_433 bit codes.

        Rows are written as ``{N}hexdigits`` (or bare hex, taken as
        ``4 * len(hex)`` bits) and separated by whitespace or ``/``.

        Args:
            code: Bit code string, e.g. ``"{25}fb2dd58"``.

        Returns:
            BitBuffer with one row per code.

        Raises:
            BitCodeError: If a row code is malformed.
        """
        rows = []
        for token in re.split(r"[\s/]+", code.strip()):
            if not token:
                continue
            match = _CODE_RE.match(token)
            if match is None:
                raise BitCodeError(token, "expected {N}hexdigits")
            length, digits = match.groups()
            try:
                rows.append(cls._parse_row(digits, int(length) if length else None))
            except BitBufferError as e:
                raise BitCodeError(token, e.message) from e
        return cls(rows)

    @staticmethod
    def _parse_row(hex_str: str, num_bits: int | None) -> NDArray[np.uint8]:
        digits = hex_str.strip()
        if digits.lower().startswith("0x"):
            digits = digits[2:]
        if num_bits is None:
            num_bits = len(digits) * 4
        if len(digits) * 4 < num_bits:
            raise BitBufferError(
                "Not enough hex digits", f"{len(digits)} digits for {num_bits} bits"
            )
        if len(digits) % 2:
            digits += "0"
        try:
            data = bytes.fromhex(digits)
        except ValueError as e:
            raise BitBufferError("Invalid hex digits", str(e)) from e
        return _bytes_to_bits(data, num_bits)

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def row(self, row: int) -> NDArray[np.uint8]:
        """Return the read-only bit array of a row."""
        if not 0 <= row < len(self._rows):
            raise RowIndexError(row, f"buffer has {len(self._rows)} rows")
        return self._rows[row]

    def bits_per_row(self, row: int) -> int:
        return int(self.row(row).size)

    def search(
        self,
        row: int,
        pattern: bytes,
        pattern_bits: int | None = None,
        start: int = 0,
    ) -> int:
        """Find the first exact occurrence of a bit pattern in a row.

        Args:
            row: Row index.
            pattern: Pattern bytes (MSB first).
            pattern_bits: Number of pattern bits to match. Defaults to all.
            start: Bit offset to start searching from.

        Returns:
            Bit offset of the first match, or the row length if none.
        """
        bits = self.row(row)
        needle = _bytes_to_bits(pattern, pattern_bits)
        if start < 0 or start + needle.size > bits.size:
            return int(bits.size)
        if needle.size == 0:
            return start
        haystack = bits[start:]

        windows = np.lib.stride_tricks.sliding_window_view(haystack, needle.size)
        hits = np.flatnonzero((windows == needle).all(axis=1))
        if hits.size == 0:
            return int(bits.size)
        return start + int(hits[0])

    def extract_bytes(self, row: int, start: int, num_bits: int) -> bytes:
        """Pack ``num_bits`` bits starting at ``start`` into bytes.

        A trailing partial byte is padded with zero bits.

        Raises:
            RowIndexError: If the range extends past the row length.
        """
        bits = self.row(row)
        if start < 0 or num_bits < 0 or start + num_bits > bits.size:
            raise RowIndexError(
                row, f"bits {start}..{start + num_bits} outside row of {bits.size} bits"
            )
        return np.packbits(bits[start : start + num_bits]).tobytes()

    def to_codes(self) -> list[str]:
        """Return each row as an rtl_433 ``{N}hex`` code."""
        codes = []
        for bits in self._rows:
            hex_digits = np.packbits(bits).tobytes().hex()
            codes.append(f"{{{bits.size}}}{hex_digits[: (bits.size + 3) // 4]}")
        return codes

    def __str__(self) -> str:
        return " ".join(self.to_codes())

    def __repr__(self) -> str:
        return f"BitBuffer({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return len(self._rows) == len(other._rows) and all(
            np.array_equal(a, b) for a, b in zip(self._rows, other._rows)
        )

    __hash__ = None  # type: ignore[assignment]
