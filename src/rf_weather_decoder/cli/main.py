"""CLI entry points for RF Weather Decoder."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

from rf_weather_decoder.core.config import MAX_VERBOSE, DecoderConfig, DigestPolicy
from rf_weather_decoder.core.exceptions import DecoderError
from rf_weather_decoder.decoders.dispatcher import decode_code
from rf_weather_decoder.ui.display import display_outcome, print_error, print_warning

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_DECODED = 1
EXIT_BAD_INPUT = 2


def setup_logging(verbose: int) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )


def _read_codes(codes: list[str], file: str | None) -> Iterator[str]:
    yield from codes
    if file is None:
        return
    lines = sys.stdin if file == "-" else Path(file).read_text().splitlines()
    for line in lines:
        line = line.split("#", 1)[0].strip()
        if line:
            yield line


def decode() -> None:
    """Bresser decoder CLI entry point.

    Replays rtl_433 bit codes (as printed by ``rtl_433 -a`` or accepted by
    ``rtl_433 -y``) through the 7-in-1, 6-in-1 and 5-in-1 decoders.
    """
    parser = argparse.ArgumentParser(
        description="Decode Bresser 5/6/7-in-1 weather sensor bit codes"
    )
    parser.add_argument(
        "codes",
        nargs="*",
        help="Bit codes, e.g. '{205}55555555545ba999...' (one row per code)",
    )
    parser.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read bit codes from a file, one per line ('-' for stdin)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON record per capture instead of tables",
    )
    parser.add_argument(
        "--best-effort-digest",
        action="store_true",
        help="Emit 7-in-1 readings even when the digest check fails",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase decoder trace output (repeat for more)",
    )

    args = parser.parse_args()
    setup_logging(args.verbose)

    config = DecoderConfig(
        verbose=min(args.verbose, MAX_VERBOSE),
        digest_policy=(
            DigestPolicy.BEST_EFFORT if args.best_effort_digest else DigestPolicy.STRICT
        ),
    )

    try:
        codes = list(_read_codes(args.codes, args.file))
    except OSError as e:
        print_error(f"Cannot read {args.file}: {e}")
        sys.exit(EXIT_BAD_INPUT)

    if not codes:
        print_warning("No bit codes given")
        sys.exit(EXIT_BAD_INPUT)

    decoded = 0
    for code in codes:
        try:
            outcome = decode_code(code, config)
        except DecoderError as e:
            print_error(str(e))
            sys.exit(EXIT_BAD_INPUT)

        logger.debug("%s -> %s", code, outcome.status.value)
        if outcome.decoded:
            decoded += 1

        if args.json:
            record = outcome.reading.to_dict() if outcome.reading else outcome.to_dict()
            print(json.dumps(record))
        else:
            display_outcome(outcome, code=code)

    sys.exit(EXIT_OK if decoded else EXIT_NOT_DECODED)
