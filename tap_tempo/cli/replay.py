#!/usr/bin/env python3
"""
Replay recorded tap timestamps through the tempo estimator.

Timestamps are in seconds, either as arguments:

    tap-tempo-replay 0.0 0.5 1.0 1.5

...from a file with ``--file``, or newline-delimited on STDIN:

    cat taps.txt | tap-tempo-replay

Blank lines and lines starting with ``#`` are skipped. For every tap one line
is printed with the timestamp and the estimate at that point (``-`` when there
is none yet), followed by a summary of all estimates.
"""
from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from typing import Iterable, List, Optional, TextIO, Tuple

from tap_tempo.config import load_config
from tap_tempo.core import TempoEstimator, TempoStatistics
from tap_tempo.errors import InputFormatError, TapTempoError
from tap_tempo.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="tap-tempo-replay",
        description="Estimate tempo from recorded tap timestamps.",
    )
    parser.add_argument(
        "timestamps",
        nargs="*",
        type=float,
        help="Tap timestamps in seconds. Leave empty to read from --file or STDIN.",
    )
    parser.add_argument("-f", "--file", metavar="PATH", help="Read timestamps from this file.")
    parser.add_argument("-s", "--sample-size", type=int, default=None, help="Window size.")
    parser.add_argument(
        "-t", "--timeout", type=float, default=None, help="Reset timeout in seconds."
    )
    parser.add_argument("-p", "--precision", type=int, default=None, help="BPM decimals.")
    parser.add_argument("--config", metavar="PATH", default=None, help="JSON configuration file.")
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level.")
    return parser.parse_args(argv)


def parse_timestamps(lines: Iterable[str]) -> List[float]:
    """
    Parse one timestamp per line.

    Raises
    ------
    InputFormatError
        If a line is not a finite number or timestamps go backwards.
    """
    timestamps: List[float] = []
    for lineno, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        try:
            value = float(text)
        except ValueError as e:
            raise InputFormatError(f"Entry {lineno}: not a timestamp: {text!r}") from e
        if not math.isfinite(value):
            raise InputFormatError(f"Entry {lineno}: timestamp must be finite, got {text!r}")
        if timestamps and value < timestamps[-1]:
            raise InputFormatError(
                f"Entry {lineno}: timestamp {value} is earlier than {timestamps[-1]}"
            )
        timestamps.append(value)
    return timestamps


def load_timestamps(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> List[float]:
    """Timestamps from the arguments, the --file, or STDIN, in that order."""
    if args.timestamps:
        return parse_timestamps(str(t) for t in args.timestamps)
    if args.file:
        with open(args.file, "r") as f:
            return parse_timestamps(f)
    return parse_timestamps(sys.stdin if stdin is None else stdin)


def replay(
    timestamps: Iterable[float], estimator: TempoEstimator
) -> List[Tuple[float, Optional[float]]]:
    """Feed every timestamp to ``estimator`` and pair it with the resulting estimate."""
    return [(t, estimator.record_tap(t)) for t in timestamps]


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config).merge(
            sample_size=args.sample_size,
            timeout=args.timeout,
            precision=args.precision,
        )
        timestamps = load_timestamps(args)
    except (TapTempoError, FileNotFoundError) as e:
        logger.debug("Replay aborted: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if config.sample_size == 1:
        logger.warning("A sample size of 1 keeps a single tap and never yields a tempo.")

    logger.info("Replaying %d taps", len(timestamps))
    estimator = TempoEstimator(config.sample_size, config.timeout)
    results = replay(timestamps, estimator)

    p = config.precision
    for t, bpm in results:
        shown = "-" if bpm is None else f"{bpm:.{p}f}"
        print(f"{t:.3f}\t{shown}")

    stats = TempoStatistics.from_estimates(bpm for _, bpm in results if bpm is not None)
    if args.json:
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        print(stats.format_report(p))


if __name__ == "__main__":
    main()
