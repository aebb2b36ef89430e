#!/usr/bin/env python3
"""
Measure your tap tempo in the terminal.

Every key press or mouse click is a beat. After the second tap the running
tempo is shown, either as one line of text per tap or as a live bar chart of
the history (``--display bars``). Press Esc or Ctrl+C to quit.

Settings come from, in increasing priority: built-in defaults, the JSON file
named by ``--config`` or the ``TAP_TEMPO_CONFIG`` environment variable, and
command-line flags.
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, NoReturn, Optional

from tap_tempo import __version__
from tap_tempo.config import TapTempoConfig, load_config
from tap_tempo.core import TempoEstimator, TempoStatistics, build_presenter, run_session
from tap_tempo.core.registry import available
from tap_tempo.errors import TapTempoError
from tap_tempo.utils.logging_utils import setup_logging
from tap_tempo.utils.terminal import TerminalInput, terminal_mode

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="tap-tempo",
        description="Measure your tap tempo",
    )

    parser.add_argument(
        "-s",
        "--sample-size",
        type=int,
        default=None,
        help="Number of samples to take for tempo calculation (default: 5).",
    )
    parser.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=None,
        help="Set the time in seconds to reset the computation (default: 5).",
    )
    parser.add_argument(
        "-p",
        "--precision",
        type=int,
        default=None,
        help="Precision of the BPM output (default: 0).",
    )
    parser.add_argument(
        "-d",
        "--display",
        choices=available(),
        default=None,
        help="How to show the tempo (default: text).",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        default=None,
        help="JSON configuration file. Overrides TAP_TEMPO_CONFIG.",
    )
    parser.add_argument(
        "--no-mouse",
        dest="mouse",
        action="store_const",
        const=False,
        default=None,
        help="Don't count mouse clicks as taps.",
    )
    parser.add_argument(
        "--no-color",
        dest="color",
        action="store_const",
        const=False,
        default=None,
        help="Draw the bar chart without colours.",
    )
    parser.add_argument(
        "--summary",
        choices=["text", "json"],
        nargs="?",
        const="text",
        default=None,
        help="Print statistics of the reported tempos on exit.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser.parse_args(argv)


def fail(message: str) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    logger.debug("Exiting: %s", message)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def resolve_config(args: argparse.Namespace) -> TapTempoConfig:
    """Combine the config file with command-line overrides."""
    return load_config(args.config).merge(
        sample_size=args.sample_size,
        timeout=args.timeout,
        precision=args.precision,
        display=args.display,
        mouse=args.mouse,
        color=args.color,
    )


def print_summary(estimates: List[float], config: TapTempoConfig, fmt: str) -> None:
    stats = TempoStatistics.from_estimates(estimates)
    if fmt == "json":
        print(json.dumps(stats.to_dict(), indent=2))
    else:
        print(stats.format_report(config.precision))


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = resolve_config(args)
    except (TapTempoError, FileNotFoundError) as e:
        fail(str(e))

    if config.sample_size == 1:
        logger.warning("A sample size of 1 keeps a single tap and never yields a tempo.")

    logger.info(
        "Starting with sample_size=%d timeout=%.2fs display=%s",
        config.sample_size,
        config.timeout,
        config.display,
    )
    estimator = TempoEstimator(config.sample_size, config.timeout)
    presenter = build_presenter(config.display, precision=config.precision, color=config.color)

    try:
        with terminal_mode(mouse=config.mouse) as fd:
            presenter.start()
            try:
                estimates = run_session(TerminalInput(fd), estimator, presenter)
            finally:
                presenter.close()
    except TapTempoError as e:
        fail(str(e))

    if args.summary:
        print_summary(estimates, config, args.summary)


if __name__ == "__main__":
    main()
