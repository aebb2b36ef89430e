"""
Logging setup shared by the command-line entry points.
"""

import logging

from tap_tempo.utils.constants import LOG_FORMAT


def setup_logging(verbose: bool = False, default_level: int = logging.WARNING) -> None:
    """Configure logging to STDERR, at INFO level when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.INFO if verbose else default_level,
        format=LOG_FORMAT,
    )
