"""
Utility modules for tap tempo.
"""

from tap_tempo.utils import constants, logging_utils, terminal

__all__ = ["constants", "logging_utils", "terminal"]
