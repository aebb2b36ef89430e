"""
Tap Tempo - measure a tapped tempo from key and mouse presses.
"""

__version__ = "0.1.0"

from . import core
from . import utils
from . import cli

__all__ = ["core", "utils", "cli"]
