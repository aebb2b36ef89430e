"""
Tap tempo core functionality.
"""

# Import display modules to ensure presenters are registered
from tap_tempo.core.displays import text, bar_graph

from tap_tempo.core.estimator import TempoEstimator
from tap_tempo.core.statistics import TempoStatistics
from tap_tempo.core.protocols import InputSource, Presenter
from tap_tempo.core.registry import build as build_presenter
from tap_tempo.core.session import run_session

__all__ = [
    "TempoEstimator",
    "TempoStatistics",
    "InputSource",
    "Presenter",
    "build_presenter",
    "run_session",
]
