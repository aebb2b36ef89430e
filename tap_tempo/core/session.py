"""
The tap session loop: input source in, estimator in the middle, presenter out.
"""
import logging
from typing import List

from tap_tempo.core.estimator import TempoEstimator
from tap_tempo.core.protocols import InputSource, Presenter

logger = logging.getLogger(__name__)


def run_session(
    input_source: InputSource,
    estimator: TempoEstimator,
    presenter: Presenter,
) -> List[float]:
    """
    Feed taps from ``input_source`` through ``estimator`` until the user quits.

    Parameters
    ----------
    input_source : InputSource
        Blocks until the next tap; returns False on quit.
    estimator : TempoEstimator
        Receives one ``record_tap`` call per tap.
    presenter : Presenter
        Receives every estimate the estimator produces.

    Returns
    -------
    List[float]
        All BPM estimates shown during the session, in order.
    """
    estimates: List[float] = []
    taps = 0
    while True:
        try:
            if not input_source.wait_for_tap():
                break
        except KeyboardInterrupt:
            logger.info("Interrupted, ending session")
            break

        taps += 1
        bpm = estimator.record_tap()
        if bpm is None:
            continue
        estimates.append(bpm)
        presenter.show(bpm)

    logger.info("Session ended after %d taps with %d estimates", taps, len(estimates))
    return estimates
