"""
Sliding-window tempo estimator.

Taps are kept newest-first in a bounded window. A pause longer than the timeout
starts a new session, and the tempo is the mean interval across the window.
"""

import logging
import math
import time
from collections import deque
from typing import Callable, Deque, Optional, Tuple

logger = logging.getLogger(__name__)


class TempoEstimator:
    """Turns a stream of tap instants into a running BPM estimate."""

    def __init__(
        self,
        sample_size: int,
        timeout: float,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Parameters
        ----------
        sample_size : int
            Maximum number of recent taps used for the estimate.
        timeout : float
            Longest allowed gap between two taps, in seconds, before the
            history is discarded.
        clock : Callable[[], float], optional
            Monotonic clock used when ``record_tap`` is called without an instant,
            ``time.monotonic`` by default.

        Raises
        ------
        ValueError
            If ``sample_size`` is not a positive integer or ``timeout`` is negative
            or not finite.
        """
        if isinstance(sample_size, bool) or not isinstance(sample_size, int) or sample_size < 1:
            raise ValueError(f"sample_size must be a positive integer, got {sample_size!r}")
        if not math.isfinite(timeout) or timeout < 0:
            raise ValueError(f"timeout must be finite and non-negative, got {timeout!r}")

        self._sample_size = sample_size
        self._timeout = float(timeout)
        self._clock = time.monotonic if clock is None else clock
        self._timestamps: Deque[float] = deque()

    @property
    def sample_size(self) -> int:
        return self._sample_size

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def timestamps(self) -> Tuple[float, ...]:
        """Retained tap instants, most recent first."""
        return tuple(self._timestamps)

    def __len__(self) -> int:
        return len(self._timestamps)

    def reset(self) -> None:
        """Forget every retained tap."""
        self._timestamps.clear()

    def record_tap(self, now: Optional[float] = None) -> Optional[float]:
        """
        Record a tap and return the current tempo estimate.

        Parameters
        ----------
        now : float, optional
            Monotonic instant of the tap in seconds. Read from the clock if omitted.
            Must not be earlier than the previous tap.

        Returns
        -------
        Optional[float]
            Tempo in beats per minute, or None when fewer than two taps are
            retained or no time has elapsed across the window.
        """
        if now is None:
            now = self._clock()

        # Make room for the new tap so the window never exceeds sample_size.
        while len(self._timestamps) >= self._sample_size:
            dropped = self._timestamps.pop()
            logger.debug("Evicted tap at %.6f from the window", dropped)

        if self._timestamps and now - self._timestamps[0] > self._timeout:
            logger.debug(
                "%.3f s since last tap exceeds timeout of %.3f s, starting a new session",
                now - self._timestamps[0],
                self._timeout,
            )
            self._timestamps.clear()

        self._timestamps.appendleft(now)

        if len(self._timestamps) < 2:
            return None

        elapsed = self._timestamps[0] - self._timestamps[-1]
        if not elapsed > 0:
            return None

        mean_interval = elapsed / (len(self._timestamps) - 1)
        bpm = 60.0 / mean_interval
        return bpm if math.isfinite(bpm) else None
