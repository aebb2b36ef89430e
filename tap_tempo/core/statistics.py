"""
Summary statistics over the tempo estimates reported during a run.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Union

import numpy as np


@dataclass
class TempoStatistics:
    """Statistics about the reported BPM values."""

    count: int
    mean_bpm: float
    median_bpm: float
    std_bpm: float
    min_bpm: float
    max_bpm: float
    last_bpm: float

    @classmethod
    def from_estimates(cls, estimates: Iterable[float]) -> "TempoStatistics":
        """Summarise a sequence of BPM estimates. An empty sequence yields zeros."""
        values = np.asarray(list(estimates), dtype=float)
        if values.size == 0:
            return cls(
                count=0,
                mean_bpm=0.0,
                median_bpm=0.0,
                std_bpm=0.0,
                min_bpm=0.0,
                max_bpm=0.0,
                last_bpm=0.0,
            )
        return cls(
            count=int(values.size),
            mean_bpm=float(np.mean(values)),
            median_bpm=float(np.median(values)),
            std_bpm=float(np.std(values)),
            min_bpm=float(np.min(values)),
            max_bpm=float(np.max(values)),
            last_bpm=float(values[-1]),
        )

    def to_dict(self) -> Dict[str, Union[int, float]]:
        """Convert to dictionary for easy serialization."""
        return {
            "count": int(self.count),
            "mean_bpm": float(self.mean_bpm),
            "median_bpm": float(self.median_bpm),
            "std_bpm": float(self.std_bpm),
            "min_bpm": float(self.min_bpm),
            "max_bpm": float(self.max_bpm),
            "last_bpm": float(self.last_bpm),
        }

    def format_report(self, precision: int = 0) -> str:
        """Human readable multi-line summary."""
        if self.count == 0:
            return "No tempo estimates recorded."
        p = precision
        return "\n".join(
            [
                "TAP TEMPO SUMMARY",
                "=================",
                f"Estimates : {self.count}",
                f"Mean      : {self.mean_bpm:.{p}f} BPM",
                f"Median    : {self.median_bpm:.{p}f} BPM",
                f"Std dev   : {self.std_bpm:.{p}f} BPM",
                f"Range     : {self.min_bpm:.{p}f} - {self.max_bpm:.{p}f} BPM",
                f"Last      : {self.last_bpm:.{p}f} BPM",
            ]
        )
