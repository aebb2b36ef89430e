"""
Line-per-estimate text output.
"""

from tap_tempo.core.displays.base import BasePresenter
from tap_tempo.core.registry import register
from tap_tempo.utils.constants import INSTRUCTIONS


@register("text")
class TextPresenter(BasePresenter):
    """Prints ``Current tempo: <bpm> BPM`` for every estimate."""

    def start(self) -> None:
        self._write(f"{INSTRUCTIONS}\n")

    def show(self, bpm: float) -> None:
        self._write(f"Current tempo: {self.format_bpm(bpm)} BPM\n")
