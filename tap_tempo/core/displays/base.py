"""
Base class for presenters with common functionality.
"""

import sys
from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass(slots=True, frozen=True)
class DisplayConfig:
    """Options shared by all presenters."""
    precision: int = 0
    color: bool = True


class BasePresenter:
    """Base class for presenters writing to a text stream."""

    def __init__(self, cfg: DisplayConfig, stream: Optional[TextIO] = None) -> None:
        """
        Parameters:
        -----------
        cfg : DisplayConfig
            Display options.
        stream : TextIO, optional
            Output stream, stdout by default.
        """
        self.cfg = cfg
        self.stream = sys.stdout if stream is None else stream

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def format_bpm(self, bpm: float) -> str:
        return f"{bpm:.{self.cfg.precision}f}"

    def start(self) -> None:
        pass

    def show(self, bpm: float) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass
