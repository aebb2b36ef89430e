"""
Live bar chart of the tempo history.

The chart fills the terminal. Each estimate is a bar three columns wide; the
most recent estimates that fit the width are shown, on a vertical scale of at
least MIN_BAR_SCALE BPM.
"""

import logging
import shutil
from typing import List, Optional, Sequence, TextIO, Tuple

import numpy as np

from tap_tempo.core.displays.base import BasePresenter, DisplayConfig
from tap_tempo.core.registry import register
from tap_tempo.utils.constants import BAR_GAP, BAR_WIDTH, INSTRUCTIONS, MIN_BAR_SCALE

logger = logging.getLogger(__name__)

# Index n draws a bar cell filled n eighths from the bottom
BLOCKS = " ▁▂▃▄▅▆▇█"

BAR_COLOR = "\x1b[34m"
VALUE_COLOR = "\x1b[32m"
LABEL_COLOR = "\x1b[37m"
RESET = "\x1b[0m"

ENTER_SCREEN = "\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = "\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = "\x1b[H\x1b[2J"

LABEL = "BPM"


def visible_window(history: Sequence[float], width: int) -> List[float]:
    """The most recent values whose bars fit into ``width`` columns."""
    max_bars = (width + BAR_GAP) // (BAR_WIDTH + BAR_GAP)
    if max_bars <= 0:
        return []
    return list(history[-max_bars:])


def vertical_scale(values: Sequence[int]) -> int:
    """Top of the vertical axis: the largest value, but never below MIN_BAR_SCALE."""
    return max(MIN_BAR_SCALE, max(values, default=0))


@register("bars")
class BarGraphPresenter(BasePresenter):
    """Redraws a bordered bar chart of every estimate so far."""

    def __init__(
        self,
        cfg: DisplayConfig,
        stream: Optional[TextIO] = None,
        size: Optional[Tuple[int, int]] = None,
    ) -> None:
        super().__init__(cfg, stream)
        self.size = size
        self.bpm_history: List[float] = []

    def _paint(self, text: str, color: str) -> str:
        if not self.cfg.color or not text.strip():
            return text
        return f"{color}{text}{RESET}"

    def _row(self, cells: List[str], color: str, width: int) -> str:
        if not cells:
            return " " * width
        used = len(cells) * BAR_WIDTH + (len(cells) - 1) * BAR_GAP
        painted = (" " * BAR_GAP).join(self._paint(cell, color) for cell in cells)
        return painted + " " * (width - used)

    def _body(self, width: int, height: int) -> List[str]:
        window = visible_window(self.bpm_history, width)
        values = np.asarray(window, dtype=float).astype(int)
        scale = vertical_scale(values.tolist())
        bar_rows = max(height - 2, 0)
        eighths = values * bar_rows * 8 // scale

        rows = []
        for level in reversed(range(bar_rows)):
            fill = np.clip(eighths - level * 8, 0, 8)
            rows.append(self._row([BLOCKS[n] * BAR_WIDTH for n in fill], BAR_COLOR, width))

        value_cells = [
            str(v).center(BAR_WIDTH) if len(str(v)) <= BAR_WIDTH else " " * BAR_WIDTH
            for v in values
        ]
        rows.append(self._row(value_cells, VALUE_COLOR, width))
        rows.append(self._row([LABEL[:BAR_WIDTH].center(BAR_WIDTH)] * len(values), LABEL_COLOR, width))
        return rows[-height:] if height > 0 else []

    def render(self, width: int, height: int) -> List[str]:
        """
        Draw the chart into ``height`` lines of ``width`` visible columns.

        Returns an empty list when there is no room for the border.
        """
        if width < 2 or height < 2:
            return []
        inner_width = width - 2
        title = INSTRUCTIONS[:inner_width]
        top = "┌" + title + "─" * (inner_width - len(title)) + "┐"
        bottom = "└" + "─" * inner_width + "┘"
        body = ["│" + row + "│" for row in self._body(inner_width, height - 2)]
        return [top] + body + [bottom]

    def _draw(self) -> None:
        if self.size is not None:
            width, height = self.size
        else:
            width, height = shutil.get_terminal_size()
        self._write(CLEAR_SCREEN + "\n".join(self.render(width, height)))

    def add_bpm(self, bpm: float) -> None:
        self.bpm_history.append(bpm)

    def start(self) -> None:
        self._write(ENTER_SCREEN)
        self._draw()

    def show(self, bpm: float) -> None:
        self.add_bpm(bpm)
        self._draw()

    def close(self) -> None:
        self._write(LEAVE_SCREEN)
        logger.debug("Bar graph closed after %d estimates", len(self.bpm_history))
