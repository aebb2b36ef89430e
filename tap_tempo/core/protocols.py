"""
Protocols for the collaborators driven by the tap session loop.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class InputSource(Protocol):
    """Blocking source of tap events."""

    def wait_for_tap(self) -> bool:
        """
        Block until the user taps or asks to quit.

        Returns
        -------
        bool
            True for a tap, False when the session should end.
        """
        ...


@runtime_checkable
class Presenter(Protocol):
    """Renders tempo estimates to the user."""

    def start(self) -> None:
        """Draw the initial screen before the first tap."""
        ...

    def show(self, bpm: float) -> None:
        """Render a new tempo estimate."""
        ...

    def close(self) -> None:
        """Release the display."""
        ...
