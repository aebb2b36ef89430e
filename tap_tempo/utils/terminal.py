"""
Terminal input for tapping.

The terminal is switched to cbreak mode (unbuffered, no echo) with xterm mouse
reporting enabled. Every key press and mouse button press counts as a tap; Esc
and Ctrl+C quit. Mouse motion, wheel and button releases are ignored.
"""

import enum
import logging
import os
import re
import select
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from tap_tempo.errors import TerminalError

logger = logging.getLogger(__name__)

ESC = b"\x1b"
CTRL_C = b"\x03"

# Press reporting (1000) with SGR extended coordinates (1006)
MOUSE_ON = "\x1b[?1000h\x1b[?1006h"
MOUSE_OFF = "\x1b[?1006l\x1b[?1000l"

# Seconds to wait for the rest of an escape sequence after ESC
ESCAPE_TIMEOUT = 0.05

_SGR_MOUSE = re.compile(rb"\x1b\[<(\d+);(\d+);(\d+)([Mm])\Z")
_X10_MOUSE_PREFIX = b"\x1b[M"

_MOTION_BIT = 32
_WHEEL_BIT = 64


def stdin_fd() -> int:
    """File descriptor of standard input."""
    try:
        return sys.stdin.fileno()
    except (OSError, ValueError) as e:
        raise TerminalError(f"Standard input has no file descriptor: {e}") from e


class InputEvent(enum.Enum):
    TAP = "tap"
    QUIT = "quit"
    IGNORE = "ignore"


def _is_button_press(button: int) -> bool:
    return not (button & _MOTION_BIT or button & _WHEEL_BIT)


def decode_event(data: bytes) -> InputEvent:
    """
    Classify one complete key or mouse sequence read from the terminal.

    Parameters
    ----------
    data : bytes
        A single event: one key, one escape sequence or one mouse report.
        Empty data means end of input.

    Returns
    -------
    InputEvent
        QUIT for Esc, Ctrl+C and end of input, TAP for key and mouse button
        presses, IGNORE for everything else the mouse reports.
    """
    if not data or data in (ESC, CTRL_C):
        return InputEvent.QUIT

    sgr = _SGR_MOUSE.match(data)
    if sgr:
        button = int(sgr.group(1))
        if sgr.group(4) == b"M" and _is_button_press(button):
            return InputEvent.TAP
        return InputEvent.IGNORE

    if data.startswith(_X10_MOUSE_PREFIX) and len(data) == 6:
        # X10 encodes the button as a byte offset by 32; 3 means release
        button = data[3] - 32
        if (button & 3) != 3 and _is_button_press(button):
            return InputEvent.TAP
        return InputEvent.IGNORE

    return InputEvent.TAP


class TerminalInput:
    """Reads tap events from a file descriptor, normally the terminal's stdin."""

    def __init__(self, fd: Optional[int] = None, escape_timeout: float = ESCAPE_TIMEOUT):
        self.fd = stdin_fd() if fd is None else fd
        self.escape_timeout = escape_timeout

    def _read_byte(self) -> bytes:
        return os.read(self.fd, 1)

    def _pending(self) -> bool:
        ready, _, _ = select.select([self.fd], [], [], self.escape_timeout)
        return bool(ready)

    def _read_utf8_continuation(self, lead: int) -> bytes:
        """Remaining bytes of a multi-byte UTF-8 character announced by ``lead``."""
        if lead >= 0xF0:
            count = 3
        elif lead >= 0xE0:
            count = 2
        else:
            count = 1
        data = b""
        for _ in range(count):
            byte = self._read_byte()
            if not byte:
                break
            data += byte
        return data

    def read_sequence(self) -> bytes:
        """Block until one complete key or escape sequence is available and return it."""
        first = self._read_byte()
        if first and first[0] >= 0xC0:
            return first + self._read_utf8_continuation(first[0])
        if first != ESC or not self._pending():
            return first

        data = first + self._read_byte()
        if data == b"\x1b[":
            if not self._pending():
                return data
            nxt = self._read_byte()
            data += nxt
            if nxt == b"M":
                # X10 mouse report: three raw bytes follow
                for _ in range(3):
                    data += self._read_byte()
                return data
            # CSI: parameters until a final byte in 0x40-0x7E
            while data[-1] < 0x40 or data[-1] > 0x7E or data.endswith(b"[["):
                byte = self._read_byte() if self._pending() else b""
                if not byte:
                    break
                data += byte
            return data
        if data == b"\x1bO" and self._pending():
            # SS3 function keys carry a single final byte
            data += self._read_byte()
        return data

    def read_event(self) -> InputEvent:
        return decode_event(self.read_sequence())

    def wait_for_tap(self) -> bool:
        """Block until a tap (True) or a quit request (False), skipping ignored events."""
        while True:
            event = self.read_event()
            if event is InputEvent.IGNORE:
                continue
            return event is InputEvent.TAP


@contextmanager
def terminal_mode(
    fd: Optional[int] = None,
    mouse: bool = True,
    output: Optional[TextIO] = None,
) -> Iterator[int]:
    """
    Put the terminal into tap mode for the duration of the block.

    Parameters
    ----------
    fd : int, optional
        Terminal file descriptor, stdin by default.
    mouse : bool
        Enable mouse press reporting.
    output : TextIO, optional
        Stream that receives the mouse control sequences, stdout by default.

    Yields
    ------
    int
        The file descriptor in tap mode.

    Raises
    ------
    TerminalError
        If the descriptor is not a terminal or cannot be configured.
    """
    fd = stdin_fd() if fd is None else fd
    output = sys.stdout if output is None else output

    if not os.isatty(fd):
        raise TerminalError(f"File descriptor {fd} is not a terminal; can't capture taps.")
    try:
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except termios.error as e:
        raise TerminalError(f"Can't put terminal into tap mode: {e}") from e

    try:
        if mouse:
            output.write(MOUSE_ON)
            output.flush()
        logger.debug("Terminal %d in tap mode (mouse=%s)", fd, mouse)
        yield fd
    finally:
        if mouse:
            output.write(MOUSE_OFF)
            output.flush()
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        except termios.error as e:
            raise TerminalError(f"Can't restore terminal mode: {e}") from e
        logger.debug("Terminal %d restored", fd)
