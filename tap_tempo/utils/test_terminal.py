"""
Tests for terminal input decoding and reading.
"""

import io
import os
from unittest.mock import patch

import pytest

from tap_tempo.errors import TerminalError
from tap_tempo.utils import terminal
from tap_tempo.utils.terminal import (
    MOUSE_OFF,
    MOUSE_ON,
    InputEvent,
    TerminalInput,
    decode_event,
    terminal_mode,
)
from conftest import assert_raises


@pytest.mark.parametrize(
    "data, expected",
    [
        (b"", InputEvent.QUIT),
        (b"\x1b", InputEvent.QUIT),
        (b"\x03", InputEvent.QUIT),
        (b" ", InputEvent.TAP),
        (b"a", InputEvent.TAP),
        (b"\n", InputEvent.TAP),
        (b"\x1b[A", InputEvent.TAP),
        (b"\x1bOP", InputEvent.TAP),
        (b"\x1b[15~", InputEvent.TAP),
        # SGR mouse: left, middle, right press
        (b"\x1b[<0;10;5M", InputEvent.TAP),
        (b"\x1b[<1;10;5M", InputEvent.TAP),
        (b"\x1b[<2;10;5M", InputEvent.TAP),
        # release, motion, wheel
        (b"\x1b[<0;10;5m", InputEvent.IGNORE),
        (b"\x1b[<35;10;5M", InputEvent.IGNORE),
        (b"\x1b[<64;10;5M", InputEvent.IGNORE),
        (b"\x1b[<65;10;5M", InputEvent.IGNORE),
        # X10 mouse: press, release, wheel
        (b"\x1b[M !!", InputEvent.TAP),
        (b"\x1b[M#!!", InputEvent.IGNORE),
        (b"\x1b[M`!!", InputEvent.IGNORE),
    ],
)
def test_decode_event(data, expected):
    assert decode_event(data) is expected


@pytest.fixture
def pipe_input():
    """A TerminalInput reading from a pipe, plus a function writing to it."""
    read_fd, write_fd = os.pipe()
    source = TerminalInput(read_fd, escape_timeout=0.01)

    def feed(data: bytes, close: bool = False):
        os.write(write_fd, data)
        if close:
            os.close(write_fd)

    yield source, feed

    os.close(read_fd)
    try:
        os.close(write_fd)
    except OSError:
        pass


def test_read_sequence_splits_keys(pipe_input):
    source, feed = pipe_input
    feed(b"ab")
    assert source.read_sequence() == b"a"
    assert source.read_sequence() == b"b"


def test_read_sequence_assembles_escape_sequences(pipe_input):
    source, feed = pipe_input
    feed(b"\x1b[A\x1b[<0;3;4M\x1b[15~\x1bOQ")
    assert source.read_sequence() == b"\x1b[A"
    assert source.read_sequence() == b"\x1b[<0;3;4M"
    assert source.read_sequence() == b"\x1b[15~"
    assert source.read_sequence() == b"\x1bOQ"


def test_read_sequence_x10_mouse(pipe_input):
    source, feed = pipe_input
    feed(b"\x1b[M !!x")
    assert source.read_sequence() == b"\x1b[M !!"
    assert source.read_sequence() == b"x"


def test_lone_escape_is_quit(pipe_input):
    source, feed = pipe_input
    feed(b"\x1b")
    assert source.read_event() is InputEvent.QUIT


def test_wait_for_tap_skips_mouse_noise(pipe_input):
    source, feed = pipe_input
    feed(b"\x1b[<35;1;1M\x1b[<0;1;1m\x1b[<0;1;1M")
    assert source.wait_for_tap() is True


def test_wait_for_tap_sequence(pipe_input):
    source, feed = pipe_input
    feed(b" x\x1b[<0;1;1m\x03", close=True)
    assert source.wait_for_tap() is True
    assert source.wait_for_tap() is True
    assert source.wait_for_tap() is False


def test_end_of_input_quits(pipe_input):
    source, feed = pipe_input
    feed(b"", close=True)
    assert source.wait_for_tap() is False


def test_terminal_mode_rejects_non_terminal():
    read_fd, write_fd = os.pipe()
    try:
        with assert_raises(TerminalError, match="not a terminal"):
            with terminal_mode(read_fd, output=io.StringIO()):
                pass
    finally:
        os.close(read_fd)
        os.close(write_fd)


def test_terminal_mode_restores_settings():
    output = io.StringIO()
    with patch.object(terminal.os, "isatty", return_value=True), \
         patch.object(terminal.termios, "tcgetattr", return_value=["saved"]) as tcgetattr, \
         patch.object(terminal.termios, "tcsetattr") as tcsetattr, \
         patch.object(terminal.tty, "setcbreak") as setcbreak:
        with pytest.raises(RuntimeError):
            with terminal_mode(7, output=output) as fd:
                assert fd == 7
                assert output.getvalue() == MOUSE_ON
                raise RuntimeError("boom")

    tcgetattr.assert_called_once_with(7)
    setcbreak.assert_called_once_with(7)
    tcsetattr.assert_called_once_with(7, terminal.termios.TCSADRAIN, ["saved"])
    assert output.getvalue() == MOUSE_ON + MOUSE_OFF


def test_terminal_mode_without_mouse():
    output = io.StringIO()
    with patch.object(terminal.os, "isatty", return_value=True), \
         patch.object(terminal.termios, "tcgetattr", return_value=[]), \
         patch.object(terminal.termios, "tcsetattr"), \
         patch.object(terminal.tty, "setcbreak"):
        with terminal_mode(7, mouse=False, output=output):
            pass
    assert output.getvalue() == ""


def test_terminal_mode_setup_failure():
    with patch.object(terminal.os, "isatty", return_value=True), \
         patch.object(terminal.termios, "tcgetattr", side_effect=terminal.termios.error(25, "nope")):
        with assert_raises(TerminalError, match="Can't put terminal into tap mode"):
            with terminal_mode(7, output=io.StringIO()):
                pass


@pytest.mark.parametrize("char", ["é", "ß", "€", "𝄞"])
def test_multibyte_key_is_one_tap(pipe_input, char):
    source, feed = pipe_input
    feed(char.encode("utf-8"), close=True)

    assert source.read_sequence() == char.encode("utf-8")
    assert source.wait_for_tap() is False


def test_multibyte_keys_are_separate_taps(pipe_input):
    source, feed = pipe_input
    feed("éü".encode("utf-8"), close=True)

    taps = 0
    while source.wait_for_tap():
        taps += 1
    assert taps == 2
