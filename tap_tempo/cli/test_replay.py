"""
Tests for the tap-tempo-replay command.
"""

import io
import json

import pytest

from tap_tempo.cli import replay
from tap_tempo.core.estimator import TempoEstimator
from tap_tempo.errors import InputFormatError
from conftest import assert_raises


@pytest.fixture(autouse=True)
def no_config_env(monkeypatch):
    monkeypatch.delenv("TAP_TEMPO_CONFIG", raising=False)


def test_parse_timestamps_skips_blanks_and_comments():
    lines = ["# recorded taps\n", "0.0\n", "\n", "  0.5 \n", "1.0"]
    assert replay.parse_timestamps(lines) == [0.0, 0.5, 1.0]


def test_parse_timestamps_bad_line():
    with assert_raises(InputFormatError, match=r"Entry 2: not a timestamp: 'abc'"):
        replay.parse_timestamps(["0.0", "abc"])


def test_parse_timestamps_decreasing():
    with assert_raises(InputFormatError, match="Entry 3: timestamp 0.2 is earlier than 0.5"):
        replay.parse_timestamps(["0.0", "0.5", "0.2"])


def test_replay_pairs_taps_with_estimates():
    results = replay.replay([0.0, 0.5, 1.0, 10.0], TempoEstimator(sample_size=5, timeout=5))

    assert [t for t, _ in results] == [0.0, 0.5, 1.0, 10.0]
    assert results[0][1] is None
    assert results[1][1] == pytest.approx(120.0)
    assert results[2][1] == pytest.approx(120.0)
    assert results[3][1] is None


def test_main_with_arguments(capsys):
    replay.main(["0", "0.5", "1.0"])

    out = capsys.readouterr().out.splitlines()
    assert out[:3] == ["0.000\t-", "0.500\t120", "1.000\t120"]
    assert "Estimates : 2" in out


def test_main_with_file(tmp_path, capsys):
    path = tmp_path / "taps.txt"
    path.write_text("0.0\n0.25\n0.5\n")

    replay.main(["--file", str(path), "--precision", "1", "--json"])

    out = capsys.readouterr().out
    assert "0.250\t240.0" in out
    summary = json.loads(out[out.index("{"):])
    assert summary["count"] == 2
    assert summary["mean_bpm"] == pytest.approx(240.0)


def test_main_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("0.0\n1.0\n"))
    replay.main(["--sample-size", "2"])
    assert "1.000\t60" in capsys.readouterr().out


def test_main_bad_input_exits(tmp_path, capsys):
    path = tmp_path / "taps.txt"
    path.write_text("0.0\nlater\n")

    with pytest.raises(SystemExit) as exc_info:
        replay.main(["--file", str(path)])

    assert exc_info.value.code == 1
    assert "not a timestamp" in capsys.readouterr().err


def test_main_zero_sample_size_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        replay.main(["--sample-size", "0", "0", "1"])

    assert exc_info.value.code == 1
    assert "sample size must be positive" in capsys.readouterr().err


@pytest.mark.parametrize("text", ["nan", "inf", "-inf"])
def test_parse_timestamps_non_finite(text):
    with assert_raises(InputFormatError, match=f"Entry 2: timestamp must be finite, got '{text}'"):
        replay.parse_timestamps(["0.0", text])


def test_main_non_finite_argument_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        replay.main(["0", "0.5", "nan"])

    assert exc_info.value.code == 1
    captured = capsys.readouterr()
    assert "timestamp must be finite" in captured.err
    assert "nan" not in captured.out


def test_main_nan_timeout_exits(capsys):
    with pytest.raises(SystemExit) as exc_info:
        replay.main(["--timeout", "nan", "0", "1"])

    assert exc_info.value.code == 1
    assert "finite" in capsys.readouterr().err


def test_main_warns_about_sample_size_one(caplog, capsys):
    with caplog.at_level("WARNING", logger="tap_tempo.cli.replay"):
        replay.main(["--sample-size", "1", "0", "0.5"])

    assert "never yields a tempo" in caplog.text
    assert "0.500\t-" in capsys.readouterr().out
