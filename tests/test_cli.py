"""Tests for the console input surface."""

import io
import logging
from unittest.mock import MagicMock

import pytest

from src.white_noise_player.core.events import InputAction, SetVolume, Stop
from src.white_noise_player.core.surface import VolumeControl
from src.white_noise_player.ui.cli import BANNER, FAREWELL, ConsoleSurface, parse_line
from tests.conftest import drain


@pytest.fixture
def wait_finished():
    return MagicMock(return_value=True)


def _surface(channel, wait_finished, lines):
    stream = io.StringIO(lines) if isinstance(lines, str) else lines
    output = io.StringIO()
    surface = ConsoleSurface(
        VolumeControl(channel),
        wait_finished,
        input_stream=stream,
        output_stream=output,
        pacing_s=0,
        shutdown_settle_s=1.0,
    )
    return surface, output


@pytest.mark.parametrize(
    "line,expected",
    [
        ("q\n", InputAction.QUIT),
        ("w\n", InputAction.VOLUME_UP),
        ("  s  \n", InputAction.VOLUME_DOWN),
        ("W\n", None),
        ("ws\n", None),
        ("\n", None),
        ("quit\n", None),
    ],
)
def test_parse_line(line, expected):
    assert parse_line(line) is expected


def test_session_sends_commands_and_says_goodbye(channel, wait_finished):
    surface, output = _surface(channel, wait_finished, "w\nw\ns\nq\n")

    assert surface.run() == 0

    assert drain(channel) == [SetVolume(2.0), SetVolume(4.0), SetVolume(2.0), Stop()]
    assert surface.control.level_db == 2.0
    text = output.getvalue()
    assert text.startswith(BANNER)
    assert text.rstrip().endswith(FAREWELL)
    wait_finished.assert_called_once_with(1.0)


def test_unrecognized_lines_send_nothing(channel, wait_finished):
    surface, _ = _surface(channel, wait_finished, "hello\n\nW\nx\nq\n")

    surface.run()

    assert drain(channel) == [Stop()]
    assert surface.control.level_db == 0.0


def test_lines_after_quit_are_not_read(channel, wait_finished):
    surface, _ = _surface(channel, wait_finished, "q\nw\n")

    surface.run()

    assert drain(channel) == [Stop()]


def test_eof_quits(channel, wait_finished):
    surface, output = _surface(channel, wait_finished, "w\n")

    surface.run()

    assert drain(channel) == [SetVolume(2.0), Stop()]
    assert FAREWELL in output.getvalue()


def test_read_error_is_logged_and_reading_continues(channel, wait_finished, caplog):
    stream = MagicMock()
    stream.readline.side_effect = [OSError("input device gone"), "w\n", "q\n"]
    surface, _ = _surface(channel, wait_finished, stream)

    with caplog.at_level(logging.ERROR):
        surface.run()

    assert drain(channel) == [SetVolume(2.0), Stop()]
    assert "input device gone" in caplog.text


def test_farewell_printed_even_if_playback_slow(channel, caplog):
    wait_finished = MagicMock(return_value=False)
    surface, output = _surface(channel, wait_finished, "q\n")

    with caplog.at_level(logging.WARNING):
        surface.run()

    assert FAREWELL in output.getvalue()
    assert "still running" in caplog.text


def test_undecodable_line_is_logged_and_skipped(channel, wait_finished, caplog):
    stream = io.TextIOWrapper(io.BytesIO(b"\xff\xfe\nw\nq\n"), encoding="utf-8")
    surface, _ = _surface(channel, wait_finished, stream)

    with caplog.at_level(logging.ERROR):
        assert surface.run() == 0

    assert drain(channel) == [SetVolume(2.0), Stop()]
    assert "Failed to read input" in caplog.text


def test_decode_error_from_plain_stream_is_recoverable(channel, wait_finished):
    stream = MagicMock(spec=["readline"])
    stream.readline.side_effect = [UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"), "s\n", "q\n"]
    surface, _ = _surface(channel, wait_finished, stream)

    surface.run()

    assert drain(channel) == [SetVolume(-2.0), Stop()]
