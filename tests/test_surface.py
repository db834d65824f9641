"""Tests for VolumeControl (input-side volume tracking)."""

import logging

import pytest

from src.white_noise_player.core.events import InputAction, SetVolume, Stop
from src.white_noise_player.core.surface import VolumeControl
from tests.conftest import drain


@pytest.mark.parametrize("ups,downs", [(0, 0), (1, 0), (3, 1), (2, 5), (10, 10)])
def test_step_accumulation(channel, ups, downs):
    """N ups then M downs leave the level at (N - M) * 2 dB, one SetVolume per activation."""
    control = VolumeControl(channel)

    for _ in range(ups):
        control.activate(InputAction.VOLUME_UP)
    for _ in range(downs):
        control.activate(InputAction.VOLUME_DOWN)

    assert control.level_db == (ups - downs) * 2.0
    expected = [SetVolume(2.0 * i) for i in range(1, ups + 1)]
    expected += [SetVolume(2.0 * (ups - i)) for i in range(1, downs + 1)]
    assert drain(channel) == expected


def test_quit_sends_stop_without_changing_level(channel):
    control = VolumeControl(channel)
    control.activate(InputAction.VOLUME_UP)

    command = control.activate(InputAction.QUIT)

    assert command == Stop()
    assert control.level_db == 2.0
    assert drain(channel) == [SetVolume(2.0), Stop()]


def test_unrecognized_activation_is_ignored(channel):
    control = VolumeControl(channel)

    assert control.activate(None) is None
    assert control.level_db == 0.0
    assert channel.pending() == 0


def test_custom_step(channel):
    control = VolumeControl(channel, step_db=0.5)
    control.activate(InputAction.VOLUME_DOWN)
    assert drain(channel) == [SetVolume(-0.5)]


def test_optional_bounds_clamp_level(channel):
    control = VolumeControl(channel, min_db=-4.0, max_db=2.0)

    for _ in range(3):
        control.activate(InputAction.VOLUME_UP)
    assert control.level_db == 2.0

    for _ in range(5):
        control.activate(InputAction.VOLUME_DOWN)
    assert control.level_db == -4.0


def test_send_to_closed_channel_marks_control_inert(channel, caplog):
    """A failed send is logged, not raised, and the control reports itself inert."""
    control = VolumeControl(channel)
    channel.close()

    with caplog.at_level(logging.ERROR):
        control.activate(InputAction.VOLUME_UP)

    assert control.inert
    assert control.level_db == 2.0
    assert "Failed to send command" in caplog.text
