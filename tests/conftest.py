import os
import struct
import wave
from pathlib import Path

import numpy as np
import pytest

# Qt widgets are created without a display in tests.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from src.white_noise_player.audio.types import LoopingSample
from src.white_noise_player.core.channel import ControlChannel
from src.white_noise_player.core.errors import AudioServiceError
from src.white_noise_player.core.shutdown import GracefulShutdown


class FakeSession:
    """Records session calls into the owning service's call log."""

    def __init__(self, calls: list):
        self._calls = calls
        self.volume_failures = 0
        self.fail_stop = False

    def set_volume(self, decibels, tween):
        self._calls.append(("set_volume", decibels, tween.duration_ms))
        if self.volume_failures:
            self.volume_failures -= 1
            raise AudioServiceError("session handle is invalid")

    def stop(self, tween):
        self._calls.append(("stop", tween.duration_ms))
        if self.fail_stop:
            raise AudioServiceError("could not start fade-out")


class FakeAudioService:
    """In-memory AudioOutputService; every call lands in `calls` in order."""

    def __init__(self):
        self.calls: list = []
        self.init_error = None
        self.load_error = None
        self.play_error = None
        self.session = FakeSession(self.calls)

    def initialize(self):
        self.calls.append(("initialize",))
        if self.init_error:
            raise self.init_error

    def load_looping_sample(self, path):
        self.calls.append(("load", Path(path)))
        if self.load_error:
            raise self.load_error
        return LoopingSample(frames=np.zeros((8, 1), dtype=np.float32), sample_rate=8000)

    def play(self, sample):
        self.calls.append(("play",))
        if self.play_error:
            raise self.play_error
        return self.session

    def close(self):
        self.calls.append(("close",))

    def names(self) -> list:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_service():
    return FakeAudioService()


@pytest.fixture
def channel():
    return ControlChannel()


@pytest.fixture
def shutdown():
    return GracefulShutdown()


def drain(channel: ControlChannel) -> list:
    """Everything currently queued on the channel, in order."""
    items = []
    while channel.pending():
        items.append(channel.receive(timeout=0))
    return items


@pytest.fixture
def setup_test_env():
    """Setup test environment variables"""
    original_env = os.environ.copy()

    os.environ["SAMPLE_PATH"] = "rain.wav"
    os.environ["VOLUME_STEP_DB"] = "3.0"
    os.environ["LOG_LEVEL"] = "DEBUG"

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def write_wav(tmp_path):
    """Factory writing raw PCM bytes to a WAV file under tmp_path."""

    def _write(name: str, pcm: bytes, *, sample_width: int = 2, channels: int = 1, rate: int = 8000) -> Path:
        path = tmp_path / name
        with wave.open(str(path), "wb") as wav_file:
            wav_file.setnchannels(channels)
            wav_file.setsampwidth(sample_width)
            wav_file.setframerate(rate)
            wav_file.writeframes(pcm)
        return path

    return _write


def write_truncated_wav(path: Path, *, declared: int, pcm: bytes, channels: int = 2, sample_width: int = 2, rate: int = 8000) -> Path:
    """Write a RIFF/WAVE file whose data chunk claims `declared` bytes but holds only `pcm`."""
    block_align = channels * sample_width
    fmt = struct.pack("<HHIIHH", 1, channels, rate, rate * block_align, block_align, sample_width * 8)
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt + b"data" + struct.pack("<I", declared) + pcm
    path.write_bytes(b"RIFF" + struct.pack("<I", len(body)) + body)
    return path
