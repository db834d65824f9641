"""Load a PCM WAV file as a looping sample."""

from __future__ import annotations

import logging
import wave
from pathlib import Path

import numpy as np

from ..core.errors import SampleLoadError
from .types import LoopingSample

logger = logging.getLogger(__name__)


def _pcm_to_float32(raw: bytes, sample_width: int) -> np.ndarray:
    if sample_width == 1:
        # 8-bit WAV is unsigned
        data = np.frombuffer(raw, dtype=np.uint8).astype(np.float32)
        return (data - 128.0) / 128.0
    if sample_width == 2:
        return np.frombuffer(raw, dtype="<i2").astype(np.float32) / 32768.0
    if sample_width == 3:
        b = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        ints = b[:, 0] | (b[:, 1] << 8) | (b[:, 2] << 16)
        ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
        return ints.astype(np.float32) / 8388608.0
    if sample_width == 4:
        return np.frombuffer(raw, dtype="<i4").astype(np.float32) / 2147483648.0
    raise ValueError(f"unsupported sample width: {sample_width} bytes")


def load_looping_sample(path: Path | str) -> LoopingSample:
    """Read `path` into a LoopingSample that loops from its first frame.

    Raises SampleLoadError if the file is missing, unreadable, or empty.
    """
    path = Path(path)
    if not path.is_file():
        raise SampleLoadError(path, "file not found")

    try:
        with wave.open(str(path), "rb") as wav_file:
            channels = wav_file.getnchannels()
            sample_width = wav_file.getsampwidth()
            sample_rate = wav_file.getframerate()
            raw = wav_file.readframes(wav_file.getnframes())
        # A data chunk cut off mid-frame leaves a partial frame that will not reshape.
        frames = _pcm_to_float32(raw, sample_width).reshape(-1, channels)
    except (wave.Error, EOFError, OSError, ValueError) as e:
        raise SampleLoadError(path, str(e)) from e

    if len(frames) == 0:
        raise SampleLoadError(path, "file contains no audio frames")

    logger.info(
        "Loaded sample %s sr=%s ch=%s frames=%d", path, sample_rate, channels, len(frames)
    )
    return LoopingSample(frames=frames, sample_rate=sample_rate, loop_start=0)
