"""Audio output data types and the service interface the worker depends on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Protocol

import numpy as np


class Easing(Enum):
    LINEAR = auto()


class StartTime(Enum):
    IMMEDIATE = auto()


@dataclass(frozen=True)
class Tween:
    """How a value change is interpolated over time."""

    duration_ms: int
    easing: Easing = Easing.LINEAR
    start_time: StartTime = StartTime.IMMEDIATE


@dataclass(frozen=True)
class LoopingSample:
    """Decoded PCM audio that restarts from `loop_start` when it runs out."""

    frames: np.ndarray  # shape: (n_frames, channels) float32 in [-1, 1]
    sample_rate: int
    loop_start: int = 0

    @property
    def channels(self) -> int:
        return self.frames.shape[1]

    def __len__(self) -> int:
        return self.frames.shape[0]


class SessionHandle(Protocol):
    """A playing sound. Both methods raise AudioServiceError on failure."""

    def set_volume(self, decibels: float, tween: Tween) -> None: ...

    def stop(self, tween: Tween) -> None: ...


class AudioOutputService(Protocol):
    """Black-box audio engine used by the playback worker."""

    def initialize(self) -> None: ...

    def load_looping_sample(self, path: Path) -> LoopingSample: ...

    def play(self, sample: LoopingSample) -> SessionHandle: ...

    def close(self) -> None: ...
