"""Per-frame linear gain ramps driven from the audio callback."""

from __future__ import annotations

import numpy as np

from .types import Easing, Tween

# Levels at or below this are treated as silence.
SILENCE_DB = -80.0
# Upper bound applied to requested levels before conversion to gain.
MAX_DB = 24.0


def db_to_amplitude(decibels: float) -> float:
    if decibels <= SILENCE_DB:
        return 0.0
    return float(10.0 ** (min(decibels, MAX_DB) / 20.0))


def tween_frames(tween: Tween, sample_rate: int) -> int:
    return int(sample_rate * tween.duration_ms / 1000)


class GainTween:
    """
    Linear amplitude ramp from the current gain to a target over a number of frames.

    Not thread-safe: callers serialize retarget() against render().
    """

    def __init__(self, gain: float = 1.0):
        self._start = gain
        self._target = gain
        self._length = 0
        self._elapsed = 0

    @property
    def current(self) -> float:
        if self._length <= 0 or self._elapsed >= self._length:
            return self._target
        return self._start + (self._target - self._start) * (self._elapsed / self._length)

    @property
    def target(self) -> float:
        return self._target

    @property
    def settled(self) -> bool:
        return self._elapsed >= self._length

    def retarget(self, target: float, n_frames: int, easing: Easing = Easing.LINEAR) -> None:
        if easing is not Easing.LINEAR:
            raise ValueError(f"unsupported easing: {easing}")
        self._start = self.current
        self._target = target
        self._length = max(0, n_frames)
        self._elapsed = 0

    def render(self, n: int) -> np.ndarray:
        """Gain for each of the next n frames; advances the ramp."""
        if self.settled:
            return np.full(n, self._target, dtype=np.float32)
        steps = np.arange(self._elapsed + 1, self._elapsed + n + 1, dtype=np.float64)
        progress = np.minimum(steps / self._length, 1.0)
        gains = self._start + (self._target - self._start) * progress
        self._elapsed = min(self._elapsed + n, self._length)
        return gains.astype(np.float32)
