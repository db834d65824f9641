"""Input surfaces: turn user activations into control commands."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .channel import ControlChannel
from .errors import ChannelClosedError
from .events import ControlCommand, InputAction, SetVolume, Stop

logger = logging.getLogger("InputSurface")

# One-letter commands shared by the console and the terminal UI.
KEY_BINDINGS = {
    "q": InputAction.QUIT,
    "w": InputAction.VOLUME_UP,
    "s": InputAction.VOLUME_DOWN,
}


class VolumeControl:
    """
    Tracks the volume level on the input side and emits commands for activations.

    The worker never reports the level back, so this is the only copy of it.
    """

    def __init__(
        self,
        channel: ControlChannel,
        *,
        step_db: float = 2.0,
        min_db: Optional[float] = None,
        max_db: Optional[float] = None,
        initial_db: float = 0.0,
    ):
        self._channel = channel
        self._step_db = step_db
        self._min_db = min_db
        self._max_db = max_db
        self._level_db = initial_db
        self._inert = False

    @property
    def level_db(self) -> float:
        return self._level_db

    @property
    def inert(self) -> bool:
        """True once a send has failed because the worker is gone."""
        return self._inert

    def _clamp(self, level: float) -> float:
        if self._min_db is not None:
            level = max(level, self._min_db)
        if self._max_db is not None:
            level = min(level, self._max_db)
        return level

    def activate(self, action: Optional[InputAction]) -> Optional[ControlCommand]:
        """Apply one activation; returns the command sent, or None for no-ops."""
        if action is None:
            return None
        if action is InputAction.QUIT:
            command: ControlCommand = Stop()
        else:
            delta = self._step_db if action is InputAction.VOLUME_UP else -self._step_db
            self._level_db = self._clamp(self._level_db + delta)
            command = SetVolume(self._level_db)
        self.emit(command)
        return command

    def emit(self, command: ControlCommand) -> bool:
        try:
            self._channel.send(command)
        except ChannelClosedError as e:
            logger.error("Failed to send command: %s", e)
            self._inert = True
            return False
        return True


class InputSurface(ABC):
    """A source of discrete activations feeding one VolumeControl."""

    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
    ):
        self.control = control
        self._wait_finished = wait_finished

    def on_activation(self, action: Optional[InputAction]) -> Optional[ControlCommand]:
        return self.control.activate(action)

    @abstractmethod
    def run(self) -> int:
        """Run the surface until the user quits; returns a process exit code."""
