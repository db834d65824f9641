from dataclasses import dataclass
from enum import Enum, auto
from typing import Union


@dataclass(frozen=True)
class SetVolume:
    """Move the playing sound to an absolute level in decibels."""

    level_db: float


@dataclass(frozen=True)
class Stop:
    """Fade out and release the playing sound."""


ControlCommand = Union[SetVolume, Stop]


class InputAction(Enum):
    """Discrete activations an input surface can report."""
    VOLUME_UP = auto()
    VOLUME_DOWN = auto()
    QUIT = auto()
