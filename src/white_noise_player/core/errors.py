"""Error taxonomy for the player and the process-level fatal exit."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import NoReturn

logger = logging.getLogger("Player")


class PlayerError(Exception):
    """Base class for player errors."""


class AudioServiceError(PlayerError):
    """The audio device or the playing session rejected a request."""


class SampleLoadError(AudioServiceError):
    """The looping sample could not be read from disk."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load sample {self.path}: {reason}")

    @property
    def hint(self) -> str:
        return f"You need to put {self.path.name} in the same directory."


class ChannelClosedError(PlayerError):
    """Raised when sending to a control channel whose receiver has terminated."""


def describe(error: BaseException) -> str:
    """Diagnostic text for an error, including its remediation hint if any."""
    message = str(error)
    hint = getattr(error, "hint", None)
    if hint:
        message = f"{message}\n{hint}"
    return message


def fatal_abort(error: BaseException) -> NoReturn:
    """Log, flush and terminate the whole process.

    Used for failures that leave the player without a sound source. ``os._exit``
    is used so the process ends even while the main thread is blocked reading
    stdin or running a UI event loop.
    """
    diagnostic = describe(error)
    logger.critical(diagnostic)
    logging.shutdown()
    print(diagnostic, file=sys.stderr, flush=True)
    os._exit(1)
