"""Playback worker: the only owner of the audio session."""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum, auto
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional

from .channel import ControlChannel
from .errors import AudioServiceError, describe, fatal_abort
from .events import ControlCommand, SetVolume, Stop
from .shutdown import StopSignal
from .worker import QueueWorker

if TYPE_CHECKING:
    from ..audio.types import AudioOutputService, SessionHandle, Tween

logger = logging.getLogger("PlaybackWorker")


class PlaybackState(Enum):
    INITIALIZING = auto()
    PLAYING = auto()
    STOPPING = auto()
    TERMINATED = auto()


class PlaybackWorker(QueueWorker):
    """
    Opens one looping session on start, then applies commands from the channel in order.

    INITIALIZING -> PLAYING -> STOPPING -> TERMINATED. Failing to open the session or
    to issue the fade-out is fatal and handed to `on_fatal`; a failed volume change is
    logged and the worker keeps waiting for commands.
    """

    def __init__(
        self,
        *,
        stop_signal: StopSignal,
        channel: ControlChannel,
        service: "AudioOutputService",
        sample_path: Path,
        volume_tween: "Tween",
        stop_tween: "Tween",
        stop_settle_s: float = 0.5,
        on_fatal: Callable[[AudioServiceError], None] = fatal_abort,
        name: str = "PlaybackThread",
        poll_interval_s: float = 0.1,
    ):
        super().__init__(
            name=name,
            stop_signal=stop_signal,
            channel=channel,
            poll_interval_s=poll_interval_s,
        )
        self._service = service
        self._sample_path = Path(sample_path)
        self._volume_tween = volume_tween
        self._stop_tween = stop_tween
        self._stop_settle_s = stop_settle_s
        self._on_fatal = on_fatal
        self._session: Optional["SessionHandle"] = None
        self._state = PlaybackState.INITIALIZING
        self.finished = threading.Event()

    @property
    def state(self) -> PlaybackState:
        return self._state

    def run(self) -> None:
        logger.info("PlaybackWorker started")
        try:
            self._session = self._open_session()
            self._state = PlaybackState.PLAYING
            if not self.consume():
                logger.info("PlaybackWorker: shutdown requested, stopping playback")
                self._stop_session()
        except AudioServiceError as e:
            self._fail(e)
            return
        except Exception as e:
            logger.exception("PlaybackWorker: unexpected error in %s", self._state.name)
            error = AudioServiceError(f"Unexpected playback failure: {e}")
            error.__cause__ = e
            self._fail(error)
            return
        self._terminate()
        logger.info("PlaybackWorker stopped")

    def _open_session(self) -> "SessionHandle":
        self._service.initialize()
        sample = self._service.load_looping_sample(self._sample_path)
        session = self._service.play(sample)
        logger.info("PlaybackWorker: playing %s", self._sample_path)
        return session

    def handle(self, command: ControlCommand) -> bool:
        if isinstance(command, SetVolume):
            assert self._session is not None
            try:
                self._session.set_volume(command.level_db, self._volume_tween)
            except AudioServiceError as e:
                logger.error("PlaybackWorker: failed to set volume to %.1f dB: %s", command.level_db, e)
            return True
        if isinstance(command, Stop):
            self._stop_session()
            return False
        logger.warning("PlaybackWorker: ignoring unknown command %r", command)
        return True

    def _stop_session(self) -> None:
        assert self._session is not None
        self._state = PlaybackState.STOPPING
        self._session.stop(self._stop_tween)
        # Let the fade-out finish before the device is released.
        time.sleep(self._stop_settle_s)
        self._service.close()
        self._session = None

    def _fail(self, error: AudioServiceError) -> None:
        logger.critical("PlaybackWorker: fatal audio error: %s", describe(error))
        self._terminate()
        self._on_fatal(error)

    def _terminate(self) -> None:
        self._state = PlaybackState.TERMINATED
        self._channel.close()
        self.finished.set()
