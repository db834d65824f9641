"""Main player orchestrator."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

from .errors import AudioServiceError, fatal_abort
from .playback import PlaybackWorker
from .runtime import RuntimeContext
from .surface import VolumeControl
from ..audio.types import Tween

if TYPE_CHECKING:
    from ..audio.types import AudioOutputService
    from ..config.settings import PlayerConfig

logger = logging.getLogger("Player")


class WhiteNoisePlayer:
    """
    Wires the control channel, the playback worker and the volume control.

    Manages:
    - PlaybackWorker thread (owns the audio session)
    - VolumeControl (input-side level, handed to whichever surface runs)
    """

    def __init__(
        self,
        config: "PlayerConfig",
        service: Optional["AudioOutputService"] = None,
        on_fatal: Callable[[AudioServiceError], None] = fatal_abort,
    ):
        self._config = config
        self.runtime = RuntimeContext.create()

        if service is None:
            from ..audio.device import SoundDeviceOutputService
            service = SoundDeviceOutputService()

        self.worker = PlaybackWorker(
            stop_signal=self.runtime.shutdown_signal,
            channel=self.runtime.control_channel,
            service=service,
            sample_path=config.sample_path,
            volume_tween=Tween(duration_ms=config.volume_tween_ms),
            stop_tween=Tween(duration_ms=config.stop_tween_ms),
            stop_settle_s=config.stop_settle_ms / 1000,
            on_fatal=on_fatal,
        )
        self.control = VolumeControl(
            self.runtime.control_channel,
            step_db=config.volume_step_db,
            min_db=config.volume_min_db,
            max_db=config.volume_max_db,
        )

    def start(self) -> None:
        """Start the playback thread."""
        self.worker.start()

    def wait_finished(self, timeout: Optional[float] = None) -> bool:
        """Block until the worker has terminated or `timeout` seconds pass."""
        return self.worker.finished.wait(timeout)

    def stop(self, timeout: Optional[float] = None, reason: str = "player closed") -> None:
        """Signal the worker to fade out (if still playing) and wait for it."""
        self.runtime.shutdown_signal.stop(reason)
        if self.worker.is_alive():
            self.worker.join(timeout)
            if self.worker.is_alive():
                logger.warning("PlaybackWorker did not stop within %.1fs", timeout or 0.0)
