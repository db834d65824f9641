"""Audio output service backed by sounddevice (callback mode)."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

import numpy as np
import sounddevice as sd

from ..core.errors import AudioServiceError
from .sample import load_looping_sample
from .tween import GainTween, db_to_amplitude, tween_frames
from .types import LoopingSample, Tween

logger = logging.getLogger("SoundDeviceSession")

# Callback block size: ~10 ms at 44.1 kHz
PLAYBACK_BLOCKSIZE = 512


class SoundDeviceSession:
    """
    One looping sound on an OutputStream.

    The callback pulls frames from the sample buffer, wrapping back to the loop
    start, and scales them by the current gain ramp. After stop() the ramp falls
    to silence and the callback raises CallbackStop once it has settled.
    """

    def __init__(self, sample: LoopingSample, device: Optional[int | str] = None):
        self._sample = sample
        self._position = sample.loop_start
        self._lock = threading.Lock()
        self._gain = GainTween(1.0)
        self._stopping = False
        self._closed = False
        self._callback_count = 0
        try:
            self._stream = sd.OutputStream(
                samplerate=sample.sample_rate,
                channels=sample.channels,
                dtype="float32",
                blocksize=PLAYBACK_BLOCKSIZE,
                device=device,
                callback=self._callback,
            )
            self._stream.start()
        except (sd.PortAudioError, ValueError) as e:
            raise AudioServiceError(f"Failed to start output stream: {e}") from e
        logger.info(
            "Session started sr=%s ch=%s blocksize=%s",
            sample.sample_rate,
            sample.channels,
            PLAYBACK_BLOCKSIZE,
        )

    def _read_frames(self, frames: int) -> np.ndarray:
        data = self._sample.frames
        out = np.empty((frames, self._sample.channels), dtype=np.float32)
        filled = 0
        while filled < frames:
            take = min(frames - filled, len(data) - self._position)
            out[filled : filled + take] = data[self._position : self._position + take]
            filled += take
            self._position += take
            if self._position >= len(data):
                self._position = self._sample.loop_start
        return out

    def _callback(
        self, outdata: np.ndarray, frames: int, time_info: object, status: sd.CallbackFlags
    ) -> None:
        if status:
            logger.warning("Session: callback status=%s", status)
        self._callback_count += 1
        with self._lock:
            gains = self._gain.render(frames)
            finished = self._stopping and self._gain.settled
        out = self._read_frames(frames) * gains[:, np.newaxis]
        np.clip(out, -1.0, 1.0, out=out)
        outdata[:] = out
        if finished:
            logger.info("Session: fade-out done after %d callbacks, raising CallbackStop", self._callback_count)
            raise sd.CallbackStop

    def _check_playing(self) -> None:
        if self._closed:
            raise AudioServiceError("session has been released")
        if self._stopping:
            raise AudioServiceError("session is stopping")

    def set_volume(self, decibels: float, tween: Tween) -> None:
        self._check_playing()
        gain = db_to_amplitude(decibels)
        n = tween_frames(tween, self._sample.sample_rate)
        with self._lock:
            self._gain.retarget(gain, n, tween.easing)
        logger.debug("Session: volume -> %.1f dB (gain %.3f) over %d frames", decibels, gain, n)

    def stop(self, tween: Tween) -> None:
        self._check_playing()
        n = tween_frames(tween, self._sample.sample_rate)
        with self._lock:
            self._gain.retarget(0.0, n, tween.easing)
            self._stopping = True
        logger.info("Session: fading out over %d frames", n)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._stream.active:
                self._stream.stop()
            self._stream.close()
        except Exception as e:
            logger.warning("Error closing playback stream: %s", e)


class SoundDeviceOutputService:
    """AudioOutputService on the default (or given) PortAudio output device."""

    def __init__(self, device: Optional[int | str] = None):
        self._device = device
        self._initialized = False
        self._session: Optional[SoundDeviceSession] = None

    def initialize(self) -> None:
        try:
            info = sd.query_devices(self._device, kind="output")
        except (sd.PortAudioError, ValueError) as e:
            raise AudioServiceError(f"No usable audio output device: {e}") from e
        self._initialized = True
        logger.info("Audio output device: %s", info.get("name", "?") if isinstance(info, dict) else info)

    def load_looping_sample(self, path: Path) -> LoopingSample:
        return load_looping_sample(path)

    def play(self, sample: LoopingSample) -> SoundDeviceSession:
        if not self._initialized:
            raise AudioServiceError("audio output service is not initialized")
        if self._session is not None:
            raise AudioServiceError("a playback session is already active")
        self._session = SoundDeviceSession(sample, device=self._device)
        return self._session

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
        self._initialized = False
