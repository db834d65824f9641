"""Audio output subsystem - looping sample playback with gain tweens.

The sounddevice-backed service lives in `.device` and is imported on demand.
"""

from .sample import load_looping_sample
from .tween import GainTween, db_to_amplitude
from .types import AudioOutputService, Easing, LoopingSample, SessionHandle, StartTime, Tween

__all__ = [
    "AudioOutputService",
    "Easing",
    "GainTween",
    "LoopingSample",
    "SessionHandle",
    "StartTime",
    "Tween",
    "db_to_amplitude",
    "load_looping_sample",
]
