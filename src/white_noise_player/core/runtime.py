"""Runtime context holding the shared channel and shutdown signal."""

from __future__ import annotations

from dataclasses import dataclass

from .channel import ControlChannel
from .shutdown import GracefulShutdown


@dataclass
class RuntimeContext:
    """
    Shared runtime objects owned by WhiteNoisePlayer.

    The channel lives here (not as a global) and is injected into the worker and
    the input surface.
    """

    control_channel: ControlChannel
    shutdown_signal: GracefulShutdown

    @classmethod
    def create(cls) -> "RuntimeContext":
        return cls(
            control_channel=ControlChannel(),
            shutdown_signal=GracefulShutdown(),
        )
