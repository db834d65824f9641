"""Control channel between input surfaces and the playback worker."""

from __future__ import annotations

import queue
import threading

from .errors import ChannelClosedError
from .events import ControlCommand


class ControlChannel:
    """
    Unbounded FIFO of ControlCommand values.

    Any number of threads may send; exactly one worker receives. Once the worker
    closes the channel, further sends raise ChannelClosedError.
    """

    def __init__(self):
        self._queue: "queue.Queue[ControlCommand]" = queue.Queue()
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, command: ControlCommand) -> None:
        if self._closed.is_set():
            raise ChannelClosedError(f"control channel closed, dropped {command!r}")
        self._queue.put_nowait(command)

    def receive(self, timeout: float | None = None) -> ControlCommand:
        """Block for the next command. Raises queue.Empty on timeout."""
        return self._queue.get(timeout=timeout)

    def task_done(self) -> None:
        self._queue.task_done()

    def close(self) -> None:
        self._closed.set()

    def pending(self) -> int:
        return self._queue.qsize()
