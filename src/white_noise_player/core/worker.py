"""Reusable worker thread utilities."""

from __future__ import annotations

import queue
import threading

from .channel import ControlChannel
from .events import ControlCommand
from .shutdown import StopSignal


class QueueWorker(threading.Thread):
    """
    Base class for a channel-consuming worker thread.

    This keeps lifecycle + polling logic in one place. Subclasses implement
    `handle(command)` and return False from it to leave the loop.
    """

    def __init__(
        self,
        *,
        name: str,
        stop_signal: StopSignal,
        channel: ControlChannel,
        poll_interval_s: float = 0.1,
        daemon: bool = True,
    ):
        super().__init__(name=name, daemon=daemon)
        self._stop_signal = stop_signal
        self._channel = channel
        self._poll_interval_s = poll_interval_s

    def consume(self) -> bool:
        """Process commands until handle() asks to stop or the stop signal is set.

        Returns True if handle() ended the loop, False if the stop signal did.
        """
        while not self._stop_signal.is_set():
            try:
                command = self._channel.receive(timeout=self._poll_interval_s)
            except queue.Empty:
                continue

            try:
                keep_going = self.handle(command)
            finally:
                self._channel.task_done()
            if not keep_going:
                return True
        return False

    def run(self) -> None:
        self.consume()

    def handle(self, command: ControlCommand) -> bool:
        raise NotImplementedError
