"""Console input surface: one-letter commands read line by line."""

from __future__ import annotations

import io
import logging
import sys
import time
from typing import Callable, Optional, TextIO

from ..config.settings import flush_logging
from ..core.events import InputAction
from ..core.surface import KEY_BINDINGS, InputSurface, VolumeControl

logger = logging.getLogger("ConsoleSurface")

BANNER = """Welcome!!
This is WhiteNoisePlayer.

Please type...
[q] for quitting.
[w] for volume up.
[s] for volume down."""

FAREWELL = "Thank you byebye!!"


def parse_line(line: str) -> Optional[InputAction]:
    """Map one input line to an action; None for anything unrecognized."""
    return KEY_BINDINGS.get(line.strip())


class ConsoleSurface(InputSurface):
    """
    Main Thread Interface.

    Blocks on one line of input at a time and pauses between commands.
    """

    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
        *,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
        pacing_s: float = 0.5,
        shutdown_settle_s: float = 1.0,
    ):
        super().__init__(control, wait_finished)
        self._input = input_stream or sys.stdin
        self._output = output_stream or sys.stdout
        self._pacing_s = pacing_s
        self._shutdown_settle_s = shutdown_settle_s

    def _print(self, text: str) -> None:
        print(text, file=self._output, flush=True)

    def run(self) -> int:
        self._print(BANNER)
        self.loop()

        # Give the worker time to finish the fade-out before saying goodbye.
        if not self._wait_finished(self._shutdown_settle_s):
            logger.warning("Playback still running after %.1fs", self._shutdown_settle_s)
        flush_logging()
        self._print(FAREWELL)
        return 0

    def _read_line(self) -> str:
        # Decode per line; an undecodable line must not discard the lines buffered after it.
        raw = getattr(self._input, "buffer", None)
        if isinstance(raw, io.BufferedIOBase):
            return raw.readline().decode(getattr(self._input, "encoding", None) or "utf-8")
        return self._input.readline()

    def loop(self) -> None:
        while True:
            try:
                line = self._read_line()
            except (OSError, UnicodeDecodeError) as e:
                logger.error(f"Failed to read input: {e}")
                time.sleep(self._pacing_s)
                continue

            # EOF: nothing more will ever arrive, so quit.
            action = InputAction.QUIT if line == "" else parse_line(line)
            self.on_activation(action)
            if action is InputAction.QUIT:
                break

            time.sleep(self._pacing_s)
