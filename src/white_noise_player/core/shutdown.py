"""Process-wide stop signal shared by the input surface and the playback thread."""

import logging
import threading
from typing import Optional, Protocol

logger = logging.getLogger("Shutdown")


class StopSignal(Protocol):
    """Protocol for shutdown signals used by worker threads."""

    def is_set(self) -> bool: ...


class GracefulShutdown:
    """Set once; later calls to stop() are no-ops. Remembers why it was set."""

    def __init__(self):
        self.stop_event = threading.Event()
        self._lock = threading.Lock()
        self.reason: Optional[str] = None

    def stop(self, reason: str = "requested"):
        with self._lock:
            if self.stop_event.is_set():
                return
            self.reason = reason
            self.stop_event.set()
        logger.info("Shutdown: %s", reason)

    def is_set(self) -> bool:
        return self.stop_event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self.stop_event.wait(timeout)
