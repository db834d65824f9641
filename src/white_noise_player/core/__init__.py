from .shutdown import GracefulShutdown, StopSignal

__all__ = ["GracefulShutdown", "StopSignal"]
