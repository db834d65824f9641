"""Looping white-noise player with console, window and terminal UI controls."""

__version__ = "0.1.0"
