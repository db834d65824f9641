"""Input surfaces: console, window (PySide6) and terminal UI (textual)."""
