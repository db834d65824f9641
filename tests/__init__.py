"""
White Noise Player Tests
========================

This package contains unit tests for the player components.

Test Structure:
- test_playback_worker.py: Playback state machine against a fake audio service
- test_surface.py: Volume tracking and command emission
- test_cli.py / test_gui.py / test_tui.py: Input surfaces
- test_device.py: sounddevice-backed audio output service
- conftest.py: Shared test fixtures and setup

To run tests:
    pytest tests/

To run with coverage:
    pytest tests/ --cov=src/white_noise_player

To run specific test file:
    pytest tests/test_playback_worker.py
"""
