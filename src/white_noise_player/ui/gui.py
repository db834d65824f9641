"""Windowed input surface built on PySide6."""

from __future__ import annotations

import logging
import sys
from typing import Callable

from PySide6 import QtCore, QtWidgets
from PySide6.QtWidgets import QApplication, QLabel, QPushButton, QVBoxLayout, QWidget

from ..core.events import InputAction
from ..core.surface import InputSurface, VolumeControl

logger = logging.getLogger("WindowSurface")

WINDOW_TITLE = "WhiteNoisePLayer"
WINDOW_SIZE = (300, 300)
BUTTON_WIDTH = 64


class PlayerWindow(QWidget):
    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
        quit_settle_s: float = 0.5,
        *args,
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self._control = control
        self._wait_finished = wait_finished
        self._quit_settle_s = quit_settle_s

        self.setWindowTitle(WINDOW_TITLE)
        self.setFixedSize(*WINDOW_SIZE)

        self.layout = QVBoxLayout()
        self.layout.setContentsMargins(20, 20, 20, 20)
        self.layout.setSpacing(20)
        self.setLayout(self.layout)

        self.welcome_label = QLabel("Welcome to WhiteNoisePlayer!!")
        self.volume_label = QLabel("Volume")
        self.thanks_label = QLabel("Thank you !!")
        for label in (self.welcome_label, self.volume_label, self.thanks_label):
            label.setAlignment(QtCore.Qt.AlignmentFlag.AlignHCenter)

        self.volume_up_button = QPushButton("+")
        self.volume_down_button = QPushButton("-")
        self.quit_button = QPushButton("quit")
        for button in (self.volume_up_button, self.volume_down_button, self.quit_button):
            button.setFixedWidth(BUTTON_WIDTH)

        center = QtCore.Qt.AlignmentFlag.AlignHCenter
        self.layout.addWidget(self.welcome_label, alignment=center)
        self.layout.addWidget(self.volume_label, alignment=center)
        self.layout.addWidget(self.volume_up_button, alignment=center)
        self.layout.addWidget(self.volume_down_button, alignment=center)
        self.layout.addWidget(self.thanks_label, alignment=center)
        self.layout.addWidget(self.quit_button, alignment=center)

        self.volume_up_button.clicked.connect(self.on_volume_up)
        self.volume_down_button.clicked.connect(self.on_volume_down)
        self.quit_button.clicked.connect(self.on_quit)

    def _activate(self, action: InputAction) -> None:
        self._control.activate(action)
        if self._control.inert:
            self.volume_up_button.setEnabled(False)
            self.volume_down_button.setEnabled(False)

    def on_volume_up(self) -> None:
        self._activate(InputAction.VOLUME_UP)

    def on_volume_down(self) -> None:
        self._activate(InputAction.VOLUME_DOWN)

    def on_quit(self) -> None:
        self._activate(InputAction.QUIT)
        self.quit_button.setEnabled(False)
        self._wait_finished(self._quit_settle_s)
        self.close()


class WindowSurface(InputSurface):
    """Runs PlayerWindow inside a Qt event loop."""

    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
        quit_settle_s: float = 0.5,
    ):
        super().__init__(control, wait_finished)
        self._quit_settle_s = quit_settle_s

    def run(self) -> int:
        app = QApplication.instance() or QApplication(sys.argv)
        window = PlayerWindow(self.control, self._wait_finished, self._quit_settle_s)
        window.show()
        return app.exec()
