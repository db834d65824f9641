"""Terminal UI surface built on textual."""

import asyncio
from typing import Callable

from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Button, Footer, Header, Static

from ..core.events import InputAction
from ..core.surface import InputSurface, VolumeControl


class PlayerApp(App):
    CSS = """
    Screen {
        align: center middle;
    }

    #controls {
        width: 36;
        height: auto;
        align: center top;
    }

    #controls Static {
        width: 100%;
        content-align: center middle;
    }

    #controls Button {
        width: 12;
        margin: 0 0 1 0;
    }
    """

    BINDINGS = [
        ("w", "volume_up", "Volume up"),
        ("s", "volume_down", "Volume down"),
        ("q", "quit_player", "Quit"),
    ]

    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
        quit_settle_s: float = 0.5,
    ):
        super().__init__()
        self.control = control
        self._wait_finished = wait_finished
        self._quit_settle_s = quit_settle_s

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="controls"):
            yield Static("Welcome to WhiteNoisePlayer!!")
            yield Static(self._level_text(), id="volume_label")
            yield Button("+", id="volume_up")
            yield Button("-", id="volume_down")
            yield Static("Thank you !!")
            yield Button("quit", id="quit", variant="error")
        yield Footer()

    def on_mount(self) -> None:
        self.title = "WhiteNoisePlayer"

    def _level_text(self) -> str:
        return f"Volume {self.control.level_db:+.1f} dB"

    def _activate(self, action: InputAction) -> None:
        self.control.activate(action)
        self.query_one("#volume_label", Static).update(self._level_text())
        if self.control.inert:
            self.query_one("#volume_up", Button).disabled = True
            self.query_one("#volume_down", Button).disabled = True

    def action_volume_up(self) -> None:
        self._activate(InputAction.VOLUME_UP)

    def action_volume_down(self) -> None:
        self._activate(InputAction.VOLUME_DOWN)

    async def action_quit_player(self) -> None:
        self._activate(InputAction.QUIT)
        self.query_one("#quit", Button).disabled = True
        # Let the fade-out finish without blocking the event loop.
        await asyncio.to_thread(self._wait_finished, self._quit_settle_s)
        self.exit()

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "volume_up":
            self.action_volume_up()
        elif event.button.id == "volume_down":
            self.action_volume_down()
        elif event.button.id == "quit":
            await self.action_quit_player()


class TerminalSurface(InputSurface):
    """Runs PlayerApp in the terminal."""

    def __init__(
        self,
        control: VolumeControl,
        wait_finished: Callable[[float], bool],
        quit_settle_s: float = 0.5,
    ):
        super().__init__(control, wait_finished)
        self._quit_settle_s = quit_settle_s

    def run(self) -> int:
        PlayerApp(self.control, self._wait_finished, self._quit_settle_s).run()
        return 0
