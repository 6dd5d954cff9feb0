"""
Textual application that hosts the rain animation.

RainApp is the terminal surface for the frame loop. Textual's application
mode puts the terminal into raw mode and the alternate screen on start and
restores it on every way out (quit key, fatal error, interrupt), so the app
itself only has to:

  - queue key presses as they arrive (`on_key`),
  - run one frame loop tick at a time from a one-shot timer that is
    re-armed with the current frame delay after every tick,
  - exit with the right return code when the loop stops.
"""

from __future__ import annotations

import asyncio
import signal
from collections import deque
from typing import Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding

from .compositor import DrawCommand
from .controls import ControlState
from .errors import TerminalWriteFailure
from .loop import FrameLoop
from .simulator import RandomSource
from .widgets import RainCanvas

# Textual key names that differ from the names used by the control layer.
_KEY_ALIASES = {
    "plus": "+",
    "minus": "-",
    "equals_sign": "=",
}


def translate_key(event: events.Key) -> str:
    """Map a textual key event onto the control layer's key vocabulary."""
    if event.character in ("+", "-", "="):
        return event.character
    return _KEY_ALIASES.get(event.key, event.key)


class TerminalSurface:
    """Input source and output sink backed by the app's key queue and canvas."""

    def __init__(self, canvas: RainCanvas, keys: deque[str]):
        self.canvas = canvas
        self.keys = keys

    def poll_nonblocking(self) -> list[str]:
        pending = list(self.keys)
        self.keys.clear()
        return pending

    def size(self) -> tuple[int, int]:
        return self.canvas.grid_size

    def draw(self, commands: Sequence[DrawCommand]) -> None:
        self.canvas.apply(commands)


class RainApp(App[int], inherit_bindings=False):
    """Full-screen digital rain."""

    CSS = """
    Screen {
        background: black;
    }
    """

    ENABLE_COMMAND_PALETTE = False

    # No default app bindings; interrupt keys go straight into the key queue.
    BINDINGS = [
        Binding("ctrl+c", "interrupt('ctrl+c')", show=False, priority=True),
        Binding("ctrl+d", "interrupt('ctrl+d')", show=False, priority=True),
        Binding("ctrl+z", "interrupt('ctrl+z')", show=False, priority=True),
    ]

    def __init__(self, control: ControlState, rng: RandomSource | None = None) -> None:
        super().__init__()
        self.initial_control = control
        self.rng = rng
        self.keys: deque[str] = deque()
        self.frame_loop: FrameLoop | None = None

    def compose(self) -> ComposeResult:
        yield RainCanvas(id="rain")

    def on_mount(self) -> None:
        canvas = self.query_one("#rain", RainCanvas)
        surface = TerminalSurface(canvas, self.keys)
        self.frame_loop = FrameLoop(self.initial_control, surface, surface, self.rng)
        self._install_signal_handlers()
        # Textual timers need a positive interval; the first frame runs once the canvas has a size.
        self.call_after_refresh(self._next_frame)

    def on_unmount(self) -> None:
        try:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGTERM)
        except (NotImplementedError, RuntimeError):
            pass

    def _install_signal_handlers(self) -> None:
        """Turn SIGTERM into an interrupt key, seen at the start of the next frame."""
        try:
            asyncio.get_running_loop().add_signal_handler(
                signal.SIGTERM, self.keys.append, "ctrl+c"
            )
        except (NotImplementedError, RuntimeError):
            self.log.warning("SIGTERM handler not supported on this platform")

    def on_key(self, event: events.Key) -> None:
        self.keys.append(translate_key(event))
        event.stop()

    def action_interrupt(self, key: str) -> None:
        self.keys.append(key)

    def _next_frame(self) -> None:
        frame_loop = self.frame_loop
        assert frame_loop is not None
        control_before = frame_loop.control
        size_before = (frame_loop.rows, frame_loop.cols)

        try:
            running = frame_loop.tick()
        except TerminalWriteFailure as e:
            self.log.error(f"Frame {frame_loop.frames} could not be written: {e}")
            self.exit(1, return_code=1, message=f"[red]Error: {e}[/red]")
            return

        if frame_loop.control != control_before:
            self.log(f"Controls changed: {frame_loop.control}")
        if (frame_loop.rows, frame_loop.cols) != size_before:
            self.log(f"Grid resized to {frame_loop.rows}x{frame_loop.cols}")

        if running:
            self.set_timer(frame_loop.delay, self._next_frame)
        else:
            self.log(f"Quit requested after {frame_loop.frames} frames")
            self.exit(0)
