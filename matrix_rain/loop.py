"""
Frame loop: one iteration of input, simulation and rendering.

The loop only talks to the terminal through two narrow interfaces, so it can
be driven by the textual app in production and by plain fakes in tests:

  - `InputSource.poll_nonblocking()` returns the keys pressed since the last
    call, oldest first, without waiting.
  - `OutputSink.size()` reports the grid as (rows, cols) and
    `OutputSink.draw(commands)` writes one batch of draw commands. The
    first `draw` after a size change (possibly an empty batch) starts from
    a blank grid.

Sleeping between frames is left to the caller (`delay` says for how long),
which lets an event-loop driven surface schedule the next tick instead of
blocking.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Protocol, Sequence

from .compositor import DrawCommand, Frame, compose
from .controls import SPEED_BOUNDS, ControlState, apply_keys, clamp
from .palette import Palette
from .simulator import RandomSource, Stream, advance, resize_slots


class InputSource(Protocol):
    def poll_nonblocking(self) -> list[str]: ...


class OutputSink(Protocol):
    def size(self) -> tuple[int, int]: ...

    def draw(self, commands: Sequence[DrawCommand]) -> None: ...


class LoopState(Enum):
    RUNNING = "running"
    TERMINATING = "terminating"


class FrameLoop:
    """Owns the control state and the stream slots for one animation run."""

    def __init__(
        self,
        control: ControlState,
        input_source: InputSource,
        output_sink: OutputSink,
        rng: RandomSource | None = None,
    ):
        self.control = control
        self.input_source = input_source
        self.output_sink = output_sink
        self.rng = rng or random.Random()
        self.palette = Palette(control.color_scheme)
        self.state = LoopState.RUNNING
        self.slots: list[Stream | None] = []
        self.rows = 0
        self.cols = 0
        self.previous: Frame = {}
        self.frames = 0

    @property
    def running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def delay(self) -> float:
        """Seconds to sleep after the current tick, never zero."""
        return clamp(self.control.speed_ms, SPEED_BOUNDS) / 1000.0

    def resize(self, rows: int, cols: int) -> bool:
        """Adopt a new grid size. Returns True when the size actually changed."""
        if (rows, cols) == (self.rows, self.cols):
            return False
        self.rows, self.cols = rows, cols
        self.slots = resize_slots(self.slots, cols)
        # The sink starts from a blank grid after a resize.
        self.previous = {}
        return True

    def tick(self) -> bool:
        """Run one iteration and return whether the loop keeps running.

        A quit key ends the iteration before anything is simulated or drawn.
        Errors raised by the output sink propagate to the caller.
        """
        if not self.running:
            return False

        keys = self.input_source.poll_nonblocking()
        if keys:
            self.control = apply_keys(self.control, keys)
        if self.control.should_quit:
            self.state = LoopState.TERMINATING
            return False
        self.palette.scheme = self.control.color_scheme

        rows, cols = self.output_sink.size()
        resized = self.resize(max(rows, 0), max(cols, 0))

        self.slots = advance(self.slots, self.rows, self.cols, self.control, self.rng)
        commands, self.previous = compose(self.slots, self.previous, self.rows, self.palette)
        # After a resize the sink must reset its grid even when nothing is left to draw.
        if commands or resized:
            self.output_sink.draw(commands)
        self.frames += 1
        return True

    def stop(self) -> None:
        """Request termination from outside the key stream."""
        self.state = LoopState.TERMINATING
