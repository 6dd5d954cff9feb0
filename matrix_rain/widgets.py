"""
Canvas widget for the rain animation.

RainCanvas keeps a character buffer the size of the widget, applies the
draw commands produced each frame and renders the buffer as Rich Text.
Textual takes care of getting the result onto the screen.
"""

from __future__ import annotations

from typing import Sequence

from rich.color import Color
from rich.style import Style
from rich.text import Text
from textual.widget import Widget

from .compositor import DrawCommand
from .errors import TerminalWriteFailure

BLANK: tuple[str, Color | None] = (" ", None)


class RainCanvas(Widget):
    """Full-screen grid of coloured glyphs.

    The buffer is reallocated (blank) whenever the widget size changes; the
    frame loop discards its previous frame at the same moment, so the next
    batch of commands repaints everything that is still visible.
    """

    DEFAULT_CSS = """
    RainCanvas {
        width: 1fr;
        height: 1fr;
        background: black;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._buffer: list[list[tuple[str, Color | None]]] = []

    @property
    def grid_size(self) -> tuple[int, int]:
        """Current grid as (rows, cols)."""
        return self.size.height, self.size.width

    def _ensure_buffer(self, rows: int, cols: int) -> None:
        if len(self._buffer) == rows and all(len(line) == cols for line in self._buffer):
            return
        self._buffer = [[BLANK] * cols for _ in range(rows)]

    def apply(self, commands: Sequence[DrawCommand]) -> None:
        """Write a batch of draw commands into the buffer and schedule a repaint."""
        if not self.is_attached:
            raise TerminalWriteFailure("Rain canvas is not attached to a screen")
        rows, cols = self.grid_size
        self._ensure_buffer(rows, cols)
        for command in commands:
            if not (0 <= command.row < rows and 0 <= command.col < cols):
                raise TerminalWriteFailure(
                    f"Cell ({command.row}, {command.col}) is outside the {rows}x{cols} screen"
                )
            self._buffer[command.row][command.col] = (command.glyph, command.color)
        self.refresh()

    def cell(self, row: int, col: int) -> tuple[str, Color | None]:
        return self._buffer[row][col]

    def render(self) -> Text:
        text = Text(no_wrap=True, overflow="crop", end="")
        for index, line in enumerate(self._buffer):
            if index:
                text.append("\n")
            # Group runs of same-coloured cells to keep the span count down.
            run: list[str] = []
            run_color: Color | None = None
            for glyph, color in line:
                if color != run_color and run:
                    text.append("".join(run), Style.from_color(run_color) if run_color else None)
                    run = []
                run_color = color
                run.append(glyph)
            if run:
                text.append("".join(run), Style.from_color(run_color) if run_color else None)
        return text
