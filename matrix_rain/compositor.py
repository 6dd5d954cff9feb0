"""
Turns the simulator state into per-cell draw commands.

Rendering is differential: `compose` compares the cells covered by the
current streams with the frame drawn last time and emits a command only for
cells that changed. Cells that a stream has vacated get a clear command.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from rich.color import Color

from .palette import Palette
from .simulator import Stream


class Cell(NamedTuple):
    glyph: str
    color: Color


class DrawCommand(NamedTuple):
    """Write `glyph` at (`row`, `col`). A clear command has no colour."""

    row: int
    col: int
    glyph: str
    color: Color | None

    @property
    def is_clear(self) -> bool:
        return self.color is None


Frame = dict[tuple[int, int], Cell]


def frame_for(slots: Sequence[Stream | None], rows: int, palette: Palette) -> Frame:
    """Collect the visible cells of every active stream."""
    frame: Frame = {}
    for stream in slots:
        if stream is None:
            continue
        for row, fade_level in stream.cells():
            if 0 <= row < rows:
                color = palette.color_for(fade_level, stream.length, stream.column)
                frame[(row, stream.column)] = Cell(stream.glyphs[fade_level], color)
    return frame


def compose(
    slots: Sequence[Stream | None],
    previous: Frame,
    rows: int,
    palette: Palette,
) -> tuple[list[DrawCommand], Frame]:
    """Build the commands that turn `previous` into the current frame.

    Returns the commands (clears first, then draws, each in row-major order)
    and the new frame, which the caller passes back in on the next tick.
    Cells of `previous` that lie outside the current grid are dropped
    without a clear command.
    """
    cols = len(slots)
    current = frame_for(slots, rows, palette)

    clears = [
        DrawCommand(row, col, " ", None)
        for (row, col) in previous
        if (row, col) not in current and 0 <= row < rows and 0 <= col < cols
    ]
    draws = [
        DrawCommand(row, col, cell.glyph, cell.color)
        for (row, col), cell in current.items()
        if previous.get((row, col)) != cell
    ]
    clears.sort(key=lambda command: (command.row, command.col))
    draws.sort(key=lambda command: (command.row, command.col))
    return clears + draws, current
