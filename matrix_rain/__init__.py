"""Matrix Rain - animated digital rain for the terminal"""

from .compositor import Cell, DrawCommand, compose
from .console import console
from .controls import ControlState, apply_key, apply_keys
from .errors import InvalidConfiguration, RainError, TerminalInitFailure, TerminalWriteFailure
from .loop import FrameLoop, InputSource, LoopState, OutputSink
from .palette import ColorScheme, Palette, color_for
from .simulator import RandomSource, Stream, advance, resize_slots

__all__ = [
    # Palette
    "ColorScheme",
    "Palette",
    "color_for",
    # Simulator
    "RandomSource",
    "Stream",
    "advance",
    "resize_slots",
    # Compositor
    "Cell",
    "DrawCommand",
    "compose",
    # Controls
    "ControlState",
    "apply_key",
    "apply_keys",
    # Frame loop
    "FrameLoop",
    "InputSource",
    "LoopState",
    "OutputSink",
    # Errors
    "InvalidConfiguration",
    "RainError",
    "TerminalInitFailure",
    "TerminalWriteFailure",
    # Console
    "console",
]
