"""
Utility functions for matrix_rain.

  - Package version lookup
  - Welcome header shown before the animation takes over the screen
  - Terminal probe run at startup
"""

import os
import sys
from importlib.metadata import PackageNotFoundError, version

from rich import box
from rich.panel import Panel

from .commands import get_help_text
from .console import console
from .controls import ControlState
from .errors import TerminalInitFailure


def get_version() -> str:
    """Get the installed package version, or "dev" when running from source."""
    try:
        return version("matrix-rain")
    except PackageNotFoundError:
        return "dev"


def probe_terminal(stream=None) -> tuple[int, int]:
    """Return the terminal size as (rows, cols).

    Raises TerminalInitFailure when the stream is not attached to a terminal
    or its size cannot be read; the animation cannot start in that case.
    """
    stream = stream or sys.__stdout__
    try:
        if stream is None or not stream.isatty():
            raise TerminalInitFailure("Standard output is not a terminal")
        size = os.get_terminal_size(stream.fileno())
    except (OSError, ValueError) as e:
        raise TerminalInitFailure(f"Could not query the terminal size: {e}") from e
    if size.lines <= 0 or size.columns <= 0:
        raise TerminalInitFailure(f"Terminal reports an empty size ({size.columns}x{size.lines})")
    return size.lines, size.columns


def print_header(control: ControlState):
    """Print the title, the starting settings and the runtime controls."""
    header_text = f"""[bold green]Matrix Rain[/bold green] [dim]v{get_version()}[/dim]
[dim]Press any exit key (q/Esc/Enter/Space/Ctrl+C) to leave[/dim]

[dim]Speed: {control.speed_ms}ms | Density: {control.density_pct}% | Spawns: {control.max_spawns_per_frame} | Length: {control.max_length} | Color: {control.color_scheme.value}[/dim]

{get_help_text()}"""

    console.print(Panel(header_text, box=box.ROUNDED, expand=False))
