"""Error kinds raised at the edges of the rain animation.

The simulation itself cannot fail; only talking to the terminal and reading
configuration can.
"""


class RainError(Exception):
    """Base class for all matrix_rain errors."""

    exit_code = 1


class TerminalInitFailure(RainError):
    """Raw mode or the terminal size query failed before the loop started."""


class TerminalWriteFailure(RainError):
    """A frame could not be written to the terminal."""


class InvalidConfiguration(RainError):
    """A configuration value could not be turned into a valid setting."""

    exit_code = 2
