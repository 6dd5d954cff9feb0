"""
Live-adjustable animation parameters and the key bindings that change them.

`apply_key` is a pure function: it never mutates the state it is given and
every key either changes exactly one field, requests a quit, or is ignored.
All numeric fields stay within the bounds below no matter how many times a
key is pressed.
"""

from dataclasses import dataclass, replace

from .palette import ColorScheme

SPEED_BOUNDS = (5, 500)
DENSITY_BOUNDS = (0, 100)
LENGTH_BOUNDS = (1, 100)
SPAWN_BOUNDS = (0, 1000)

SPEED_STEP = 5
DENSITY_STEP = 5
LENGTH_STEP = 5

QUIT_KEYS = frozenset({"q", "escape", "enter", "space", "ctrl+c", "ctrl+d", "ctrl+z"})

# Number keys select colour schemes in declaration order.
SCHEME_KEYS = {str(number): scheme for number, scheme in enumerate(ColorScheme, start=1)}


def clamp(value: int, bounds: tuple[int, int]) -> int:
    low, high = bounds
    return min(max(value, low), high)


@dataclass(frozen=True)
class ControlState:
    """Animation parameters that the user can tweak while it runs."""

    speed_ms: int = 50
    density_pct: int = 40
    max_spawns_per_frame: int = 4
    max_length: int = 30
    color_scheme: ColorScheme = ColorScheme.GREEN
    should_quit: bool = False

    def clamped(self) -> "ControlState":
        """Return a copy with every numeric field forced into its bounds."""
        return replace(
            self,
            speed_ms=clamp(self.speed_ms, SPEED_BOUNDS),
            density_pct=clamp(self.density_pct, DENSITY_BOUNDS),
            max_spawns_per_frame=clamp(self.max_spawns_per_frame, SPAWN_BOUNDS),
            max_length=clamp(self.max_length, LENGTH_BOUNDS),
        )


def apply_key(current: ControlState, key: str) -> ControlState:
    """Fold one key event into the control state.

    Keys use textual-style names ("up", "escape", "ctrl+c") except for the
    printable characters "+", "=", "-" and the digits. Unknown keys return
    `current` unchanged.
    """
    if key in QUIT_KEYS:
        return replace(current, should_quit=True)

    if key == "up":
        return replace(current, speed_ms=clamp(current.speed_ms - SPEED_STEP, SPEED_BOUNDS))
    if key == "down":
        return replace(current, speed_ms=clamp(current.speed_ms + SPEED_STEP, SPEED_BOUNDS))
    if key == "right":
        return replace(
            current, density_pct=clamp(current.density_pct + DENSITY_STEP, DENSITY_BOUNDS)
        )
    if key == "left":
        return replace(
            current, density_pct=clamp(current.density_pct - DENSITY_STEP, DENSITY_BOUNDS)
        )
    if key in ("+", "="):
        return replace(current, max_length=clamp(current.max_length + LENGTH_STEP, LENGTH_BOUNDS))
    if key == "-":
        return replace(current, max_length=clamp(current.max_length - LENGTH_STEP, LENGTH_BOUNDS))

    scheme = SCHEME_KEYS.get(key)
    if scheme is not None:
        return replace(current, color_scheme=scheme)
    return current


def apply_keys(current: ControlState, keys) -> ControlState:
    """Fold a batch of key events in arrival order."""
    for key in keys:
        current = apply_key(current, key)
    return current
