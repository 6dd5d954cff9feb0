"""
Colour schemes for the falling streams.

A colour is picked from three inputs: the active scheme, the fade level of
the cell (0 is the head, larger values sit further up the trail) and the
length of the trail the cell belongs to. The rainbow scheme additionally
uses the column index so neighbouring streams get different hues.

All colours are truecolor `rich.color.Color` values so they can be used
directly in `rich.style.Style` objects by the canvas.
"""

import colorsys
from enum import Enum
from functools import lru_cache

from rich.color import Color


class ColorScheme(Enum):
    """Available colour schemes, in the order of their number keys 1-6."""

    GREEN = "green"
    BLUE = "blue"
    RED = "red"
    PURPLE = "purple"
    CYAN = "cyan"
    RAINBOW = "rainbow"

    @classmethod
    def from_name(cls, name: str) -> "ColorScheme | None":
        """Look up a scheme by name, ignoring case. Unknown names give None."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return None

    @classmethod
    def names(cls) -> list[str]:
        return [scheme.value for scheme in cls]


# (head, near-head glow) colours for the single-hue schemes.
_HEAD_COLORS: dict[ColorScheme, tuple[tuple[int, int, int], tuple[int, int, int]]] = {
    ColorScheme.GREEN: ((200, 255, 200), (100, 255, 100)),
    ColorScheme.BLUE: ((200, 220, 255), (100, 150, 255)),
    ColorScheme.RED: ((255, 220, 200), (255, 100, 100)),
    ColorScheme.PURPLE: ((240, 200, 255), (200, 100, 255)),
    ColorScheme.CYAN: ((200, 255, 255), (100, 255, 255)),
}

RAINBOW_HEAD = Color.from_rgb(255, 255, 255)


def _trail_rgb(scheme: ColorScheme, fade: float) -> tuple[float, float, float]:
    intensity = max(1.0 - fade * 0.85, 0.15)
    if scheme is ColorScheme.GREEN:
        return 30.0 * (1.0 - fade), 255.0 * intensity, 0.0
    if scheme is ColorScheme.BLUE:
        return 0.0, 100.0 * intensity, 255.0 * intensity
    if scheme is ColorScheme.RED:
        return 255.0 * intensity, 30.0 * (1.0 - fade), 0.0
    if scheme is ColorScheme.PURPLE:
        return 180.0 * intensity, 0.0, 255.0 * intensity
    return 0.0, 255.0 * intensity, 255.0 * intensity


def _rainbow_rgb(fade_level: int, fade: float, column: int) -> tuple[float, float, float]:
    hue = ((column * 10 + fade_level * 15) % 360) / 360.0
    value = max(1.0 - fade * 0.8, 0.2)
    r, g, b = colorsys.hsv_to_rgb(hue, 1.0, value)
    return r * 255.0, g * 255.0, b * 255.0


@lru_cache(maxsize=4096)
def color_for(scheme: ColorScheme, fade_level: int, length: int, column: int = 0) -> Color:
    """Return the colour of a trail cell.

    Args:
        scheme: Active colour scheme.
        fade_level: Distance behind the head, 0 for the head itself.
        length: Trail length of the stream; `fade_level == length` is the
            dimmest cell of the trail.
        column: Terminal column, only used by the rainbow scheme.
    """
    length = max(length, 1)
    fade_level = min(max(fade_level, 0), length)
    fade = fade_level / length

    if scheme is ColorScheme.RAINBOW:
        if fade_level == 0:
            return RAINBOW_HEAD
        rgb = _rainbow_rgb(fade_level, fade, column)
    else:
        head, glow = _HEAD_COLORS[scheme]
        if fade_level == 0:
            return Color.from_rgb(*head)
        if fade_level == 1:
            return Color.from_rgb(*glow)
        rgb = _trail_rgb(scheme, fade)

    r, g, b = (min(max(int(channel), 0), 255) for channel in rgb)
    return Color.from_rgb(r, g, b)


class Palette:
    """The active colour scheme, mirrored from the control state every tick."""

    def __init__(self, scheme: ColorScheme = ColorScheme.GREEN):
        self.scheme = scheme

    def color_for(self, fade_level: int, length: int, column: int = 0) -> Color:
        return color_for(self.scheme, fade_level, length, column)
