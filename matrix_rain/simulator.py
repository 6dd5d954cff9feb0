"""
Column simulator: one falling stream per terminal column.

The screen is modelled as a list of column slots. A slot is either empty
(`None`) or holds exactly one `Stream`. Every tick each stream moves one row
down and is retired once its whole trail has left the screen; empty slots
are then offered to the spawn policy, which starts new streams at the top of
the screen subject to the density and the per-tick spawn cap.

Randomness comes from an injectable `RandomSource` so tests can drive the
spawn policy deterministically. `random.Random` satisfies the protocol.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, MutableSequence, Protocol, Sequence, TypeVar

if TYPE_CHECKING:
    from .controls import ControlState

T = TypeVar("T")

# Printable ASCII plus half-width katakana; every glyph is one cell wide.
GLYPHS = (
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    "@#$%^&*()_+-=[]{}|;:,.<>?"
    + "".join(chr(code) for code in range(0xFF66, 0xFF9E))
)

# At most this many glyphs of a trail are re-rolled per tick.
SHIMMER_MAX = 2


class RandomSource(Protocol):
    """The subset of `random.Random` the simulator relies on."""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def shuffle(self, x: MutableSequence) -> None: ...

    def choice(self, seq: Sequence[T]) -> T: ...


@dataclass
class Stream:
    """A single falling trail.

    `glyphs[i]` is drawn `i` rows above the head, so the trail covers rows
    `head_row - length` to `head_row` and holds `length + 1` glyphs.
    """

    column: int
    length: int
    head_row: int = 0
    spawn_row: int = 0
    glyphs: list[str] = field(default_factory=list)

    @property
    def tail_row(self) -> int:
        return self.head_row - self.length

    def cells(self):
        """Yield (row, fade_level) for every cell of the trail, head first."""
        for fade_level in range(self.length + 1):
            yield self.head_row - fade_level, fade_level

    def is_done(self, rows: int) -> bool:
        """True once every cell of the trail is below the last screen row."""
        return self.tail_row >= rows

    def shimmer(self, rng: RandomSource) -> None:
        """Re-roll a couple of glyphs so the trail flickers without turning to noise."""
        for _ in range(rng.randint(0, SHIMMER_MAX)):
            if rng.random() < 0.5:
                index = rng.randint(0, len(self.glyphs) - 1)
                self.glyphs[index] = rng.choice(GLYPHS)


def new_stream(column: int, max_length: int, rng: RandomSource) -> Stream:
    """Create a stream at the top of `column` with a random trail length."""
    length = rng.randint(1, max(max_length, 1))
    return Stream(
        column=column,
        length=length,
        head_row=0,
        spawn_row=0,
        glyphs=[rng.choice(GLYPHS) for _ in range(length + 1)],
    )


def resize_slots(slots: list[Stream | None], cols: int) -> list[Stream | None]:
    """Fit the slot list to a new column count.

    Shrinking drops the streams of the removed columns; growing adds empty
    slots, which are immediately eligible for spawning.
    """
    cols = max(cols, 0)
    if len(slots) >= cols:
        return slots[:cols]
    return slots + [None] * (cols - len(slots))


def advance(
    slots: list[Stream | None],
    rows: int,
    cols: int,
    control: ControlState,
    rng: RandomSource | None = None,
) -> list[Stream | None]:
    """Advance every column by one tick and apply the spawn policy.

    This is not a pure function: the surviving `Stream` objects of `slots`
    are mutated in place (their `head_row` advances and their glyphs
    shimmer), and callers must treat the old streams as consumed. The
    caller's list itself is left as it was; the returned list is a new slot
    list of length `cols`. A degenerate terminal (no rows or no columns)
    touches nothing and returns `slots` itself.
    """
    if rows <= 0 or cols <= 0:
        return slots
    rng = rng or random.Random()

    next_slots = resize_slots(list(slots), cols)
    candidates = []
    for column, stream in enumerate(next_slots):
        if stream is not None:
            stream.head_row += 1
            if stream.is_done(rows):
                next_slots[column] = None
            else:
                stream.shimmer(rng)
                continue
        candidates.append(column)

    density = min(max(control.density_pct, 0), 100) / 100.0
    spawn_cap = max(control.max_spawns_per_frame, 0)
    if density <= 0.0 or spawn_cap == 0:
        return next_slots

    rng.shuffle(candidates)
    spawned = 0
    for column in candidates:
        if spawned >= spawn_cap:
            break
        if rng.random() < density:
            next_slots[column] = new_stream(column, control.max_length, rng)
            spawned += 1
    return next_slots


def active_streams(slots: Sequence[Stream | None]) -> list[Stream]:
    return [stream for stream in slots if stream is not None]
