"""
Tests for the column simulator (matrix_rain/simulator.py).

Most tests drive `advance` with a seeded `random.Random`, which is enough to
check the invariants that must hold for any random sequence. Exact spawn
decisions are checked with ScriptedRandom, which replays fixed values.
"""

import random

from matrix_rain.controls import ControlState
from matrix_rain.simulator import GLYPHS, Stream, active_streams, advance, new_stream, resize_slots


class ScriptedRandom:
    """Deterministic random source.

    `random()` replays the scripted values (then 0.99 forever), `randint`
    always returns its lower bound, `shuffle` keeps the order and `choice`
    returns the first element.
    """

    def __init__(self, values=()):
        self.values = list(values)

    def random(self):
        return self.values.pop(0) if self.values else 0.99

    def randint(self, a, b):
        return a

    def shuffle(self, x):
        pass

    def choice(self, seq):
        return seq[0]


def control(**overrides):
    return ControlState(**overrides)


class TestAdvance:
    def test_scenario_four_spawns_on_first_tick(self):
        """density 100 with a cap of 4 on a 10 column grid starts exactly 4 streams."""
        slots = advance([], 20, 10, control(density_pct=100, max_spawns_per_frame=4), random.Random(1))
        streams = active_streams(slots)
        assert len(slots) == 10
        assert len(streams) == 4
        assert all(stream.head_row == 0 for stream in streams)

    def test_spawn_cap_is_never_exceeded(self):
        rng = random.Random(7)
        state = control(density_pct=100, max_spawns_per_frame=3, max_length=4)
        slots = []
        for _ in range(200):
            before = active_streams(slots)
            slots = advance(slots, 8, 25, state, rng)
            new = [s for s in active_streams(slots) if not any(s is old for old in before)]
            assert len(new) <= 3

    def test_full_density_fills_every_empty_column(self):
        rng = random.Random(3)
        state = control(density_pct=100, max_spawns_per_frame=50, max_length=6)
        slots = []
        for _ in range(30):
            slots = advance(slots, 12, 16, state, rng)
            assert all(stream is not None for stream in slots)

    def test_zero_density_never_spawns(self):
        rng = random.Random(5)
        slots = advance([], 10, 10, control(density_pct=100, max_spawns_per_frame=10), rng)
        assert active_streams(slots)

        idle = control(density_pct=0, max_spawns_per_frame=10)
        for _ in range(200):
            slots = advance(slots, 10, 10, idle, rng)
        assert active_streams(slots) == []

        for _ in range(20):
            slots = advance(slots, 10, 10, idle, rng)
            assert active_streams(slots) == []

    def test_head_rows_never_decrease(self):
        rng = random.Random(11)
        state = control(density_pct=60, max_spawns_per_frame=5, max_length=10)
        # Keep the streams referenced so their ids are never reused.
        last_head: dict[int, tuple[Stream, int]] = {}
        slots = []
        for _ in range(300):
            slots = advance(slots, 15, 30, state, rng)
            for stream in active_streams(slots):
                key = id(stream)
                if key in last_head:
                    assert stream.head_row == last_head[key][1] + 1
                last_head[key] = (stream, stream.head_row)

    def test_no_stream_outlives_its_trail(self):
        rng = random.Random(13)
        state = control(density_pct=80, max_spawns_per_frame=8, max_length=12)
        slots = []
        for _ in range(300):
            slots = advance(slots, 10, 20, state, rng)
            for stream in active_streams(slots):
                assert not stream.head_row - stream.length > 10

    def test_one_stream_per_column(self):
        rng = random.Random(17)
        state = control(density_pct=90, max_spawns_per_frame=20, max_length=5)
        slots = []
        for _ in range(100):
            slots = advance(slots, 10, 12, state, rng)
            assert len(slots) == 12
            for column, stream in enumerate(slots):
                if stream is not None:
                    assert stream.column == column

    def test_scenario_length_five_retires_at_rows_plus_five(self):
        rows = 10
        stream = Stream(column=0, length=5, glyphs=["x"] * 6)
        slots = [stream]
        idle = control(density_pct=0)
        rng = ScriptedRandom()

        while stream.head_row < rows + 4:
            slots = advance(slots, rows, 1, idle, rng)
            assert slots[0] is stream

        assert stream.head_row == rows + 4
        slots = advance(slots, rows, 1, idle, rng)
        assert stream.head_row == rows + 5
        assert slots[0] is None

    def test_spawn_decisions_follow_density(self):
        """Each candidate spawns when random() is below density/100."""
        rng = ScriptedRandom([0.1, 0.9, 0.3, 0.7])
        slots = advance([], 10, 4, control(density_pct=50, max_spawns_per_frame=4), rng)
        assert [stream is not None for stream in slots] == [True, False, True, False]

    def test_cap_stops_selected_candidates(self):
        rng = ScriptedRandom([0.0, 0.0, 0.0, 0.0])
        slots = advance([], 10, 4, control(density_pct=50, max_spawns_per_frame=2), rng)
        assert [stream is not None for stream in slots] == [True, True, False, False]

    def test_retired_column_can_spawn_same_tick(self):
        stream = Stream(column=0, length=1, head_row=5, glyphs=["a", "b"])
        slots = advance([stream], 5, 1, control(density_pct=100, max_spawns_per_frame=1), ScriptedRandom([0.0]))
        assert slots[0] is not None
        assert slots[0] is not stream
        assert slots[0].head_row == 0

    def test_streams_move_in_place_but_caller_list_is_kept(self):
        """Surviving streams are advanced in place; the slot list passed in is not rewritten."""
        moving = Stream(column=0, length=3, head_row=2, glyphs=["a"] * 4)
        retiring = Stream(column=1, length=1, head_row=5, glyphs=["b"] * 2)
        slots = [moving, retiring]

        result = advance(slots, 5, 2, control(density_pct=0), ScriptedRandom())

        assert result is not slots
        assert slots[0] is moving and slots[1] is retiring
        assert result[0] is moving
        assert moving.head_row == 3
        assert result[1] is None

    def test_degenerate_grid_is_a_noop(self):
        stream = Stream(column=0, length=3, head_row=2, glyphs=["a"] * 4)
        slots = [stream]
        state = control(density_pct=100, max_spawns_per_frame=10)

        assert advance(slots, 0, 5, state, random.Random(1)) is slots
        assert advance(slots, 5, 0, state, random.Random(1)) is slots
        assert stream.head_row == 2

    def test_out_of_range_density_is_clamped(self):
        rng = random.Random(2)
        slots = advance([], 10, 6, ControlState(density_pct=250, max_spawns_per_frame=6), rng)
        assert len(active_streams(slots)) == 6

        slots = advance([], 10, 6, ControlState(density_pct=-20, max_spawns_per_frame=6), rng)
        assert active_streams(slots) == []

    def test_max_length_below_one_is_clamped(self):
        slots = advance([], 10, 3, ControlState(density_pct=100, max_length=0), random.Random(4))
        for stream in active_streams(slots):
            assert stream.length == 1
            assert len(stream.glyphs) == 2


class TestResize:
    def test_shrink_drops_streams(self):
        slots = [Stream(column=i, length=2, glyphs=["a"] * 3) for i in range(6)]
        shrunk = resize_slots(slots, 3)
        assert len(shrunk) == 3
        assert [stream.column for stream in shrunk] == [0, 1, 2]

    def test_grow_adds_empty_slots(self):
        grown = resize_slots([None, None], 5)
        assert grown == [None] * 5

    def test_shrink_then_grow_can_spawn_again(self):
        rng = random.Random(21)
        state = control(density_pct=100, max_spawns_per_frame=10, max_length=3)
        slots = advance([], 10, 10, state, rng)
        slots = advance(slots, 10, 4, state, rng)
        assert len(slots) == 4

        slots = advance(slots, 10, 10, state, rng)
        assert len(slots) == 10
        for column in range(4, 10):
            assert slots[column] is not None
            assert slots[column].column == column


class TestStream:
    def test_new_stream_length_within_bounds(self):
        rng = random.Random(9)
        for _ in range(200):
            stream = new_stream(2, 7, rng)
            assert 1 <= stream.length <= 7
            assert stream.head_row == 0
            assert stream.spawn_row == 0
            assert len(stream.glyphs) == stream.length + 1
            assert all(glyph in GLYPHS for glyph in stream.glyphs)

    def test_cells_cover_head_to_tail(self):
        stream = Stream(column=0, length=3, head_row=4, glyphs=list("abcd"))
        assert list(stream.cells()) == [(4, 0), (3, 1), (2, 2), (1, 3)]

    def test_shimmer_keeps_most_of_the_trail(self):
        rng = random.Random(8)
        glyphs = list("abcdefghij")
        stream = Stream(column=0, length=9, glyphs=list(glyphs))
        stream.shimmer(rng)
        changed = sum(1 for old, new in zip(glyphs, stream.glyphs) if old != new)
        assert changed <= 2

    def test_glyphs_are_single_width(self):
        from rich.cells import cell_len

        assert all(cell_len(glyph) == 1 for glyph in GLYPHS)
