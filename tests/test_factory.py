import random
import re
import pytest
from hypothesis import given, strategies as st

import config
from cpa.factory import create_aircraft, generate_callsign, generate_flight_level
from cpa.models import Viewport

CALLSIGN_RE = re.compile(r"^(%s)\d{1,3}[A-Z]?$" % "|".join(config.CALLSIGN_PREFIXES))


def _on_an_edge(pos, vp: Viewport) -> bool:
    x, y = pos
    inset = config.EDGE_INSET_X
    top_or_bottom = y in (vp.top_buffer, vp.height - vp.bottom_buffer) and inset <= x <= vp.width - inset
    left_or_right = x in (vp.edge_margin, vp.width - vp.edge_margin) and \
        vp.top_buffer <= y <= vp.height - vp.bottom_buffer
    return top_or_bottom or left_or_right


@given(seed=st.integers(0, 10_000))
def test_spawn_is_on_a_usable_edge(seed):
    vp = Viewport(1200, 800)
    ac = create_aircraft(1, vp, random.Random(seed))
    assert _on_an_edge(ac.pos, vp)


def test_all_four_edges_get_used():
    vp = Viewport(1200, 800)
    rng = random.Random(3)
    seen = set()
    for _ in range(200):
        x, y = create_aircraft(1, vp, rng).pos
        if y == vp.top_buffer:
            seen.add("top")
        elif y == vp.height - vp.bottom_buffer:
            seen.add("bottom")
        elif x == vp.edge_margin:
            seen.add("left")
        elif x == vp.width - vp.edge_margin:
            seen.add("right")
    assert seen == {"top", "bottom", "left", "right"}


def test_new_aircraft_has_zeroed_kinematics():
    ac = create_aircraft(2, Viewport(), random.Random(1))
    assert ac.id == 2
    assert ac.heading == 0.0
    assert ac.original_heading == 0.0
    assert ac.speed_kts == 0.0
    assert ac.speed_px_s == 0.0
    assert ac.pending_turn_deg == 0
    assert ac.history == []


@given(seed=st.integers(0, 10_000))
def test_callsign_format(seed):
    assert CALLSIGN_RE.match(generate_callsign(random.Random(seed)))


@given(seed=st.integers(0, 10_000))
def test_flight_level_band(seed):
    fl = generate_flight_level(random.Random(seed))
    lo, hi = config.FLIGHT_LEVEL_RANGE
    assert lo <= fl <= hi
    assert fl % 10 == 0


def test_same_seed_same_aircraft():
    a = create_aircraft(1, Viewport(), random.Random(42))
    b = create_aircraft(1, Viewport(), random.Random(42))
    assert a == b
