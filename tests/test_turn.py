import math
import pytest
from hypothesis import given, strategies as st

import config
from cpa.models import Aircraft
from cpa.turn import apply_turn, clamp_turn, step_turn, clearance


def make_ac(heading=0.4):
    return Aircraft(id=1, pos=(100.0, 100.0), callsign="CTN123", flight_level=350,
                    original_heading=heading, heading=heading, speed_kts=420.0, speed_px_s=1.0)


def test_apply_turn_sets_heading_from_original():
    ac = make_ac()
    turned = apply_turn(ac, 15)
    assert turned.pending_turn_deg == 15
    assert turned.heading == pytest.approx(0.4 + math.radians(15))
    assert turned.original_heading == 0.4


def test_apply_turn_does_not_mutate_input():
    ac = make_ac()
    apply_turn(ac, -20)
    assert ac.pending_turn_deg == 0
    assert ac.heading == 0.4


def test_turn_zero_restores_filed_heading():
    ac = apply_turn(apply_turn(make_ac(), 25), 0)
    assert ac.pending_turn_deg == 0
    assert ac.heading == ac.original_heading


@given(turn=st.integers(-30, 30))
def test_apply_turn_idempotent(turn):
    once = apply_turn(make_ac(), turn)
    twice = apply_turn(once, turn)
    assert twice == once


@given(turns=st.lists(st.integers(-180, 180), max_size=10))
def test_original_heading_invariant(turns):
    ac = make_ac()
    for t in turns:
        ac = apply_turn(ac, t)
        assert ac.original_heading == 0.4


@pytest.mark.parametrize("raw, expected", [
    (0, 0),
    (7, 5),
    (13, 15),
    (-12.4, -10),
    (33, 30),
    (-90, -30),
])
def test_clamp_turn(raw, expected):
    assert clamp_turn(raw) == expected


def test_step_turn_stops_at_limit():
    ac = make_ac()
    for _ in range(10):
        ac = step_turn(ac, +1)
    assert ac.pending_turn_deg == config.MAX_TURN_DEG
    ac = step_turn(ac, -1)
    assert ac.pending_turn_deg == config.MAX_TURN_DEG - config.TURN_STEP_DEG


def test_clearance_phrases():
    ac = make_ac()
    assert clearance(ac) == "CTN123..."
    assert clearance(apply_turn(ac, 15)) == "CTN123 turn right 15 degrees"
    assert clearance(apply_turn(ac, -30)) == "CTN123 turn left 30 degrees"
