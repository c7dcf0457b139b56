import math
import pytest
from hypothesis import given, assume, strategies as st

from cpa.kinematics import (
    distance,
    closest_approach,
    as_filed,
    as_flown,
    minutes_to_cpa,
    separation_nm,
)
from cpa.models import Aircraft
from cpa.turn import apply_turn


def make_ac(ac_id, pos, heading, speed_px_s=10.0):
    ac = Aircraft(id=ac_id, pos=pos, callsign=f"TST{ac_id}", flight_level=350,
                  original_heading=heading, heading=heading)
    ac.speed_px_s = speed_px_s
    return ac


def test_distance_basic():
    assert distance((0, 0), (3, 4)) == 5


@given(x=st.floats(-1e5, 1e5), y=st.floats(-1e5, 1e5))
def test_distance_to_self_is_zero(x, y):
    assert distance((x, y), (x, y)) == 0


def test_head_on_meets_in_the_middle():
    a = make_ac(1, (0.0, 0.0), 0.0)
    b = make_ac(2, (1000.0, 0.0), math.pi)
    cpa = closest_approach(a, b, a.heading, b.heading, 10.0)

    assert cpa is not None
    assert cpa.time == pytest.approx(50.0)
    assert cpa.distance == pytest.approx(0.0, abs=1e-6)
    assert cpa.position1 == pytest.approx((500.0, 0.0), abs=1e-6)


def test_crossing_miss_distance_in_nm():
    # a flies east along y=0, b flies south (+y) along x=500 from y=-600
    a = make_ac(1, (0.0, 0.0), 0.0)
    b = make_ac(2, (500.0, -600.0), math.pi / 2)
    cpa = closest_approach(a, b, a.heading, b.heading, 10.0)

    assert cpa.time == pytest.approx(55.0)
    assert cpa.distance == pytest.approx(math.hypot(50.0, 50.0) / 10.0)
    assert cpa.position1 == pytest.approx((550.0, 0.0), abs=1e-6)
    assert cpa.position2 == pytest.approx((500.0, -50.0), abs=1e-6)


def test_cpa_in_the_past_is_none():
    a = make_ac(1, (0.0, 0.0), math.pi)
    b = make_ac(2, (1000.0, 0.0), 0.0)
    assert closest_approach(a, b, a.heading, b.heading, 10.0) is None


def test_parallel_tracks_are_none():
    a = make_ac(1, (0.0, 0.0), 0.3)
    b = make_ac(2, (0.0, 200.0), 0.3)
    assert closest_approach(a, b, a.heading, b.heading, 10.0) is None


def test_supplied_direction_is_used_not_current_heading():
    a = make_ac(1, (0.0, 0.0), 0.0)
    b = make_ac(2, (1000.0, 0.0), math.pi)
    turned = apply_turn(a, 30)

    filed = as_filed(turned, b, 10.0)
    flown = as_flown(turned, b, 10.0)
    assert filed.distance == pytest.approx(0.0, abs=1e-6)
    assert flown.distance > 5.0
    # same call with explicit directions gives the same answer
    explicit = closest_approach(turned, b, turned.original_heading, b.original_heading, 10.0)
    assert explicit == filed


def test_separation_nm_uses_scale():
    a = make_ac(1, (0.0, 0.0), 0.0)
    b = make_ac(2, (300.0, 400.0), 0.0)
    assert separation_nm(a, b, 10.0) == pytest.approx(50.0)


def test_minutes_to_cpa_label():
    a = make_ac(1, (0.0, 0.0), 0.0)
    a.speed_kts = 420.0
    # 70 NM at 420 kt = 10 minutes
    assert minutes_to_cpa(a, (700.0, 0.0), 10.0) == 10


coord = st.floats(-2000.0, 2000.0)
angle = st.floats(-math.pi, math.pi)
speed = st.floats(0.5, 5.0)


@given(x1=coord, y1=coord, x2=coord, y2=coord, d1=angle, d2=angle, s1=speed, s2=speed,
       scale=st.floats(1.0, 50.0))
def test_future_cpa_properties(x1, y1, x2, y2, d1, d2, s1, s2, scale):
    a = make_ac(1, (x1, y1), d1, s1)
    b = make_ac(2, (x2, y2), d2, s2)
    cpa = closest_approach(a, b, d1, d2, scale)
    assume(cpa is not None and cpa.time > 0)

    assert cpa.distance >= 0.0
    # never farther apart at CPA than right now
    assert cpa.distance <= separation_nm(a, b, scale) + 1e-6

    doubled = closest_approach(a, b, d1, d2, scale * 2)
    assert doubled.time == pytest.approx(cpa.time)
    assert doubled.distance == pytest.approx(cpa.distance / 2, rel=1e-9, abs=1e-9)
