"""
Scenario generation: rejection-sample an aircraft pair that matches the
operator's ranges, then slide both aircraft along their tracks so the
conflict happens at the requested time.
"""
from __future__ import annotations
from typing import Callable, Optional, Tuple
import logging
import math
import random

import config
from .factory import create_aircraft, generate_flight_level
from .kinematics import as_filed, separation_nm
from .math_utils import add, angle_between, bearing, polar
from .models import Aircraft, Scenario, ScenarioMetadata, Settings, Viewport

log = logging.getLogger(__name__)

SpawnFn = Callable[[int, Viewport, random.Random], Aircraft]


def _span(lo: float, hi: float) -> Tuple[float, float]:
    # Inverted ranges are read as swapped
    return (lo, hi) if lo <= hi else (hi, lo)


def sample_speeds(settings: Settings, rng: random.Random) -> Tuple[int, int]:
    """Aircraft-1 speed from the base band, aircraft-2 offset by the differential."""
    d_lo, d_hi = _span(settings.speed_diff_min, settings.speed_diff_max)
    if d_lo >= config.HIGH_DIFF_THRESHOLD_KTS:
        s_lo, s_hi = config.HIGH_DIFF_SPEED_KTS
    else:
        s_lo, s_hi = config.BASE_SPEED_KTS
    speed1 = rng.randint(s_lo, s_hi)

    if d_lo == 0 and d_hi == 0:
        return speed1, speed1

    sign = rng.choice((-1, 1))
    # whole knots; fractional bounds round inward
    k_lo, k_hi = math.ceil(d_lo), math.floor(d_hi)
    diff = rng.randint(k_lo, k_hi) if k_lo <= k_hi else round(d_lo)
    return speed1, speed1 + sign * diff


def aim_point(viewport: Viewport, rng: random.Random):
    """Play-area centre, jittered by a fraction of the viewport size."""
    cx, cy = viewport.center
    jx = (rng.random() - 0.5) * viewport.width * config.AIM_JITTER_FRACTION
    jy = (rng.random() - 0.5) * viewport.play_height * config.AIM_JITTER_FRACTION
    return (cx + jx, cy + jy)


def crossing_angle_deg(ac1: Aircraft, ac2: Aircraft) -> float:
    return math.degrees(angle_between(ac1.original_heading, ac2.original_heading))


def populate_history(ac: Aircraft) -> None:
    ac.history = [
        ac.position_at(-j * config.HISTORY_SPACING_S)
        for j in range(1, config.HISTORY_POINTS + 1)
    ]


def _sample_pair(settings: Settings, pixels_per_nm: float, viewport: Viewport,
                 rng: random.Random, spawn: SpawnFn) -> Tuple[Aircraft, Aircraft]:
    ac1 = spawn(1, viewport, rng)
    ac2 = spawn(2, viewport, rng)

    speed1, speed2 = sample_speeds(settings, rng)
    ac1.set_speed(speed1, pixels_per_nm)
    ac2.set_speed(speed2, pixels_per_nm)

    target = aim_point(viewport, rng)
    for ac in (ac1, ac2):
        ac.original_heading = bearing(ac.pos, target)
        ac.heading = ac.original_heading
    return ac1, ac2


def _acceptable(ac1: Aircraft, ac2: Aircraft, settings: Settings, pixels_per_nm: float) -> bool:
    a_lo, a_hi = _span(settings.angle_min, settings.angle_max)
    angle_ok = a_lo <= crossing_angle_deg(ac1, ac2) <= a_hi

    start_nm = separation_nm(ac1, ac2, pixels_per_nm)
    cpa = as_filed(ac1, ac2, pixels_per_nm)
    # No future CPA: the pair is as close as it will get right now
    cpa_nm = cpa.distance if cpa is not None else start_nm

    return (
        angle_ok
        and cpa_nm < config.GEN_CONFLICT_NM
        and start_nm > config.GEN_MIN_START_NM
    )


def adjust_time_to_crossing(ac1: Aircraft, ac2: Aircraft, settings: Settings,
                            pixels_per_nm: float, rng: random.Random) -> None:
    """
    Slide both aircraft along their as-filed tracks so the CPA happens at a
    time drawn from the configured window. Heading, speed and the crossing
    angle are unchanged. No-op when there is no future CPA.
    """
    cpa = as_filed(ac1, ac2, pixels_per_nm)
    if cpa is None or cpa.time <= 0:
        return

    t_lo, t_hi = _span(settings.time_to_crossing_min, settings.time_to_crossing_max)
    target_s = rng.uniform(t_lo * 60.0, t_hi * 60.0)
    dt = cpa.time - target_s

    for ac in (ac1, ac2):
        ac.pos = add(ac.pos, polar(ac.original_heading, ac.speed_px_s * dt))


def generate_pair(settings: Settings,
                  pixels_per_nm: float,
                  viewport: Optional[Viewport] = None,
                  rng: Optional[random.Random] = None,
                  spawn: SpawnFn = create_aircraft,
                  max_attempts: Optional[int] = None) -> Scenario:
    """
    Build a conflict pair for `settings`.

    Samples until the crossing angle is in range, the predicted CPA is a loss
    of separation and the aircraft start far enough apart. When
    `max_attempts` runs out the last sample is kept and the returned
    scenario has ``constraints_met=False``.
    """
    viewport = viewport or Viewport()
    rng = rng or random.Random()
    cap = max(1, config.MAX_ATTEMPTS if max_attempts is None else max_attempts)

    met = False
    attempts = 0
    while attempts < cap:
        attempts += 1
        ac1, ac2 = _sample_pair(settings, pixels_per_nm, viewport, rng, spawn)
        if _acceptable(ac1, ac2, settings, pixels_per_nm):
            met = True
            break

    if met:
        log.debug("accepted pair after %d attempt(s)", attempts)
    else:
        log.warning("no pair satisfied %s in %d attempts; keeping last sample", settings, attempts)

    adjust_time_to_crossing(ac1, ac2, settings, pixels_per_nm, rng)

    level = generate_flight_level(rng)
    color = rng.choice(config.SEP_COLORS)
    for ac in (ac1, ac2):
        ac.flight_level = level
        ac.sep_color = color
        populate_history(ac)

    cpa = as_filed(ac1, ac2, pixels_per_nm)
    metadata = ScenarioMetadata(
        speed_difference=abs(ac2.speed_kts - ac1.speed_kts),
        angle=crossing_angle_deg(ac1, ac2),
        time_to_crossing=cpa.time / 60.0 if cpa is not None else None,
    )
    return Scenario(aircraft=(ac1, ac2), metadata=metadata,
                    constraints_met=met, attempts=attempts)
