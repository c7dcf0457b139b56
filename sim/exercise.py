from __future__ import annotations
from datetime import datetime
from typing import Optional
import logging
import random

from cpa.bus import EventBus, SCENARIO, VERDICT
from cpa.generator import generate_pair
from cpa.io import Result
from cpa.kinematics import cpa_pair
from cpa.math_utils import add, mul, sub
from cpa.models import Aircraft, Scenario, Settings, Verdict, Viewport
from cpa.outcome import ScoreStats, evaluate
from cpa.turn import apply_turn, clamp_turn, step_turn
import config

log = logging.getLogger(__name__)

PRACTICE = "practice"
TEST = "test"


def pick_scale(viewport: Viewport, rng: random.Random) -> float:
    """
    Pixels per NM such that half the viewport width covers a random
    4-9 minutes of flight at the reference speed.
    """
    minutes = rng.uniform(config.SCALE_MIN_MIN, config.SCALE_MAX_MIN)
    target_nm = config.REFERENCE_SPEED_KTS * (minutes / 60.0)
    return (viewport.width / 2) / target_nm


class Exercise:
    """
    One trainee's exercise session: the current pair, selection, turn
    commands, zoom and submission.

    Verdicts are emitted on the bus and forgotten; whatever persists them
    subscribes to VERDICT.
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 viewport: Optional[Viewport] = None,
                 rng: Optional[random.Random] = None,
                 bus: Optional[EventBus] = None,
                 user_id: str = "anonymous",
                 mode: str = PRACTICE) -> None:
        if mode not in (PRACTICE, TEST):
            raise ValueError(f"unknown mode: {mode!r}")

        self.settings: Settings = (settings or Settings()).normalized()
        self.viewport: Viewport = viewport or Viewport()
        self.rng = rng or random.Random()
        self.bus = bus or EventBus()
        self.user_id = user_id
        self.mode = mode

        self.pixels_per_nm: float = config.DEFAULT_PIXELS_PER_NM
        self.scenario: Optional[Scenario] = None
        self.selected: Optional[int] = None
        self.submitted: bool = False
        self.last_result: Optional[Result] = None
        self.stats = ScoreStats()

    # ------------------------------------------------------------------
    # Scenario lifecycle
    # ------------------------------------------------------------------
    @property
    def aircraft(self):
        return self.scenario.aircraft if self.scenario else ()

    @property
    def can_start_new(self) -> bool:
        # Test mode locks "New" until the current pair is submitted
        return self.mode == PRACTICE or self.scenario is None or self.submitted

    def new_scenario(self, force: bool = False) -> Scenario:
        if not force and not self.can_start_new:
            raise RuntimeError("submit the current scenario before starting a new one")

        self.pixels_per_nm = pick_scale(self.viewport, self.rng)
        self.scenario = generate_pair(self.settings, self.pixels_per_nm,
                                      viewport=self.viewport, rng=self.rng)
        self.selected = None
        self.submitted = False
        self.last_result = None

        if not self.scenario.constraints_met:
            log.warning("scenario outside requested ranges: %s", self.scenario.metadata)
        self.bus.emit(SCENARIO, self.scenario)
        return self.scenario

    def update_settings(self, settings: Settings) -> Scenario:
        """New settings always regenerate the pair."""
        self.settings = settings.normalized()
        return self.new_scenario(force=True)

    # ------------------------------------------------------------------
    # Selection & turn commands
    # ------------------------------------------------------------------
    def select(self, aircraft_id: Optional[int]) -> None:
        if aircraft_id is not None and self.scenario is not None:
            self.scenario.by_id(aircraft_id)
        self.selected = aircraft_id

    def cycle_selection(self) -> Optional[int]:
        ids = [ac.id for ac in self.aircraft]
        if not ids:
            self.selected = None
        elif self.selected not in ids:
            self.selected = ids[0]
        else:
            self.selected = ids[(ids.index(self.selected) + 1) % len(ids)]
        return self.selected

    def _replace(self, new_ac: Aircraft) -> None:
        pair = tuple(new_ac if ac.id == new_ac.id else ac for ac in self.scenario.aircraft)
        self.scenario.aircraft = pair

    def issue_turn(self, turn_deg: float, aircraft_id: Optional[int] = None) -> Optional[Aircraft]:
        """Set the pending turn of the given (or selected) aircraft."""
        target = aircraft_id if aircraft_id is not None else self.selected
        if self.scenario is None or target is None or self.submitted:
            return None
        turned = apply_turn(self.scenario.by_id(target), clamp_turn(turn_deg))
        self._replace(turned)
        return turned

    def nudge_turn(self, direction: int) -> Optional[Aircraft]:
        if self.scenario is None or self.selected is None or self.submitted:
            return None
        turned = step_turn(self.scenario.by_id(self.selected), direction)
        self._replace(turned)
        return turned

    # ------------------------------------------------------------------
    # Geometry shown on screen
    # ------------------------------------------------------------------
    def closest_approaches(self):
        """(as-filed, as-flown) CPAs for the current pair."""
        if self.scenario is None:
            return None, None
        ac1, ac2 = self.scenario.aircraft
        return cpa_pair(ac1, ac2, self.pixels_per_nm)

    def zoom(self, factor: float) -> None:
        """
        Rescale about the viewport centre. Positions, history and pixel
        speeds scale together so NM geometry is unchanged.
        """
        if factor <= 0:
            raise ValueError("zoom factor must be positive")
        new_scale = self.pixels_per_nm * factor
        if self.scenario is not None:
            pivot = (self.viewport.width / 2, self.viewport.height / 2)

            def scaled(p):
                return add(pivot, mul(sub(p, pivot), factor))

            pair = []
            for ac in self.scenario.aircraft:
                moved = ac.copy(pos=scaled(ac.pos), history=[scaled(p) for p in ac.history])
                moved.set_speed(ac.speed_kts, new_scale)
                pair.append(moved)
            self.scenario.aircraft = tuple(pair)
        self.pixels_per_nm = new_scale

    def zoom_in(self) -> None:
        self.zoom(config.ZOOM_STEP)

    def zoom_out(self) -> None:
        self.zoom(1.0 / config.ZOOM_STEP)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def submit(self) -> Result:
        if self.scenario is None:
            raise RuntimeError("no scenario to submit")
        if self.submitted and self.last_result is not None:
            return self.last_result

        ac1, ac2 = self.scenario.aircraft
        verdict, dist_nm, _ = evaluate(ac1, ac2, self.pixels_per_nm)
        meta = self.scenario.metadata

        result = Result(
            timestamp=datetime.now(),
            user_id=self.user_id,
            mode=self.mode,
            verdict=verdict,
            separation_nm=dist_nm,
            speed_difference_kts=meta.speed_difference,
            angle_deg=meta.angle,
            time_to_crossing_min=meta.time_to_crossing,
            callsign1=ac1.callsign,
            callsign2=ac2.callsign,
            turn1_deg=int(ac1.pending_turn_deg),
            turn2_deg=int(ac2.pending_turn_deg),
            constraints_met=self.scenario.constraints_met,
        )
        self.submitted = True
        self.last_result = result
        self.stats.record(verdict, dist_nm)
        log.info("%s submitted: %s at %.2f NM", self.user_id, verdict.value, dist_nm)

        # Fire and forget: a failing store must not cost the trainee the verdict
        try:
            self.bus.emit(VERDICT, result)
        except Exception:
            log.exception("storing result failed")
        return result

    @property
    def verdict(self) -> Optional[Verdict]:
        return self.last_result.verdict if self.last_result else None
