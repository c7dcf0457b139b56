from dataclasses import dataclass, field, replace
from typing import Optional, List, Tuple
from enum import Enum
import math

import config
from .math_utils import Vec2, add, mul, polar


class Verdict(Enum):
    FAIL = "fail"          # loss of separation
    SUCCESS = "success"    # adequate, non-wasteful separation
    WASTE = "waste"        # excessive separation


def _clamp(value: float, bounds: Tuple[float, float]) -> float:
    lo, hi = bounds
    return max(lo, min(hi, value))


def _ordered(lo: float, hi: float, bounds: Tuple[float, float]) -> Tuple[float, float]:
    lo, hi = _clamp(lo, bounds), _clamp(hi, bounds)
    return (min(lo, hi), max(lo, hi))


@dataclass(frozen=True)
class Settings:
    """Operator ranges for a scenario. Defaults are the "random" presets."""
    speed_diff_min: float = 0
    speed_diff_max: float = 150
    angle_min: float = 20
    angle_max: float = 180
    time_to_crossing_min: float = 3
    time_to_crossing_max: float = 10

    def normalized(self) -> "Settings":
        """Clamp each value into its bounds and swap inverted ranges."""
        s_lo, s_hi = _ordered(self.speed_diff_min, self.speed_diff_max, config.SPEED_DIFF_BOUNDS_KTS)
        a_lo, a_hi = _ordered(self.angle_min, self.angle_max, config.ANGLE_BOUNDS_DEG)
        t_lo, t_hi = _ordered(self.time_to_crossing_min, self.time_to_crossing_max,
                              config.TIME_TO_CROSSING_BOUNDS_MIN)
        return Settings(s_lo, s_hi, a_lo, a_hi, t_lo, t_hi)


@dataclass(frozen=True)
class Viewport:
    width: float = config.SCREEN_W
    height: float = config.SCREEN_H
    top_buffer: float = config.TOP_BUFFER
    bottom_buffer: float = config.BOTTOM_BUFFER
    edge_margin: float = config.EDGE_MARGIN

    @property
    def play_height(self) -> float:
        return self.height - self.top_buffer - self.bottom_buffer

    @property
    def center(self) -> Vec2:
        """Visual centre of the play area (between the buffers)."""
        return (self.width / 2, self.top_buffer + self.play_height / 2)


@dataclass
class Aircraft:
    # -------------------------------
    # Identity
    # -------------------------------
    id: int
    pos: Vec2                           # (x,y) px, origin top-left
    callsign: str
    flight_level: int

    # -------------------------------
    # Kinematics
    # -------------------------------
    original_heading: float = 0.0       # rad, as-filed
    heading: float = 0.0                # rad, as-flown
    speed_kts: float = 0.0
    speed_px_s: float = 0.0

    # -------------------------------
    # Exercise / display
    # -------------------------------
    pending_turn_deg: int = 0
    history: List[Vec2] = field(default_factory=list)
    sep_color: Tuple[int, int, int] = config.PLACEHOLDER_COLOR

    def set_speed(self, speed_kts: float, pixels_per_nm: float) -> None:
        """Set knots and keep the pixel speed consistent with the scale."""
        self.speed_kts = speed_kts
        self.speed_px_s = speed_kts / 3600.0 * pixels_per_nm

    def velocity(self, heading: Optional[float] = None) -> Vec2:
        return polar(self.heading if heading is None else heading, self.speed_px_s)

    def position_at(self, t: float, heading: Optional[float] = None) -> Vec2:
        """Straight-line extrapolation `t` seconds ahead (negative = behind)."""
        return add(self.pos, mul(self.velocity(heading), t))

    def copy(self, **changes) -> "Aircraft":
        changes.setdefault("history", list(self.history))
        return replace(self, **changes)


@dataclass(frozen=True)
class ClosestApproach:
    time: float                 # s from now
    distance: float             # NM
    position1: Vec2
    position2: Vec2


@dataclass(frozen=True)
class ScenarioMetadata:
    """What the trainee was actually shown, not what was requested."""
    speed_difference: float             # kt
    angle: float                        # deg
    time_to_crossing: Optional[float]   # min, None when no future CPA


@dataclass
class Scenario:
    aircraft: Tuple[Aircraft, Aircraft]
    metadata: ScenarioMetadata
    constraints_met: bool = True
    attempts: int = 0

    def by_id(self, aircraft_id: int) -> Aircraft:
        for ac in self.aircraft:
            if ac.id == aircraft_id:
                return ac
        raise KeyError(aircraft_id)


def compass_heading(heading_rad: float) -> float:
    """Screen-frame heading (0 = +x, +y down) as a compass bearing in [0, 360)."""
    return (math.degrees(heading_rad) + 90.0) % 360.0
