from typing import Optional, Tuple
from .math_utils import Vec2, dot, norm, sub
from .models import Aircraft, ClosestApproach
import config


def distance(p1: Vec2, p2: Vec2) -> float:
    return norm(sub(p1, p2))


def closing_tau(rel_pos: Vec2, rel_vel: Vec2) -> Optional[float]:
    """Time (s) at which |rel_pos + rel_vel * t| is smallest, or None if parallel."""
    v2 = dot(rel_vel, rel_vel)
    if v2 < config.PARALLEL_EPS:
        return None
    return -dot(rel_pos, rel_vel) / v2


def closest_approach(ac1: Aircraft,
                     ac2: Aircraft,
                     dir1: float,
                     dir2: float,
                     pixels_per_nm: float) -> Optional[ClosestApproach]:
    """
    Closest point of approach of two straight, constant-speed tracks.

    Each aircraft flies from its current position at its current pixel speed
    along the direction passed in (dir1 / dir2), so callers pick between the
    as-filed and the as-flown geometry. Returns None when the tracks are
    parallel (no finite CPA) or the CPA already lies in the past.
    """
    v1 = ac1.velocity(dir1)
    v2 = ac2.velocity(dir2)

    tau = closing_tau(sub(ac1.pos, ac2.pos), sub(v1, v2))
    if tau is None or tau < 0.0:
        return None

    p1 = ac1.position_at(tau, dir1)
    p2 = ac2.position_at(tau, dir2)
    return ClosestApproach(
        time=tau,
        distance=distance(p1, p2) / pixels_per_nm,
        position1=p1,
        position2=p2,
    )


def as_filed(ac1: Aircraft, ac2: Aircraft, pixels_per_nm: float) -> Optional[ClosestApproach]:
    return closest_approach(ac1, ac2, ac1.original_heading, ac2.original_heading, pixels_per_nm)


def as_flown(ac1: Aircraft, ac2: Aircraft, pixels_per_nm: float) -> Optional[ClosestApproach]:
    return closest_approach(ac1, ac2, ac1.heading, ac2.heading, pixels_per_nm)


def separation_nm(ac1: Aircraft, ac2: Aircraft, pixels_per_nm: float) -> float:
    return distance(ac1.pos, ac2.pos) / pixels_per_nm


def minutes_to_cpa(ac: Aircraft, cpa_pos: Vec2, pixels_per_nm: float) -> int:
    # Label time on the separation tool, whole minutes
    if ac.speed_kts <= 0:
        return 0
    dist_nm = distance(ac.pos, cpa_pos) / pixels_per_nm
    return round(dist_nm / ac.speed_kts * 60.0)


def cpa_pair(ac1: Aircraft, ac2: Aircraft,
             pixels_per_nm: float) -> Tuple[Optional[ClosestApproach], Optional[ClosestApproach]]:
    """(as-filed, as-flown) CPAs, evaluated independently."""
    return as_filed(ac1, ac2, pixels_per_nm), as_flown(ac1, ac2, pixels_per_nm)
