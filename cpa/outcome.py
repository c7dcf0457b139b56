from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import config
from .kinematics import as_flown, separation_nm
from .models import Aircraft, ClosestApproach, Verdict


def classify(distance_nm: float) -> Verdict:
    if distance_nm < config.MIN_SEP_NM:
        return Verdict.FAIL
    if distance_nm <= config.WASTE_NM:
        return Verdict.SUCCESS
    return Verdict.WASTE


def evaluate(ac1: Aircraft, ac2: Aircraft,
             pixels_per_nm: float) -> Tuple[Verdict, float, Optional[ClosestApproach]]:
    """
    Score the as-flown geometry.

    With no future CPA the aircraft are already as close as they will get,
    so the current separation is what gets scored.
    """
    cpa = as_flown(ac1, ac2, pixels_per_nm)
    if cpa is not None:
        dist_nm = cpa.distance
    else:
        dist_nm = separation_nm(ac1, ac2, pixels_per_nm)
    return classify(dist_nm), dist_nm, cpa


@dataclass
class ScoreStats:
    """Verdict tallies for one trainee (or a whole course)."""
    counts: Dict[Verdict, int] = field(default_factory=lambda: {v: 0 for v in Verdict})
    min_sep_nm: float = field(default=float("inf"))

    def record(self, verdict: Verdict, dist_nm: Optional[float] = None) -> None:
        self.counts[verdict] += 1
        if dist_nm is not None and dist_nm < self.min_sep_nm:
            self.min_sep_nm = dist_nm

    def merge(self, other: "ScoreStats") -> "ScoreStats":
        out = ScoreStats()
        for v in Verdict:
            out.counts[v] = self.counts[v] + other.counts[v]
        out.min_sep_nm = min(self.min_sep_nm, other.min_sep_nm)
        return out

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def percent(self, verdict: Verdict) -> float:
        if self.total == 0:
            return 0.0
        return self.counts[verdict] / self.total * 100.0
