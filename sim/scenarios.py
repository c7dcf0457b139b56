import re
from typing import Dict, Tuple
from cpa.models import Settings

Range = Tuple[float, float]

SPEED_DIFF_PRESETS: Dict[str, Range] = {
    "random": (0, 150),
    "low":    (0, 30),
    "medium": (20, 70),
    "high":   (60, 150),
}

ANGLE_PRESETS: Dict[str, Range] = {
    "random":   (20, 180),
    "sharp":    (20, 55),
    "crossing": (55, 140),
    "opposite": (140, 180),
}

TIME_TO_CROSSING_PRESETS: Dict[str, Range] = {
    "random": (3, 10),
    "<5":     (3, 5),
    "5-8":    (5, 8),
    ">8":     (8, 10),
}


def settings_from_presets(speed: str = "random",
                          angle: str = "random",
                          time_to_crossing: str = "random") -> Settings:
    """Unknown preset names fall back to "random"."""
    s = SPEED_DIFF_PRESETS.get(speed, SPEED_DIFF_PRESETS["random"])
    a = ANGLE_PRESETS.get(angle, ANGLE_PRESETS["random"])
    t = TIME_TO_CROSSING_PRESETS.get(time_to_crossing, TIME_TO_CROSSING_PRESETS["random"])
    return Settings(s[0], s[1], a[0], a[1], t[0], t[1])


_NUM = r"\s*(-?\d+(?:\.\d*)?|-?\.\d+)\s*"
_RANGE_RE = re.compile(rf"^{_NUM}(?:[,:-]{_NUM})?$")


def parse_range(text: str) -> Range:
    """'20-70', '20,70' or '-10:20' -> (lo, hi); a single value -> (v, v)."""
    m = _RANGE_RE.match(text)
    if m is None:
        raise ValueError(f"not a range: {text!r}")
    lo = float(m.group(1))
    hi = lo if m.group(2) is None else float(m.group(2))
    return (lo, hi)
