import math
from typing import Tuple

Vec2 = Tuple[float, float]

def dot(a: Vec2, b: Vec2) -> float:
    return a[0]*b[0] + a[1]*b[1]

def norm(a: Vec2) -> float:
    return math.hypot(a[0], a[1])

def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0]+b[0], a[1]+b[1])

def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0]-b[0], a[1]-b[1])

def mul(a: Vec2, k: float) -> Vec2:
    return (a[0]*k, a[1]*k)

def polar(angle_rad: float, length: float = 1.0) -> Vec2:
    """Vector of `length` pointing along `angle_rad` (screen frame, +y down)."""
    return (math.cos(angle_rad) * length, math.sin(angle_rad) * length)

def bearing(frm: Vec2, to: Vec2) -> float:
    """Angle (rad) of the vector from `frm` to `to`."""
    return math.atan2(to[1] - frm[1], to[0] - frm[0])

def angle_between(a_rad: float, b_rad: float) -> float:
    """Absolute difference of two headings folded into [0, pi]."""
    diff = abs(a_rad - b_rad) % (2 * math.pi)
    if diff > math.pi:
        diff = 2 * math.pi - diff
    return diff
