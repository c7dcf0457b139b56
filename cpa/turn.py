import math

from .models import Aircraft
import config


def apply_turn(ac: Aircraft, turn_deg: float) -> Aircraft:
    """
    Return a copy of `ac` flying `turn_deg` off its as-filed heading.

    Positive is a right turn in screen space. The as-filed heading is never
    touched, so repeated or replaced commands always start from it.
    """
    return ac.copy(
        pending_turn_deg=turn_deg,
        heading=ac.original_heading + math.radians(turn_deg),
    )


def clamp_turn(turn_deg: float) -> int:
    """Snap to the nearest command step within the allowed turn limits."""
    step = config.TURN_STEP_DEG
    snapped = int(round(turn_deg / step)) * step
    return max(-config.MAX_TURN_DEG, min(config.MAX_TURN_DEG, snapped))


def step_turn(ac: Aircraft, direction: int) -> Aircraft:
    # direction: +1 right, -1 left
    return apply_turn(ac, clamp_turn(ac.pending_turn_deg + direction * config.TURN_STEP_DEG))


def clearance(ac: Aircraft) -> str:
    if ac.pending_turn_deg == 0:
        return f"{ac.callsign}..."
    side = "right" if ac.pending_turn_deg > 0 else "left"
    return f"{ac.callsign} turn {side} {abs(ac.pending_turn_deg)} degrees"
