import random
from typing import Optional

from .models import Aircraft, Viewport
from .math_utils import Vec2
import config

# Edges, in the order they are numbered when drawn
TOP, RIGHT, BOTTOM, LEFT = range(4)


def generate_callsign(rng: random.Random) -> str:
    """ICAO-style prefix, 1-3 digit number, sometimes a trailing letter."""
    prefix = rng.choice(config.CALLSIGN_PREFIXES)
    number = rng.randint(1, 999)
    letter = ""
    if rng.random() < config.CALLSIGN_LETTER_CHANCE:
        letter = chr(ord("A") + rng.randrange(26))
    return f"{prefix}{number}{letter}"


def generate_flight_level(rng: random.Random) -> int:
    lo, hi = config.FLIGHT_LEVEL_RANGE
    return rng.randint(lo // 10, hi // 10) * 10


def spawn_position(edge: int, viewport: Viewport, rng: random.Random) -> Vec2:
    inset = config.EDGE_INSET_X
    if edge == TOP:
        return (rng.uniform(inset, viewport.width - inset), viewport.top_buffer)
    if edge == RIGHT:
        return (viewport.width - viewport.edge_margin,
                rng.uniform(viewport.top_buffer, viewport.height - viewport.bottom_buffer))
    if edge == BOTTOM:
        return (rng.uniform(inset, viewport.width - inset),
                viewport.height - viewport.bottom_buffer)
    return (viewport.edge_margin,
            rng.uniform(viewport.top_buffer, viewport.height - viewport.bottom_buffer))


def create_aircraft(aircraft_id: int,
                    viewport: Optional[Viewport] = None,
                    rng: Optional[random.Random] = None) -> Aircraft:
    """
    New aircraft on a random viewport edge with a random identity.

    Heading and speed are left at zero; the generator sets them.
    """
    viewport = viewport or Viewport()
    rng = rng or random.Random()

    edge = rng.randrange(4)
    return Aircraft(
        id=aircraft_id,
        pos=spawn_position(edge, viewport, rng),
        callsign=generate_callsign(rng),
        flight_level=generate_flight_level(rng),
    )
