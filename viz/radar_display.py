import pygame, math
from typing import Optional
import config
from cpa.kinematics import minutes_to_cpa
from cpa.models import Aircraft, ClosestApproach, compass_heading
from .colors import WHITE, GREY, CYAN, TRACK


def format_separation(distance_nm: float) -> str:
    """Whole miles from the rounding threshold up, one decimal below it."""
    if distance_nm >= config.SEP_LABEL_ROUND_NM:
        return f"{round(distance_nm)}"
    return f"{distance_nm:.1f}"


def _pt(p):
    return (int(p[0]), int(p[1]))


def draw_history(screen, ac: Aircraft):
    for i, p in enumerate(ac.history):
        r = max(1, 3 - i // 2)
        pygame.draw.circle(screen, GREY, _pt(p), r)


def draw_aircraft(screen, font, ac: Aircraft, selected: bool):
    x, y = _pt(ac.pos)

    # one-minute speed vector along the as-flown heading
    lead = ac.speed_px_s * 60.0
    tip = (x + lead * math.cos(ac.heading), y + lead * math.sin(ac.heading))
    pygame.draw.line(screen, TRACK, (x, y), _pt(tip), 1)

    size = 6
    pygame.draw.rect(screen, CYAN if selected else WHITE,
                     pygame.Rect(x - size, y - size, size * 2, size * 2), 0 if selected else 2)

    # data block: callsign / level / speed / heading
    lines = [
        ac.callsign,
        f"{ac.flight_level:03d}  {ac.speed_kts:.0f}",
        f"{compass_heading(ac.heading):03.0f}",
    ]
    if ac.pending_turn_deg:
        lines[-1] += f" ({ac.pending_turn_deg:+d})"
    for i, text in enumerate(lines):
        surf = font.render(text, True, CYAN if selected else WHITE)
        screen.blit(surf, (x + 10, y - 10 + i * 16))


def draw_separation_tool(screen, font, ac1: Aircraft, ac2: Aircraft,
                         cpa: Optional[ClosestApproach], pixels_per_nm: float,
                         color=None, width: int = 2):
    """Lines from each aircraft to its CPA position, labelled with minutes / NM."""
    if cpa is None:
        return
    color = color or ac1.sep_color
    pygame.draw.line(screen, color, _pt(ac1.pos), _pt(cpa.position1), width)
    pygame.draw.line(screen, color, _pt(ac2.pos), _pt(cpa.position2), width)
    pygame.draw.line(screen, color, _pt(cpa.position1), _pt(cpa.position2), 1)

    mid = ((cpa.position1[0] + cpa.position2[0]) / 2, (cpa.position1[1] + cpa.position2[1]) / 2)
    minutes = minutes_to_cpa(ac1, cpa.position1, pixels_per_nm)
    label = font.render(f"{minutes}' {format_separation(cpa.distance)}", True, color)
    screen.blit(label, (int(mid[0]) + 8, int(mid[1]) - 8))


def draw_radar(screen, font, aircraft, filed: Optional[ClosestApproach],
               flown: Optional[ClosestApproach], pixels_per_nm: float,
               selected: Optional[int] = None):
    screen.fill(config.BG_COLOR)
    w, h = screen.get_size()

    # play-area guides
    pygame.draw.line(screen, (40, 40, 50), (0, config.TOP_BUFFER), (w, config.TOP_BUFFER), 1)
    pygame.draw.line(screen, (40, 40, 50), (0, h - config.BOTTOM_BUFFER),
                     (w, h - config.BOTTOM_BUFFER), 1)

    # 10 NM scale bar
    bar = int(10 * pixels_per_nm)
    pygame.draw.line(screen, GREY, (20, h - 30), (20 + bar, h - 30), 2)
    screen.blit(font.render("10 NM", True, GREY), (20, h - 50))

    if len(aircraft) != 2:
        return
    ac1, ac2 = aircraft

    for ac in aircraft:
        draw_history(screen, ac)

    # as-filed conflict dimmed, as-flown in the pair colour
    if flown is not None and filed is not None and (ac1.pending_turn_deg or ac2.pending_turn_deg):
        draw_separation_tool(screen, font, ac1, ac2, filed, pixels_per_nm, color=GREY, width=1)
    draw_separation_tool(screen, font, ac1, ac2, flown, pixels_per_nm)

    for ac in aircraft:
        draw_aircraft(screen, font, ac, ac.id == selected)
