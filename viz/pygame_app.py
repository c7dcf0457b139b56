from sim.exercise import Exercise
from .hud import draw_hud
from .radar_display import draw_radar


def render(screen, font, ex: Exercise):
    filed, flown = ex.closest_approaches()
    draw_radar(screen, font, ex.aircraft, filed, flown, ex.pixels_per_nm, selected=ex.selected)
    draw_hud(screen, font, ex)
