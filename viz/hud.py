import pygame
import queue
import textwrap
import threading
from typing import Optional

from cpa.models import Verdict
from cpa.turn import clearance
from sim.exercise import Exercise
from .colors import WHITE, AMBER, RED, GREEN, GREY

VERDICT_COLORS = {
    Verdict.FAIL: RED,
    Verdict.SUCCESS: GREEN,
    Verdict.WASTE: AMBER,
}

tts_queue = queue.Queue()
_tts_thread: Optional[threading.Thread] = None


def tts_worker():
    import pyttsx3
    engine = pyttsx3.init()
    engine.setProperty("rate", 180)
    engine.setProperty("volume", 1.0)
    while True:
        text = tts_queue.get()
        if text is None:
            break
        engine.say(text)
        engine.runAndWait()
        tts_queue.task_done()


def speak_async(text: str):
    """Queue a phrase for the speech thread, starting it on first use."""
    global _tts_thread
    if _tts_thread is None:
        _tts_thread = threading.Thread(target=tts_worker, daemon=True)
        _tts_thread.start()
    tts_queue.put(text)


def draw_hud(screen, font, ex: Exercise):
    """Top bar with controls and scenario data, bottom bar with clearances."""
    screen_w, screen_h = screen.get_size()
    line_spacing = 20
    margin_x = 12

    # ---- top panel ----
    top = pygame.Surface((screen_w, 150), pygame.SRCALPHA)
    top.fill((0, 0, 0, 170))
    header_lines = [
        f"User: {ex.user_id}   Mode: {ex.mode.upper()}   Scale: {ex.pixels_per_nm:.1f} px/NM",
        "[N] New  [TAB] Select  [LEFT/RIGHT] Turn 5 deg  [0] Cancel turn",
        "[ENTER] Submit  [+/-] Zoom  [ESC] Quit",
    ]
    s = ex.settings
    header_lines.append(
        f"Requested: dSpeed {s.speed_diff_min:.0f}-{s.speed_diff_max:.0f} kt  "
        f"angle {s.angle_min:.0f}-{s.angle_max:.0f} deg  "
        f"crossing {s.time_to_crossing_min:.0f}-{s.time_to_crossing_max:.0f} min"
    )
    if ex.scenario is not None:
        m = ex.scenario.metadata
        ttc = "-" if m.time_to_crossing is None else f"{m.time_to_crossing:.1f}"
        header_lines.append(
            f"Actual: dSpeed {m.speed_difference:.0f} kt  angle {m.angle:.0f} deg  crossing {ttc} min"
        )
        if not ex.scenario.constraints_met:
            header_lines.append("(requested ranges could not be met)")

    y = 8
    for i, line in enumerate(header_lines):
        color = AMBER if line.startswith("(") else (WHITE if i < 3 else GREY)
        top.blit(font.render(line, True, color), (margin_x, y))
        y += line_spacing
    screen.blit(top, (0, 0))

    # ---- bottom panel ----
    bottom_h = 110
    bottom = pygame.Surface((screen_w, bottom_h), pygame.SRCALPHA)
    bottom.fill((0, 0, 0, 170))
    y = 8

    commands = [clearance(ac) for ac in ex.aircraft if ac.pending_turn_deg]
    if ex.selected is not None and ex.scenario is not None:
        sel = ex.scenario.by_id(ex.selected)
        if not sel.pending_turn_deg:
            commands.append(clearance(sel))
    if not commands:
        commands = ["Select an aircraft to issue turn command"]

    wrap_chars = max(20, (screen_w - 2 * margin_x) // 9)
    for cmd in commands:
        for wline in textwrap.wrap(cmd, width=wrap_chars):
            bottom.blit(font.render(wline, True, WHITE), (margin_x, y))
            y += line_spacing

    if ex.last_result is not None:
        r = ex.last_result
        text = f"{r.verdict.value.upper()}  separation {r.separation_nm:.1f} NM"
        bottom.blit(font.render(text, True, VERDICT_COLORS[r.verdict]), (margin_x, bottom_h - 28))

    st = ex.stats
    if st.total:
        tally = (f"{st.total} submitted  "
                 f"S {st.percent(Verdict.SUCCESS):.0f}%  "
                 f"F {st.percent(Verdict.FAIL):.0f}%  "
                 f"W {st.percent(Verdict.WASTE):.0f}%")
        surf = font.render(tally, True, GREY)
        bottom.blit(surf, (screen_w - surf.get_width() - margin_x, bottom_h - 28))

    screen.blit(bottom, (0, screen_h - bottom_h))
