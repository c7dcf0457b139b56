import pygame, sys, argparse, logging, random
from cpa.bus import VERDICT
from cpa.io import ResultWriter
from cpa.models import Settings, Viewport
from cpa.turn import clearance
from sim.exercise import Exercise, PRACTICE, TEST
from sim.scenarios import (
    ANGLE_PRESETS,
    SPEED_DIFF_PRESETS,
    TIME_TO_CROSSING_PRESETS,
    parse_range,
    settings_from_presets,
)
import config
from viz.pygame_app import render
from viz.hud import speak_async


def range_arg(text: str):
    try:
        return parse_range(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_settings(args) -> Settings:
    base = settings_from_presets(args.speed, args.angle, args.time)
    s_lo, s_hi = args.speed_range or (base.speed_diff_min, base.speed_diff_max)
    a_lo, a_hi = args.angle_range or (base.angle_min, base.angle_max)
    t_lo, t_hi = args.time_range or (base.time_to_crossing_min, base.time_to_crossing_max)
    return Settings(s_lo, s_hi, a_lo, a_hi, t_lo, t_hi).normalized()


def handle_event(ex: Exercise, e, speech: bool) -> bool:
    """Apply one pygame event to the exercise. Returns False to quit."""
    if e.type == pygame.QUIT:
        return False
    if e.type == pygame.KEYDOWN:
        if e.key == pygame.K_ESCAPE:
            return False

        elif e.key == pygame.K_n:
            if ex.can_start_new:
                ex.new_scenario()
            else:
                print("Submit the current scenario first (test mode).")

        elif e.key == pygame.K_TAB:
            ex.cycle_selection()

        elif e.key in (pygame.K_LEFT, pygame.K_RIGHT):
            direction = 1 if e.key == pygame.K_RIGHT else -1
            ex.nudge_turn(direction)

        elif e.key == pygame.K_0:
            ex.issue_turn(0)

        elif e.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
            if ex.scenario is not None and not ex.submitted:
                if speech:
                    for ac in ex.aircraft:
                        if ac.pending_turn_deg:
                            speak_async(clearance(ac))
                result = ex.submit()
                print(f"[{result.verdict.value.upper()}] "
                      f"separation {result.separation_nm:.2f} NM "
                      f"(angle {result.angle_deg:.0f} deg, dSpeed {result.speed_difference_kts:.0f} kt)")

        elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            ex.zoom_in()

        elif e.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            ex.zoom_out()

    elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
        # click selects the nearest aircraft within 20 px
        for ac in ex.aircraft:
            if abs(ac.pos[0] - e.pos[0]) <= 20 and abs(ac.pos[1] - e.pos[1]) <= 20:
                ex.select(ac.id)
                break
    return True


def main():
    parser = argparse.ArgumentParser(description="Two-aircraft conflict resolution trainer")
    parser.add_argument("--user", "-u", default="anonymous", help="trainee id stored with each result")
    parser.add_argument("--mode", choices=[PRACTICE, TEST], default=PRACTICE)
    parser.add_argument("--speed", choices=sorted(SPEED_DIFF_PRESETS), default="random",
                        help="speed-differential preset")
    parser.add_argument("--angle", choices=sorted(ANGLE_PRESETS), default="random",
                        help="crossing-angle preset")
    parser.add_argument("--time", choices=sorted(TIME_TO_CROSSING_PRESETS), default="random",
                        help="time-to-crossing preset")
    parser.add_argument("--speed-range", type=range_arg, help="custom speed differential, e.g. 20-70 (kt)")
    parser.add_argument("--angle-range", type=range_arg, help="custom crossing angle, e.g. 55-140 (deg)")
    parser.add_argument("--time-range", type=range_arg, help="custom time to crossing, e.g. 5-8 (min)")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible scenarios")
    parser.add_argument("--results", default=config.RESULTS_PATH, help="results CSV path")
    parser.add_argument("--no-speech", action="store_true", help="do not read clearances aloud")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    pygame.init()
    screen = pygame.display.set_mode((config.SCREEN_W, config.SCREEN_H))
    pygame.display.set_caption("Conflict Trainer")
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("consolas,menlo,monospace", 16)

    ex = Exercise(
        settings=build_settings(args),
        viewport=Viewport(config.SCREEN_W, config.SCREEN_H),
        rng=random.Random(args.seed),
        user_id=args.user,
        mode=args.mode,
    )
    writer = ResultWriter(args.results)
    ex.bus.on(VERDICT, writer.append)

    try:
        ex.new_scenario()
        running = True
        while running:
            clock.tick(config.FPS)
            for e in pygame.event.get():
                if not handle_event(ex, e, speech=not args.no_speech):
                    running = False
            render(screen, font, ex)
            pygame.display.flip()
    finally:
        ex.bus.off(VERDICT, writer.append)
        writer.close()
        pygame.quit()
    sys.exit(0)


if __name__ == "__main__":
    main()
