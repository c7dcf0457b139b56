# Global knobs (exercise geometry + scoring thresholds)
SCREEN_W, SCREEN_H = 1200, 800

# Play area inside the viewport (px). Spawns sit on these lines.
TOP_BUFFER = 160
BOTTOM_BUFFER = 160
EDGE_MARGIN = 60            # left / right spawn inset
EDGE_INSET_X = 50           # top / bottom spawn inset along x

FPS = 30
BG_COLOR = (12, 12, 18)

# ---------------------------------------------------------------------
# Scale: half the viewport width shows SCALE_MIN_MIN..SCALE_MAX_MIN minutes
# of flight at REFERENCE_SPEED_KTS. Zoom multiplies / divides by ZOOM_STEP.
# ---------------------------------------------------------------------
REFERENCE_SPEED_KTS = 420.0
SCALE_MIN_MIN = 4.0
SCALE_MAX_MIN = 9.0
DEFAULT_PIXELS_PER_NM = 7.0
ZOOM_STEP = 1.2

# ---------------------------------------------------------------------
# Settings bounds: (lower, upper) for each operator range
# ---------------------------------------------------------------------
SPEED_DIFF_BOUNDS_KTS = (0, 150)
ANGLE_BOUNDS_DEG = (20, 180)
TIME_TO_CROSSING_BOUNDS_MIN = (3, 10)

# ---------------------------------------------------------------------
# Scenario generation
# ---------------------------------------------------------------------
MAX_ATTEMPTS = 1000

BASE_SPEED_KTS = (380, 480)
# Wider aircraft-1 band once the requested differential reaches "high"
HIGH_DIFF_SPEED_KTS = (360, 500)
HIGH_DIFF_THRESHOLD_KTS = 60

AIM_JITTER_FRACTION = 0.3   # total spread, centred on the play area

GEN_MIN_START_NM = 20.0     # tracks must start farther apart than this
GEN_CONFLICT_NM = 5.0       # predicted CPA must be inside this

HISTORY_POINTS = 5
HISTORY_SPACING_S = 4.0

# Relative speed² (px²/s²) below which tracks count as parallel
PARALLEL_EPS = 1e-3

# ---------------------------------------------------------------------
# Turn commands (deg)
# ---------------------------------------------------------------------
MAX_TURN_DEG = 30
TURN_STEP_DEG = 5

# ---------------------------------------------------------------------
# Outcome thresholds (NM). Fixed, not operator-configurable.
#   d <  MIN_SEP_NM             -> fail
#   MIN_SEP_NM <= d <= WASTE_NM -> success
#   d >  WASTE_NM               -> waste
# ---------------------------------------------------------------------
MIN_SEP_NM = 5.0
WASTE_NM = 10.9

# Separation tool rounds to whole miles from this distance up
SEP_LABEL_ROUND_NM = 11.0

# ---------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------
CALLSIGN_PREFIXES = ["CTN", "RYR", "DLH", "THY", "AFR", "BAW", "KLM", "SAS", "AUA", "SWR"]
CALLSIGN_LETTER_CHANCE = 0.3
FLIGHT_LEVEL_RANGE = (320, 400)   # inclusive, multiples of 10

# Separation-tool palette (one colour per pair)
SEP_COLORS = [
    (153, 217, 234),   # #99D9EA
    (255, 153, 184),   # #FF99B8
    (255, 209, 143),   # #FFD18F
    (197, 64, 212),    # #C540D4
    (140, 140, 255),   # #8C8CFF
    (0, 220, 255),     # #00DCFF
]
PLACEHOLDER_COLOR = (255, 255, 255)

# ---------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------
RESULTS_PATH = "logs/results.csv"
