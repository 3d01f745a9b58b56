from pathlib import Path

GRID_ROWS = 8
GRID_COLS = 8

# Gem palette, one color per kind. Puzzle levels unlock kinds progressively.
GEM_COLORS = [
    (255, 0, 0),      # red
    (0, 255, 0),      # green
    (0, 0, 255),      # blue
    (255, 255, 0),    # yellow
    (255, 0, 255),    # magenta
    (0, 255, 255),    # cyan
    (255, 255, 255),  # white
]
PALETTE_SIZE = len(GEM_COLORS)

# Scoring and timing
POINTS_PER_GEM = 100
SWAP_DELAY = 0.2          # seconds the swap (or its revert) takes to settle
CLEAR_DELAY = 0.2         # seconds matched gems take to disappear
GRAVITY_DELAY = 0.2       # seconds falling gems take to land
LEVEL_CLEAR_DELAY = 3.0   # seconds the level-clear overlay stays up

# Puzzle difficulty curve
BASE_TIME = 60
MIN_TIME = 30
TIME_STEP_LEVELS = 5      # every N levels the timer shrinks...
TIME_STEP_SECONDS = 2     # ...by this many seconds
TARGET_SCORE_PER_LEVEL = 1500
BASE_KINDS = 4
KIND_STEP_LEVELS = 10
MAX_LEVEL = 100
THREE_STAR_RATIO = 1.5
TWO_STAR_RATIO = 1.2

ZEN_NUM_KINDS = 5

# Input
SWIPE_THRESHOLD = 30.0    # pixels of drag before a press becomes a swipe

# Layout (header strip above the board, safe area below it)
HEADER_MIN_HEIGHT = 60
HEADER_MAX_HEIGHT = 100
HEADER_HEIGHT_PCT = 0.15
BOTTOM_PADDING = 50
BOARD_FILL_PCT = 0.95
EXIT_BUTTON_WIDTH = 80

DEFAULT_SAVE_PATH = Path.home() / ".gempuzzle" / "progress.json"
