from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems nobody stores alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"                  # payload: x, y, button, press_id
EVENT_MOUSE_RELEASE = "mouse_release"              # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SWIPE = "tile_swipe"                    # payload: src=(r,c), dst=(r,c)


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src, dst, reason=str
EVENT_TILE_SWAP_DO = "tile_swap_do"                # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove], new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_SETTLED = "board_settled"              # payload: reason=str
EVENT_BOARD_RESET = "board_reset"                  # payload: num_kinds=int, restored=bool


# ============================================================================
# SCORE & SESSION
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_TIME_CHANGED = "time_changed"                # payload: time_left=float, max_time=float
EVENT_SESSION_STARTED = "session_started"          # payload: mode=SessionMode, level=int
EVENT_LEVEL_COMPLETED = "level_completed"          # payload: level=int, stars=int, score=int
EVENT_GAME_OVER = "game_over"                      # payload: level=int, score=int
EVENT_CAMPAIGN_COMPLETE = "campaign_complete"      # payload: level=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"      # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_MENU_PUZZLE_SELECTED = "menu_puzzle_selected"  # payload: press_id=int|None
EVENT_MENU_ZEN_SELECTED = "menu_zen_selected"      # payload: press_id=int|None
EVENT_PAUSE_REQUEST = "pause_request"              # payload: None
EVENT_EXIT_REQUEST = "exit_request"                # payload: None
EVENT_OVERLAY_DISMISSED = "overlay_dismissed"      # payload: None
