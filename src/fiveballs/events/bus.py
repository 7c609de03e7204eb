import logging
from typing import Callable, Dict

from blinker import Signal

logger = logging.getLogger(__name__)


class EventBus:
    """Named blinker signals shared by one game's systems.

    The session announces every board change here (selection, moves, cleared
    lines, spawned balls, score, game over) and the input and render systems
    talk to it only through these events. Delivery is synchronous: ``emit``
    returns after every handler ran.
    """
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable) -> None:
        # Systems are often not referenced anywhere else, so hold handlers strongly.
        self._signals.setdefault(name, Signal(name)).connect(fn, weak=False)

    def emit(self, name: str, **payload) -> None:
        signal = self._signals.get(name)
        if signal is None:
            return
        logger.debug("%s %s", name, payload)
        signal.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_CLICK = "tile_click"            # payload: row, col
EVENT_SELECTION_CLEAR_REQUEST = "selection_clear_request"  # payload: reason=str


# ============================================================================
# SELECTION & MOVEMENT
# ============================================================================
EVENT_BALL_SELECTED = "ball_selected"      # payload: row, col, ball_id=int
EVENT_BALL_DESELECTED = "ball_deselected"  # payload: prev_row, prev_col, reason=str
EVENT_MOVE_REJECTED = "move_rejected"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_BALL_MOVED = "ball_moved"            # payload: src=(r,c), dst=(r,c), path=[(r,c),...], ball_id=int


# ============================================================================
# LINES & BOARD
# ============================================================================
EVENT_LINES_CLEARED = "lines_cleared"      # payload: lines=[Line,...], positions=[(r,c),...], points=int, reason=str
EVENT_BALLS_SPAWNED = "balls_spawned"      # payload: positions=[(r,c),...], colors=[str,...], reason=str
EVENT_UPCOMING_CHANGED = "upcoming_changed"  # payload: colors=[str,...]


# ============================================================================
# SCORE & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int
EVENT_GAME_STARTED = "game_started"        # payload: size=int, balls=int
EVENT_GAME_OVER = "game_over"              # payload: score=int
