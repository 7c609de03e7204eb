from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from esper import World

from fiveballs.components.game_state import GameState, TurnPhase
from fiveballs.constants import INITIAL_BALLS, MIN_LINE_LENGTH
from fiveballs.events.bus import (
    EventBus,
    EVENT_BALL_DESELECTED,
    EVENT_BALL_MOVED,
    EVENT_BALL_SELECTED,
    EVENT_BALLS_SPAWNED,
    EVENT_GAME_OVER,
    EVENT_GAME_STARTED,
    EVENT_LINES_CLEARED,
    EVENT_MOVE_REJECTED,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CLEAR_REQUEST,
    EVENT_TILE_CLICK,
    EVENT_UPCOMING_CHANGED,
)
from fiveballs.systems.board_ops import (
    BoardFullError,
    Position,
    ball_at,
    ball_count,
    board_size,
    board_snapshot,
    get_palette,
    in_bounds,
    is_full,
    move_ball,
    clear_positions,
    place_random,
)
from fiveballs.systems.line_solver import find_lines, line_positions, score_lines
from fiveballs.systems.pathfinding import find_path
from fiveballs.systems.state_utils import get_or_create_game_state, get_or_create_upcoming

logger = logging.getLogger(__name__)


class GameSessionSystem:
    """Runs the move state machine for one board.

    Flow for a click on an empty cell while a ball is selected:
      - no path: selection kept, nothing else happens;
      - otherwise move, then clear any lines formed;
      - if the move formed none, drop the previewed balls and clear lines once more;
      - roll a new preview and re-check game over (board full).
    Once game over is reached every mutating call is a no-op.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        initial_balls: int = INITIAL_BALLS,
        min_line_length: int = MIN_LINE_LENGTH,
    ):
        self.world = world
        self.event_bus = event_bus
        self.min_line_length = min_line_length
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_SELECTION_CLEAR_REQUEST, self.on_selection_clear_request)
        self._start(initial_balls)

    def _start(self, initial_balls: int) -> None:
        palette = get_palette(self.world)
        rng = self.world.random
        colors = [rng.choice(palette.spawnable_colors()) for _ in range(initial_balls)]
        self.add_random_balls(colors, reason="initial")
        self.generate_upcoming()
        logger.info(
            "Game started on a %dx%d board with %d balls",
            self.size, self.size, ball_count(self.world),
        )
        self.event_bus.emit(EVENT_GAME_STARTED, size=self.size, balls=ball_count(self.world))
        # After game_started so listeners resetting on start still see game_over.
        self.check_game_over()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def state(self) -> GameState:
        return get_or_create_game_state(self.world)

    @property
    def size(self) -> int:
        return board_size(self.world)

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def selected(self) -> Optional[Position]:
        return self.state.selected

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def upcoming(self) -> List[str]:
        return list(get_or_create_upcoming(self.world).colors)

    def snapshot(self) -> List[List[Optional[str]]]:
        return board_snapshot(self.world)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_cell(row, col)

    def on_selection_clear_request(self, sender, **kwargs):
        self.clear_selection(reason=kwargs.get('reason', 'request'))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def select_cell(self, row: int, col: int) -> None:
        state = self.state
        if state.game_over:
            return
        if not in_bounds(self.world, row, col):
            return
        target = (row, col)
        ball = ball_at(self.world, row, col)
        if ball is not None:
            if state.selected == target:
                self.clear_selection(reason='reselect')
            else:
                state.selected = target
                self.event_bus.emit(EVENT_BALL_SELECTED, row=row, col=col, ball_id=ball.id)
            return
        if state.selected is None:
            return
        self._attempt_move(state.selected, target)

    def clear_selection(self, reason: str = 'request') -> None:
        state = self.state
        prev = state.selected
        if prev is None:
            return
        state.selected = None
        self.event_bus.emit(EVENT_BALL_DESELECTED, prev_row=prev[0], prev_col=prev[1], reason=reason)

    def _attempt_move(self, src: Position, dst: Position) -> None:
        path = find_path(self.world, src, dst)
        if path is None:
            logger.debug("No path from %s to %s", src, dst)
            self.event_bus.emit(EVENT_MOVE_REJECTED, src=src, dst=dst, reason='no_path')
            return
        ball = move_ball(self.world, src, dst)
        self.state.selected = None
        logger.debug("Moved ball %d from %s to %s in %d steps", ball.id, src, dst, len(path) - 1)
        self.event_bus.emit(EVENT_BALL_MOVED, src=src, dst=dst, path=path, ball_id=ball.id)

        if not self._resolve_lines(reason='move'):
            self.add_random_balls(self.upcoming, reason='replenish')
            # A second scan only; replenishment never repeats within one move.
            self._resolve_lines(reason='replenish')
        self.generate_upcoming()
        self.check_game_over()

    def _resolve_lines(self, reason: str) -> int:
        """Score and clear every line on the board; return the points awarded."""
        lines = find_lines(self.world, self.min_line_length)
        if not lines:
            return 0
        points = score_lines(lines, self.min_line_length)
        positions = line_positions(lines)
        clear_positions(self.world, positions)
        state = self.state
        state.score += points
        logger.debug("Cleared %d lines (%d balls) for %d points", len(lines), len(positions), points)
        self.event_bus.emit(
            EVENT_LINES_CLEARED, lines=lines, positions=positions, points=points, reason=reason,
        )
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points)
        return points

    def add_random_balls(self, colors: Sequence[str], reason: str = 'spawn') -> List[Position]:
        """Drop one ball per color on random empty cells, stopping once the board is full."""
        if self.state.game_over:
            return []
        placed: List[Position] = []
        placed_colors: List[str] = []
        for color in colors:
            try:
                placed.append(place_random(self.world, color))
            except BoardFullError:
                logger.debug("Board filled up while placing %s balls", reason)
                break
            placed_colors.append(color)
        if placed:
            self.event_bus.emit(EVENT_BALLS_SPAWNED, positions=placed, colors=placed_colors, reason=reason)
        return placed

    def generate_upcoming(self) -> List[str]:
        upcoming = get_or_create_upcoming(self.world)
        if self.state.game_over:
            return list(upcoming.colors)
        palette = get_palette(self.world)
        rng = self.world.random
        choices = palette.spawnable_colors()
        upcoming.colors = [rng.choice(choices) for _ in range(upcoming.size)]
        self.event_bus.emit(EVENT_UPCOMING_CHANGED, colors=list(upcoming.colors))
        return list(upcoming.colors)

    def check_game_over(self) -> bool:
        state = self.state
        if state.game_over:
            return True
        if is_full(self.world):
            state.game_over = True
            state.selected = None
            logger.info("Game over: board full, final score %d", state.score)
            self.event_bus.emit(EVENT_GAME_OVER, score=state.score)
        return state.game_over

