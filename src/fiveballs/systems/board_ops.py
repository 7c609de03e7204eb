from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from esper import World

from fiveballs.components.ball import Ball
from fiveballs.components.ball_palette import BallPalette
from fiveballs.components.board import Board
from fiveballs.components.board_position import BoardPosition

Position = Tuple[int, int]

logger = logging.getLogger(__name__)


class BoardError(Exception):
    """Base class for invalid board operations."""


class OutOfBoundsError(BoardError, IndexError):
    def __init__(self, position: Position, size: int):
        super().__init__(f"Position {position} is outside a {size}x{size} board")
        self.position = position
        self.size = size


class CellOccupiedError(BoardError):
    def __init__(self, position: Position):
        super().__init__(f"Cell {position} is occupied")
        self.position = position


class CellEmptyError(BoardError):
    def __init__(self, position: Position):
        super().__init__(f"Cell {position} is empty")
        self.position = position


class BoardFullError(BoardError):
    def __init__(self):
        super().__init__("No empty cell left on the board")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_palette(world: World) -> BallPalette:
    for _, palette in world.get_component(BallPalette):
        return palette
    raise RuntimeError("BallPalette definitions not found")


def board_size(world: World) -> int:
    return get_board(world).size


def in_bounds(world: World, row: int, col: int) -> bool:
    size = board_size(world)
    return 0 <= row < size and 0 <= col < size


def _require_in_bounds(world: World, pos: Position) -> None:
    if not in_bounds(world, pos[0], pos[1]):
        raise OutOfBoundsError(pos, board_size(world))


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def ball_at(world: World, row: int, col: int) -> Optional[Ball]:
    """Return the ball on (row, col), or None for an empty or off-board cell."""
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    return world.component_for_entity(entity, Ball)


def ball_color_map(world: World) -> Dict[Position, str]:
    """Return a snapshot mapping occupied positions to their ball colors."""
    mapping: Dict[Position, str] = {}
    for _, (ball, position) in world.get_components(Ball, BoardPosition):
        mapping[position.as_tuple()] = ball.color
    return mapping


def board_snapshot(world: World) -> List[List[Optional[str]]]:
    """Rows of color names (None for empty cells), for drawing and debugging."""
    size = board_size(world)
    colors = ball_color_map(world)
    return [[colors.get((row, col)) for col in range(size)] for row in range(size)]


def ball_count(world: World) -> int:
    return sum(1 for _ in world.get_component(Ball))


def empty_positions(world: World) -> List[Position]:
    """Empty cells in row-major order."""
    size = board_size(world)
    occupied = ball_color_map(world)
    return [(row, col) for row in range(size) for col in range(size) if (row, col) not in occupied]


def is_full(world: World) -> bool:
    return ball_count(world) >= board_size(world) ** 2


def place_ball(world: World, row: int, col: int, color: str) -> Ball:
    """Create a ball with a fresh id on an empty cell."""
    _require_in_bounds(world, (row, col))
    if get_entity_at(world, row, col) is not None:
        raise CellOccupiedError((row, col))
    ball = Ball(id=get_board(world).allocate_ball_id(), color=color)
    world.create_entity(ball, BoardPosition(row=row, col=col))
    return ball


def place_random(world: World, color: str, rng=None) -> Position:
    """Place a new ball of ``color`` on a uniformly chosen empty cell and return that cell."""
    candidates = empty_positions(world)
    if not candidates:
        raise BoardFullError()
    chooser = rng or getattr(world, "random")
    row, col = chooser.choice(candidates)
    place_ball(world, row, col, color)
    return row, col


def move_ball(world: World, src: Position, dst: Position) -> Ball:
    """Transfer the ball on ``src`` to the empty cell ``dst``. No reachability check."""
    _require_in_bounds(world, src)
    _require_in_bounds(world, dst)
    entity = get_entity_at(world, *src)
    if entity is None:
        raise CellEmptyError(src)
    if get_entity_at(world, *dst) is not None:
        raise CellOccupiedError(dst)
    position = world.component_for_entity(entity, BoardPosition)
    position.row, position.col = dst
    return world.component_for_entity(entity, Ball)


def clear_positions(world: World, positions: Iterable[Position]) -> List[Position]:
    """Empty every listed in-bounds cell; empty and repeated positions are ignored.

    Returns the positions that actually held a ball, sorted.
    """
    wanted = {tuple(pos) for pos in positions}
    cleared: List[Position] = []
    for entity, position in list(world.get_component(BoardPosition)):
        pos = position.as_tuple()
        if pos in wanted:
            world.delete_entity(entity, immediate=True)
            cleared.append(pos)
    cleared.sort()
    if cleared:
        logger.debug("Cleared %d balls: %s", len(cleared), cleared)
    return cleared
