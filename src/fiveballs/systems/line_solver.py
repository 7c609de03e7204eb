from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from esper import World

from fiveballs.constants import MIN_LINE_LENGTH
from fiveballs.systems.board_ops import Position, ball_color_map, board_size

Direction = Tuple[int, int]

HORIZONTAL: Direction = (0, 1)
VERTICAL: Direction = (1, 0)
DIAGONAL_DOWN_RIGHT: Direction = (1, 1)
DIAGONAL_DOWN_LEFT: Direction = (1, -1)

# Scan order; lines are reported in this order.
DIRECTIONS: Tuple[Direction, ...] = (HORIZONTAL, VERTICAL, DIAGONAL_DOWN_RIGHT, DIAGONAL_DOWN_LEFT)


@dataclass(frozen=True, slots=True)
class Line:
    """A maximal same-color run long enough to clear."""
    positions: Tuple[Position, ...]
    color: str
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.positions)


def _line_starts(size: int, direction: Direction) -> List[Position]:
    """Cells whose predecessor along ``direction`` is off the board.

    Each board line of that direction is walked from exactly one of these.
    """
    dr, dc = direction
    starts: List[Position] = []
    for row in range(size):
        for col in range(size):
            prev_row, prev_col = row - dr, col - dc
            if not (0 <= prev_row < size and 0 <= prev_col < size):
                starts.append((row, col))
    return starts


def _runs_along(
    colors: Dict[Position, str], size: int, start: Position, direction: Direction, min_length: int
) -> List[Line]:
    dr, dc = direction
    lines: List[Line] = []
    run: List[Position] = []
    run_color = None
    row, col = start
    while 0 <= row < size and 0 <= col < size:
        color = colors.get((row, col))
        if color is not None and color == run_color:
            run.append((row, col))
        else:
            if len(run) >= min_length:
                lines.append(Line(positions=tuple(run), color=run_color, direction=direction))
            run = [(row, col)] if color is not None else []
            run_color = color
        row += dr
        col += dc
    if len(run) >= min_length:
        lines.append(Line(positions=tuple(run), color=run_color, direction=direction))
    return lines


def find_lines(world: World, min_length: int = MIN_LINE_LENGTH) -> List[Line]:
    """Detect every maximal same-color run of ``min_length`` or more in all four directions."""
    colors = ball_color_map(world)
    if not colors:
        return []
    size = board_size(world)
    lines: List[Line] = []
    for direction in DIRECTIONS:
        for start in _line_starts(size, direction):
            lines.extend(_runs_along(colors, size, start, direction, min_length))
    return lines


def score_line(length: int, min_length: int = MIN_LINE_LENGTH) -> int:
    """Points for one cleared run: zero below ``min_length``, then excess^2 + length.

    ``excess`` counts balls beyond ``min_length - 1``, so with the default
    threshold a 5-run scores 6, a 6-run 10 and a 7-run 16.
    """
    if length < min_length:
        return 0
    excess = length - (min_length - 1)
    return excess ** 2 + length


def score_lines(lines: Iterable[Line], min_length: int = MIN_LINE_LENGTH) -> int:
    # Each line counts in full even when it shares a cell with another.
    return sum(score_line(line.length, min_length) for line in lines)


def line_positions(lines: Iterable[Line]) -> List[Position]:
    """Union of all positions covered by ``lines``, sorted."""
    return sorted({pos for line in lines for pos in line.positions})
