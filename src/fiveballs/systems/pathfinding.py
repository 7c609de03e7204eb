from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from esper import World

from fiveballs.systems.board_ops import Position, ball_color_map, board_size

# Orthogonal steps only; diagonals matter for lines, never for movement.
NEIGHBOUR_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0))


def find_path(world: World, start: Position, goal: Position) -> Optional[List[Position]]:
    """Shortest path of empty cells carrying the ball on ``start`` to the empty cell ``goal``.

    Breadth-first over orthogonal neighbours in NEIGHBOUR_STEPS order, so the
    returned path is minimal and the same board always yields the same path.
    Every occupied cell other than ``start`` blocks movement. Returns None when
    either cell is off the board, ``start`` holds no ball, ``goal`` is occupied
    or no route exists.
    """
    size = board_size(world)
    start = tuple(start)
    goal = tuple(goal)
    for row, col in (start, goal):
        if not (0 <= row < size and 0 <= col < size):
            return None
    occupied = ball_color_map(world)
    if start not in occupied or goal in occupied:
        return None

    came_from: Dict[Position, Optional[Position]] = {start: None}
    frontier = deque([start])
    while frontier:
        current = frontier.popleft()
        if current == goal:
            break
        row, col = current
        for dr, dc in NEIGHBOUR_STEPS:
            nxt = (row + dr, col + dc)
            if not (0 <= nxt[0] < size and 0 <= nxt[1] < size):
                continue
            if nxt in came_from or nxt in occupied:
                continue
            came_from[nxt] = current
            frontier.append(nxt)

    if goal not in came_from:
        return None
    path: List[Position] = []
    step: Optional[Position] = goal
    while step is not None:
        path.append(step)
        step = came_from[step]
    path.reverse()
    return path

