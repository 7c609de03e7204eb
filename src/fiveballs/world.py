import random
from typing import Dict, Optional, Tuple

from esper import World
from fiveballs.components.ball_palette import BallPalette
from fiveballs.components.board import Board
from fiveballs.components.game_state import GameState
from fiveballs.components.upcoming_balls import UpcomingBalls
from fiveballs.constants import BALL_COLORS, GRID_SIZE, UPCOMING_BALLS


def create_world(
    *,
    size: int = GRID_SIZE,
    upcoming_count: int = UPCOMING_BALLS,
    colors: Optional[Dict[str, Tuple[int, int, int]]] = None,
    rng=None,
) -> World:
    """Build a world holding an empty board and a fresh session state.

    ``rng`` is any object with a ``choice(sequence)`` method; it drives both
    random colors and random empty cells. Defaults to an unseeded ``random.Random``.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Global session state and the upcoming preview share one entity.
    state_entity = world.create_entity()
    world.add_component(state_entity, GameState())
    world.add_component(state_entity, UpcomingBalls(size=upcoming_count))

    world.create_entity(Board(size=size))
    world.create_entity(BallPalette(colors=dict(colors or BALL_COLORS)))
    return world
