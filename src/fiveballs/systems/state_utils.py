from esper import World

from fiveballs.components.game_state import GameState
from fiveballs.components.upcoming_balls import UpcomingBalls


def get_or_create_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    existing = list(world.get_component(GameState))
    if existing:
        return existing[0][1]
    world.create_entity(GameState())
    return list(world.get_component(GameState))[0][1]


def get_or_create_upcoming(world: World) -> UpcomingBalls:
    """Return the shared UpcomingBalls component, creating it if absent."""
    existing = list(world.get_component(UpcomingBalls))
    if existing:
        return existing[0][1]
    world.create_entity(UpcomingBalls())
    return list(world.get_component(UpcomingBalls))[0][1]
