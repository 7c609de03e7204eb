from fiveballs.constants import BALL_COLORS
from fiveballs.events.bus import EventBus
from fiveballs.systems.board_ops import place_ball
from fiveballs.systems.game_session import GameSessionSystem
from fiveballs.systems.render import RenderSystem
from fiveballs.ui.layout import cell_center
from fiveballs.world import create_world
from tests.helpers import FirstChoice, place_balls


class DummyWindow:
    def __init__(self):
        self.width = 800
        self.height = 600


def setup_render(size=9):
    bus = EventBus()
    window = DummyWindow()
    world = create_world(size=size, rng=FirstChoice())
    render = RenderSystem(world, bus, window)
    session = GameSessionSystem(world, bus, initial_balls=0)
    return bus, world, render, session


def test_layout_places_balls_at_cell_centers():
    bus, world, render, session = setup_render()
    place_ball(world, 0, 0, 'blue')
    place_ball(world, 8, 8, 'green')
    layout = render.build_layout()
    balls = {(b['row'], b['col']): b for b in layout['balls']}
    assert set(balls) == {(0, 0), (8, 8)}
    for (row, col), ball in balls.items():
        assert (ball['x'], ball['y']) == cell_center(row, col, 800, 600, 9)
        assert ball['radius'] < layout['tile_size'] / 2
    assert balls[(0, 0)]['rgb'] == BALL_COLORS['blue']
    assert layout['right'] - layout['left'] == 9 * layout['tile_size']


def test_selection_is_highlighted_and_cleared():
    bus, world, render, session = setup_render()
    place_ball(world, 2, 3, 'red')
    session.select_cell(2, 3)
    assert render.selected == (2, 3)
    assert [b['selected'] for b in render.build_layout()['balls']] == [True]
    session.select_cell(2, 3)
    assert render.selected is None
    assert [b['selected'] for b in render.build_layout()['balls']] == [False]


def test_preview_and_score_text():
    bus, world, render, session = setup_render()
    layout = render.build_layout()
    assert [p['rgb'] for p in layout['preview']] == [BALL_COLORS['red']] * 3
    assert all(p['y'] > layout['top'] for p in layout['preview'])
    assert layout['score_text'] == 'Score: 0'
    assert layout['banner'] is None


def test_score_and_banner_follow_the_session():
    bus, world, render, session = setup_render()
    place_ball(world, 0, 0, 'red')
    place_balls(world, [(1, col) for col in range(4)], 'red')
    session.select_cell(0, 0)
    session.select_cell(1, 4)
    assert render.last_points == 6
    assert render.build_layout()['score_text'] == 'Score: 6'

    bus2, world2, render2, session2 = setup_render(size=1)
    place_ball(world2, 0, 0, 'red')
    session2.check_game_over()
    assert render2.build_layout()['banner'] == 'Game Over! The board is full. Final score: 0'


def test_banner_shown_when_starting_balls_fill_the_board():
    bus = EventBus()
    world = create_world(size=2, rng=FirstChoice())
    render = RenderSystem(world, bus, DummyWindow())
    session = GameSessionSystem(world, bus, initial_balls=4)
    assert session.game_over
    layout = render.build_layout()
    assert layout['banner'] == 'Game Over! The board is full. Final score: 0'
    assert len(layout['balls']) == 4
