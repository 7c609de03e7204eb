from fiveballs.world import create_world
from fiveballs.systems.board_ops import ball_color_map, place_ball
from fiveballs.systems.pathfinding import find_path
from tests.helpers import place_balls


def assert_valid_path(world, path, start, goal):
    occupied = ball_color_map(world)
    assert path[0] == start
    assert path[-1] == goal
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1, f"non-orthogonal step {(r1, c1)} -> {(r2, c2)}"
    for cell in path[1:]:
        assert cell not in occupied, f"path crosses occupied cell {cell}"
    assert len(set(path)) == len(path)


def test_open_board_paths_have_manhattan_length():
    world = create_world(size=4)
    start = (0, 0)
    place_ball(world, *start, 'red')
    for row in range(4):
        for col in range(4):
            goal = (row, col)
            if goal == start:
                continue
            path = find_path(world, start, goal)
            assert path is not None
            assert_valid_path(world, path, start, goal)
            assert len(path) - 1 == row + col


def test_manhattan_length_from_center_of_nine_board():
    world = create_world(size=9)
    place_ball(world, 4, 4, 'blue')
    for goal in [(0, 0), (8, 8), (0, 8), (8, 0), (4, 5), (2, 7)]:
        path = find_path(world, (4, 4), goal)
        assert path is not None
        assert len(path) - 1 == abs(goal[0] - 4) + abs(goal[1] - 4)


def test_occupied_goal_has_no_path():
    world = create_world(size=5)
    place_ball(world, 0, 0, 'red')
    place_ball(world, 0, 1, 'blue')
    place_ball(world, 4, 4, 'green')
    assert find_path(world, (0, 0), (0, 1)) is None
    assert find_path(world, (0, 0), (4, 4)) is None


def test_empty_start_or_off_board_cells_have_no_path():
    world = create_world(size=5)
    place_ball(world, 2, 2, 'red')
    assert find_path(world, (0, 0), (1, 1)) is None
    assert find_path(world, (2, 2), (5, 0)) is None
    assert find_path(world, (-1, 0), (1, 1)) is None


def test_wall_blocks_movement():
    world = create_world(size=5)
    place_ball(world, 0, 0, 'red')
    place_balls(world, [(row, 2) for row in range(5)], 'blue')
    assert find_path(world, (0, 0), (0, 4)) is None
    assert find_path(world, (0, 0), (4, 1)) is not None


def test_diagonal_gap_is_not_a_passage():
    world = create_world(size=3)
    place_ball(world, 0, 0, 'red')
    place_ball(world, 0, 1, 'blue')
    place_ball(world, 1, 0, 'blue')
    assert find_path(world, (0, 0), (1, 1)) is None


def test_path_detours_through_gap_with_minimum_length():
    world = create_world(size=5)
    place_ball(world, 0, 0, 'red')
    place_balls(world, [(row, 2) for row in range(4)], 'blue')
    path = find_path(world, (0, 0), (0, 4))
    assert path is not None
    assert_valid_path(world, path, (0, 0), (0, 4))
    assert (4, 2) in path
    assert len(path) - 1 == 12


def test_path_is_deterministic():
    world = create_world(size=6)
    place_ball(world, 0, 0, 'red')
    place_balls(world, [(1, 1), (2, 3), (4, 2)], 'green')
    first = find_path(world, (0, 0), (5, 5))
    second = find_path(world, (0, 0), (5, 5))
    assert first == second


def test_find_path_does_not_mutate_board():
    world = create_world(size=5)
    place_ball(world, 0, 0, 'red')
    place_balls(world, [(1, 1), (3, 3)], 'blue')
    before = ball_color_map(world)
    find_path(world, (0, 0), (4, 4))
    assert ball_color_map(world) == before
