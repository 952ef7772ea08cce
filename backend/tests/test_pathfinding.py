"""
Graph Search Tests

Breadth-first searches over the maze grid:
- Shortest paths and their tie-breaking order
- Distance fields
- Farthest cell and dash runs
"""

import pytest

from mazechase.core import (
    Direction, MazeAlgorithm, MazeGrid, Position, UNREACHABLE,
    calculate_all_distances, calculate_dash_path, calculate_distances_from_path,
    direction_towards, find_furthest_cell, find_shortest_path, generate_maze,
    path_length
)


# =============================================================================
# Shortest Path
# =============================================================================

def test_path_to_self_is_single_cell():
    grid = MazeGrid.open(3, 3)
    assert find_shortest_path(grid, Position(1, 1), Position(1, 1)) == [Position(1, 1)]


def test_straight_path_on_open_grid():
    grid = MazeGrid.open(3, 3)
    path = find_shortest_path(grid, Position(0, 0), Position(2, 0))
    assert path == [Position(0, 0), Position(1, 0), Position(2, 0)]
    assert path_length(path) == 3


def test_ties_follow_direction_order():
    """Front is explored before right, so the path steps front first"""
    grid = MazeGrid.open(3, 3)
    path = find_shortest_path(grid, Position(0, 0), Position(1, 1))
    assert path == [Position(0, 0), Position(0, 1), Position(1, 1)]


def test_unreachable_target_returns_none():
    grid = MazeGrid.closed(2, 2)
    path = find_shortest_path(grid, Position(0, 0), Position(1, 1))
    assert path is None
    assert path_length(path) == UNREACHABLE


def test_one_sided_wall_blocks_both_ways():
    grid = MazeGrid.open(1, 2)
    grid.set_wall(Position(0, 0), Direction.RIGHT, True)

    assert find_shortest_path(grid, Position(0, 0), Position(1, 0)) is None
    assert find_shortest_path(grid, Position(1, 0), Position(0, 0)) is None


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_paths_are_valid_and_match_distance_field(seed):
    grid = generate_maze(MazeAlgorithm.RANDOM_TREE, 7, 9, seed=seed)
    start = Position(0, 0)
    distances = calculate_all_distances(grid, start)

    for end in grid.all_positions():
        path = find_shortest_path(grid, start, end)
        assert path[0] == start
        assert path[-1] == end
        for current, following in zip(path, path[1:]):
            step = direction_towards(current, following)
            assert step is not None
            assert grid.is_passage_open(current, step)
        assert len(path) - 1 == distances[end]


# =============================================================================
# Distance Fields
# =============================================================================

def test_all_distances_on_open_grid():
    grid = MazeGrid.open(3, 3)
    distances = calculate_all_distances(grid, Position(0, 0))

    assert len(distances) == 9
    assert distances[Position(0, 0)] == 0
    assert distances[Position(2, 2)] == 4


def test_distances_omit_unreachable_cells():
    grid = MazeGrid.closed(2, 2)
    assert calculate_all_distances(grid, Position(0, 0)) == {Position(0, 0): 0}


def test_distances_from_path_seed_every_cell():
    grid = MazeGrid.open(3, 3)
    route = [Position(0, 0), Position(1, 0), Position(2, 0)]
    distances = calculate_distances_from_path(grid, route)

    for cell in route:
        assert distances[cell] == 0
    assert distances[Position(1, 2)] == 2


# =============================================================================
# Farthest Cell
# =============================================================================

def test_furthest_cell_in_corridor():
    grid = MazeGrid.open(1, 4)
    assert find_furthest_cell(grid, Position(0, 0)) == Position(3, 0)


def test_furthest_cell_of_isolated_start_is_start():
    grid = MazeGrid.closed(3, 3)
    assert find_furthest_cell(grid, Position(1, 1)) == Position(1, 1)


def test_furthest_cell_is_at_maximum_distance_in_perfect_maze():
    grid = generate_maze(MazeAlgorithm.PURE_RECURSIVE, 8, 8, seed=11)
    goal = grid.goal_position()
    distances = calculate_all_distances(grid, goal)
    assert distances[find_furthest_cell(grid, goal)] == max(distances.values())


# =============================================================================
# Dash
# =============================================================================

def test_dash_runs_to_the_edge():
    grid = MazeGrid.open(1, 5)
    path = calculate_dash_path(grid, Position(0, 0), Direction.RIGHT)
    assert path == [Position(1, 0), Position(2, 0), Position(3, 0), Position(4, 0)]


def test_dash_stops_at_wall():
    grid = MazeGrid.open(1, 5)
    grid.add_wall_between(Position(2, 0), Direction.RIGHT)
    path = calculate_dash_path(grid, Position(0, 0), Direction.RIGHT)
    assert path == [Position(1, 0), Position(2, 0)]


def test_dash_into_boundary_goes_nowhere():
    grid = MazeGrid.open(1, 5)
    assert calculate_dash_path(grid, Position(0, 0), Direction.LEFT) == []


def test_dash_is_bounded_by_grid_size():
    grid = MazeGrid.open(6, 1)
    path = calculate_dash_path(grid, Position(0, 0), Direction.FRONT)
    assert len(path) == 5
    assert len(path) <= max(grid.rows, grid.columns)


# =============================================================================
# Direction Helpers
# =============================================================================

def test_direction_towards():
    assert direction_towards(Position(0, 0), Position(0, 1)) == Direction.FRONT
    assert direction_towards(Position(0, 1), Position(0, 0)) == Direction.BACK
    assert direction_towards(Position(0, 0), Position(1, 0)) == Direction.RIGHT
    assert direction_towards(Position(1, 0), Position(0, 0)) == Direction.LEFT
    assert direction_towards(Position(0, 0), Position(2, 0)) is None
