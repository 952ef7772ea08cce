# =============================================================================
# Maze Chase - Maze Generation
# =============================================================================
"""
Generates mazes and places the two actors on them.

Each algorithm is a plain function carve(rows, columns, rng) -> MazeGrid,
picked by MazeAlgorithm. All of them produce perfect mazes: every cell is
reachable, there are no loops, and every wall is recorded on both sides.
"""

import random
from typing import Callable, Dict, List, Optional, Tuple

from .enums import Direction, MazeAlgorithm
from .data_structures import GameConfig, Position
from .grid import MazeGrid
from .pathfinding import calculate_all_distances, find_furthest_cell, find_shortest_path


CarveFunction = Callable[[int, int, random.Random], MazeGrid]


# =============================================================================
# Carving Strategies
# =============================================================================

def _unvisited_neighbours(grid: MazeGrid, cell: Position, visited: set) -> List[Direction]:
    return [d for d in Direction
            if grid.in_bounds(cell.step(d)) and cell.step(d) not in visited]


def carve_recursive_backtracker(rows: int, columns: int, rng: random.Random) -> MazeGrid:
    """
    Randomised depth-first search.

    The top of the stack steps into a random unvisited neighbour, or is
    popped once it has none. Uses an explicit stack so large mazes do not
    hit the recursion limit.
    """
    grid = MazeGrid.closed(rows, columns)
    start = Position(0, 0)
    visited = {start}
    stack = [start]

    while stack:
        cell = stack[-1]
        options = _unvisited_neighbours(grid, cell, visited)
        if not options:
            stack.pop()
            continue
        direction = rng.choice(options)
        neighbour = cell.step(direction)
        grid.remove_wall_between(cell, direction)
        visited.add(neighbour)
        stack.append(neighbour)

    return grid


def _carve_growing_tree(rows: int, columns: int, rng: random.Random,
                        select: Callable[[int], int]) -> MazeGrid:
    """
    Growing-tree carving: keep a list of active cells, extend the one
    chosen by select(len(active)), retire it once it has nowhere to go.
    """
    grid = MazeGrid.closed(rows, columns)
    start = Position(rng.randrange(columns), rng.randrange(rows))
    visited = {start}
    active = [start]

    while active:
        index = select(len(active))
        cell = active[index]
        options = _unvisited_neighbours(grid, cell, visited)
        if not options:
            active.pop(index)
            continue
        direction = rng.choice(options)
        neighbour = cell.step(direction)
        grid.remove_wall_between(cell, direction)
        visited.add(neighbour)
        active.append(neighbour)

    return grid


def carve_recursive_tree(rows: int, columns: int, rng: random.Random) -> MazeGrid:
    """Growing tree that always extends the newest cell"""
    return _carve_growing_tree(rows, columns, rng, lambda n: n - 1)


def carve_random_tree(rows: int, columns: int, rng: random.Random) -> MazeGrid:
    """Growing tree that extends a random active cell"""
    return _carve_growing_tree(rows, columns, rng, rng.randrange)


def carve_oldest_tree(rows: int, columns: int, rng: random.Random) -> MazeGrid:
    """Growing tree that extends the oldest active cell"""
    return _carve_growing_tree(rows, columns, rng, lambda n: 0)


def carve_recursive_division(rows: int, columns: int, rng: random.Random) -> MazeGrid:
    """
    Start from an open room and split it with walls, leaving one gap in
    each wall, until every chamber is a single row or column wide.
    """
    grid = MazeGrid.open(rows, columns)
    chambers = [(0, 0, columns, rows)]  # (column, row, width, height)

    while chambers:
        column, row, width, height = chambers.pop()
        if width < 2 or height < 2:
            continue

        if width < height:
            horizontal = True
        elif height < width:
            horizontal = False
        else:
            horizontal = rng.random() < 0.5

        if horizontal:
            # Wall along the front side of wall_row
            wall_row = row + rng.randrange(height - 1)
            gap = column + rng.randrange(width)
            for c in range(column, column + width):
                if c != gap:
                    grid.add_wall_between(Position(c, wall_row), Direction.FRONT)
            chambers.append((column, row, width, wall_row - row + 1))
            chambers.append((column, wall_row + 1, width, row + height - wall_row - 1))
        else:
            wall_column = column + rng.randrange(width - 1)
            gap = row + rng.randrange(height)
            for r in range(row, row + height):
                if r != gap:
                    grid.add_wall_between(Position(wall_column, r), Direction.RIGHT)
            chambers.append((column, row, wall_column - column + 1, height))
            chambers.append((wall_column + 1, row, column + width - wall_column - 1, height))

    return grid


MAZE_ALGORITHMS: Dict[MazeAlgorithm, CarveFunction] = {
    MazeAlgorithm.PURE_RECURSIVE: carve_recursive_backtracker,
    MazeAlgorithm.RECURSIVE_TREE: carve_recursive_tree,
    MazeAlgorithm.RANDOM_TREE: carve_random_tree,
    MazeAlgorithm.OLDEST_TREE: carve_oldest_tree,
    MazeAlgorithm.RECURSIVE_DIVISION: carve_recursive_division,
}


# =============================================================================
# Convenience function
# =============================================================================

def generate_maze(
    algorithm: MazeAlgorithm = MazeAlgorithm.PURE_RECURSIVE,
    rows: int = 12,
    columns: int = 12,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None
) -> MazeGrid:
    """
    Carve a maze and mark its goal at the bottom-right cell.

    Args:
        algorithm: Carving strategy
        rows: Maze height
        columns: Maze width
        seed: Random seed for reproducibility, ignored when rng is given
        rng: Shared random source

    Returns:
        The generated MazeGrid
    """
    if rng is None:
        rng = random.Random(seed)
    grid = MAZE_ALGORITHMS[algorithm](rows, columns, rng)
    grid.set_goal(Position(columns - 1, rows - 1))
    return grid


# =============================================================================
# Spawn Placement
# =============================================================================

def place_actors(
    grid: MazeGrid,
    goal: Position,
    rng: random.Random,
    config: Optional[GameConfig] = None
) -> Tuple[Position, Position]:
    """
    Choose starting cells for both actors.

    The evader starts at the cell farthest from the goal. The pursuer starts
    at a random cell reachable from both, off the evader's shortest route,
    and far enough from the evader and the goal. With no such cell it starts
    at the cell farthest from the evader.

    Returns:
        Tuple of (evader_start, pursuer_start)
    """
    config = config or GameConfig()
    evader_start = find_furthest_cell(grid, goal)

    evader_distances = calculate_all_distances(grid, evader_start)
    goal_distances = calculate_all_distances(grid, goal)
    route = set(find_shortest_path(grid, evader_start, goal) or [])

    candidates = [
        cell for cell in grid.all_positions()
        if cell in evader_distances and cell in goal_distances
        and cell not in route
        and evader_distances[cell] >= config.spawn_min_evader_distance
        and goal_distances[cell] >= config.spawn_min_goal_distance
    ]

    if candidates:
        return evader_start, rng.choice(candidates)
    return evader_start, find_furthest_cell(grid, evader_start)
