# =============================================================================
# Maze Chase - Graph Search
# =============================================================================
"""
Breadth-first searches over a MazeGrid.

Every traversal asks MazeGrid.is_passage_open() and visits neighbours in
Direction order (front, back, right, left), so the shortest path picked
among equals is always the one that order finds first. The functions work
the same on the live maze and on simulation clones.

Unreachable targets are never an error: find_shortest_path() returns None
and distance maps simply omit the cell.
"""

from collections import deque
from typing import Dict, Iterable, List, Optional

from .enums import Direction
from .data_structures import Position
from .grid import MazeGrid


# Stand-in length for a path that does not exist
UNREACHABLE = 999


def find_shortest_path(grid: MazeGrid, start: Position, end: Position) -> Optional[List[Position]]:
    """
    Shortest path from start to end, both inclusive.

    Returns:
        The cells of the path in order, [start] when start == end, or None
        if end cannot be reached.
    """
    if start == end:
        return [start]

    parents: Dict[Position, Optional[Position]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        if current == end:
            break
        for neighbour in grid.open_neighbours(current):
            if neighbour not in parents:
                parents[neighbour] = current
                queue.append(neighbour)

    if end not in parents:
        return None

    path = []
    node: Optional[Position] = end
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


def calculate_all_distances(grid: MazeGrid, start: Position) -> Dict[Position, int]:
    """Hop distance from start to every reachable cell"""
    return calculate_distances_from_path(grid, [start])


def calculate_distances_from_path(grid: MazeGrid, path: Iterable[Position]) -> Dict[Position, int]:
    """
    Hop distance from the nearest cell of path to every reachable cell.

    All path cells are seeded at distance 0, which measures closeness to a
    route rather than to a point.
    """
    distances: Dict[Position, int] = {}
    queue = deque()
    for cell in path:
        if cell not in distances:
            distances[cell] = 0
            queue.append(cell)

    while queue:
        current = queue.popleft()
        for neighbour in grid.open_neighbours(current):
            if neighbour not in distances:
                distances[neighbour] = distances[current] + 1
                queue.append(neighbour)

    return distances


def find_furthest_cell(grid: MazeGrid, start: Position) -> Position:
    """
    The last cell a BFS from start dequeues.

    On a perfect maze this is a cell at maximum distance. On mazes with
    loops it is only the last cell visited, not a checked maximum.
    """
    visited = {start}
    queue = deque([start])
    last = start

    while queue:
        last = queue.popleft()
        for neighbour in grid.open_neighbours(last):
            if neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)

    return last


def calculate_dash_path(grid: MazeGrid, start: Position, direction: Direction) -> List[Position]:
    """
    Cells a dash from start toward direction passes through, excluding start.

    The run stops at the first closed passage or the grid edge and never
    takes more than max(rows, columns) steps. An empty list means the dash
    goes nowhere.
    """
    path = []
    current = start
    for _ in range(max(grid.rows, grid.columns)):
        if not grid.is_passage_open(current, direction):
            break
        current = current.step(direction)
        path.append(current)
    return path


def path_length(path: Optional[List[Position]]) -> int:
    """Number of cells in path, or UNREACHABLE for a missing path"""
    if path is None:
        return UNREACHABLE
    return len(path)


def direction_towards(start: Position, end: Position) -> Optional[Direction]:
    """Direction of a single step from start to an adjacent end"""
    return Direction.from_delta(end.column - start.column, end.row - start.row)
