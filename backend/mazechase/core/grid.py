# =============================================================================
# Maze Chase - Maze Grid
# =============================================================================
"""
The wall-annotated cell grid every search and simulation runs on.

Walls live in a numpy array of shape (rows, columns, 4), indexed by
Direction value, alongside a boolean goal mask. Each cell stores its own
four sides, so the wall between two neighbours is recorded twice and the
two records may disagree. is_passage_open() is the one place that decides
whether an edge can be crossed: both sides must be clear.
"""

from typing import Any, Dict, List, Optional

import numpy as np

from .enums import DIRECTIONS, Direction
from .data_structures import MazeCell, Position


class MazeGrid:
    """
    A rows x columns maze addressed by Position(column, row).

    A grid is owned by exactly one GameState (or by the maze generator
    that built it); copies for simulation go through clone().
    """

    def __init__(self, rows: int, columns: int, walls: Optional[np.ndarray] = None,
                 goals: Optional[np.ndarray] = None):
        if rows < 1 or columns < 1:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{columns}")
        self.rows = rows
        self.columns = columns

        if walls is None:
            walls = np.zeros((rows, columns, len(Direction)), dtype=bool)
        if goals is None:
            goals = np.zeros((rows, columns), dtype=bool)
        if walls.shape != (rows, columns, len(Direction)):
            raise ValueError(f"Wall array has shape {walls.shape}, expected {(rows, columns, len(Direction))}")
        if goals.shape != (rows, columns):
            raise ValueError(f"Goal mask has shape {goals.shape}, expected {(rows, columns)}")

        self.walls = walls.astype(bool, copy=False)
        self.goals = goals.astype(bool, copy=False)
        # Nested-list view of walls for the search hot path, rebuilt lazily
        self._wall_table: Optional[List[List[List[bool]]]] = None

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def open(cls, rows: int, columns: int) -> 'MazeGrid':
        """A grid with no internal walls, only the outer boundary"""
        grid = cls(rows, columns)
        grid.walls[0, :, Direction.BACK.value] = True
        grid.walls[rows - 1, :, Direction.FRONT.value] = True
        grid.walls[:, 0, Direction.LEFT.value] = True
        grid.walls[:, columns - 1, Direction.RIGHT.value] = True
        grid._wall_table = None
        return grid

    @classmethod
    def closed(cls, rows: int, columns: int) -> 'MazeGrid':
        """A grid with every wall standing, the starting point for carving"""
        return cls(rows, columns, walls=np.ones((rows, columns, len(Direction)), dtype=bool))

    # =========================================================================
    # Cell Access
    # =========================================================================

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.column < self.columns and 0 <= position.row < self.rows

    def get_cell(self, position: Position) -> MazeCell:
        """Value copy of the cell at position"""
        flags = self.walls[position.row, position.column]
        return MazeCell(
            wall_front=bool(flags[Direction.FRONT.value]),
            wall_back=bool(flags[Direction.BACK.value]),
            wall_right=bool(flags[Direction.RIGHT.value]),
            wall_left=bool(flags[Direction.LEFT.value]),
            is_goal=bool(self.goals[position.row, position.column])
        )

    def set_cell(self, position: Position, cell: MazeCell):
        """Overwrite one cell. Neighbours are left untouched."""
        self.walls[position.row, position.column] = cell.walls
        self.goals[position.row, position.column] = cell.is_goal
        self._wall_table = None

    def has_wall(self, position: Position, direction: Direction) -> bool:
        return self._walls_as_lists()[position.row][position.column][direction.value]

    def set_wall(self, position: Position, direction: Direction, state: bool):
        """Set the wall flag on a single side of a single cell"""
        self.walls[position.row, position.column, direction.value] = state
        self._wall_table = None

    def _walls_as_lists(self) -> List[List[List[bool]]]:
        if self._wall_table is None:
            self._wall_table = self.walls.tolist()
        return self._wall_table

    def add_wall_between(self, position: Position, direction: Direction):
        self._set_wall_between(position, direction, True)

    def remove_wall_between(self, position: Position, direction: Direction):
        """Clear the wall on both sides of an edge. Out-of-bounds neighbours are a no-op."""
        self._set_wall_between(position, direction, False)

    def _set_wall_between(self, position: Position, direction: Direction, state: bool):
        neighbour = position.step(direction)
        if not self.in_bounds(neighbour):
            return
        self.set_wall(position, direction, state)
        self.set_wall(neighbour, direction.opposite, state)

    def is_passage_open(self, position: Position, direction: Direction) -> bool:
        """
        Whether an actor can step from position toward direction.

        True only when the neighbour is in bounds, the departure cell has no
        wall on that side, and the arrival cell has no wall on the
        reciprocal side.
        """
        neighbour = position.step(direction)
        if not self.in_bounds(position) or not self.in_bounds(neighbour):
            return False
        walls = self._walls_as_lists()
        if walls[position.row][position.column][direction.value]:
            return False
        return not walls[neighbour.row][neighbour.column][direction.opposite.value]

    def open_neighbours(self, position: Position) -> List[Position]:
        """Reachable neighbours in Direction order"""
        return [position.step(d) for d in DIRECTIONS if self.is_passage_open(position, d)]

    def all_positions(self) -> List[Position]:
        """Every cell, row by row"""
        return [Position(c, r) for r in range(self.rows) for c in range(self.columns)]

    # =========================================================================
    # Goal
    # =========================================================================

    def goal_position(self) -> Position:
        """The first flagged goal cell, or the bottom-right cell if none is flagged"""
        flagged = np.argwhere(self.goals)
        if len(flagged) == 0:
            return Position(self.columns - 1, self.rows - 1)
        row, column = flagged[0]
        return Position(int(column), int(row))

    def set_goal(self, position: Position):
        """Make position the single goal cell"""
        self.goals[:, :] = False
        self.goals[position.row, position.column] = True

    # =========================================================================
    # Copy / Serialization
    # =========================================================================

    def clone(self) -> 'MazeGrid':
        """Independent copy; no array is shared with the source"""
        grid = MazeGrid(self.rows, self.columns, walls=self.walls.copy(), goals=self.goals.copy())
        # The list view is replaced, never edited in place, so it can be shared
        grid._wall_table = self._wall_table
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MazeGrid):
            return NotImplemented
        return (self.rows == other.rows and self.columns == other.columns
                and np.array_equal(self.walls, other.walls)
                and np.array_equal(self.goals, other.goals))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "rows": self.rows,
            "columns": self.columns,
            "walls": self.walls.astype(int).tolist(),
            "goal": self.goal_position().to_dict()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MazeGrid':
        """
        Rebuild a grid from to_dict() output.

        Raises:
            ValueError: if fields are missing or the wall array has the wrong shape
        """
        try:
            rows = int(data["rows"])
            columns = int(data["columns"])
            walls = np.asarray(data["walls"], dtype=bool)
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed grid: {exc}") from exc
        grid = cls(rows, columns, walls=walls)
        if data.get("goal") is not None:
            goal = Position.from_dict(data["goal"])
            if not grid.in_bounds(goal):
                raise ValueError(f"Goal {goal} lies outside a {rows}x{columns} grid")
            grid.set_goal(goal)
        return grid

    def __repr__(self) -> str:
        return f"MazeGrid(rows={self.rows}, columns={self.columns}, goal={self.goal_position()})"
