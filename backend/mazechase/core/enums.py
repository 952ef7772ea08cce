# =============================================================================
# Maze Chase - Enumerations
# =============================================================================
"""
All enumeration types used throughout the game.
These define the discrete values for game elements.
"""

import re
from enum import Enum, auto
from typing import Optional, Tuple


class Direction(Enum):
    """
    The four cardinal directions of the maze.

    Declaration order is the order every search and action enumeration
    visits neighbours in: Front, Back, Right, Left.
    Front/Back move along rows, Right/Left along columns.
    """
    FRONT = 0
    BACK = 1
    RIGHT = 2
    LEFT = 3

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def delta(self) -> Tuple[int, int]:
        """(column, row) offset of one step in this direction"""
        return _DELTAS[self.value]

    @property
    def opposite(self) -> 'Direction':
        """The direction pointing back across the same edge"""
        return _OPPOSITES[self.value]

    @classmethod
    def from_delta(cls, d_column: int, d_row: int) -> Optional['Direction']:
        """Recover a direction from a unit offset, None if it is not one"""
        if (d_column, d_row) in _DELTAS:
            return DIRECTIONS[_DELTAS.index((d_column, d_row))]
        return None


# Lookup tables indexed by Direction.value, used on every BFS step
DIRECTIONS: Tuple[Direction, ...] = tuple(Direction)
_DELTAS: Tuple[Tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
_OPPOSITES: Tuple[Direction, ...] = (Direction.BACK, Direction.FRONT, Direction.LEFT, Direction.RIGHT)


class Actor(Enum):
    """
    The two opposing sides of a chase.
    """
    PURSUER = auto()    # AI hunter, maximizing side of the search
    EVADER = auto()     # Runs for the goal, minimizing side

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def opponent(self) -> 'Actor':
        """Return the opposing actor"""
        if self == Actor.PURSUER:
            return Actor.EVADER
        return Actor.PURSUER


class PowerupType(Enum):
    """
    The closed set of power-ups an actor can hold.
    """
    BREAK_WALL = auto()     # Removes the wall toward a direction
    TELEPORT = auto()       # Relocates the opponent
    FREEZE = auto()         # Opponent skips turns
    JUMP = auto()           # Hop over a wall into the neighbouring cell
    DASH = auto()           # Run straight until a wall or the edge

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. "Break Wall" """
        camel = "".join(part.capitalize() for part in self.name.split("_"))
        return re.sub(r"(\B[A-Z])", r" \1", camel)

    @property
    def is_directional(self) -> bool:
        """Whether using this power-up needs a target direction"""
        return self in (PowerupType.BREAK_WALL, PowerupType.JUMP, PowerupType.DASH)


class ActionType(Enum):
    """
    Categories of action an actor can take on its turn.
    """
    MOVE = auto()           # Step to an open neighbour
    USE_POWERUP = auto()    # Spend an inventory slot

    def __str__(self) -> str:
        return self.name.lower()


class GamePhase(Enum):
    """
    Phases of a live game.
    """
    SETUP = auto()          # Maze not generated yet
    EVADER_TURN = auto()    # Waiting for the evader's action
    PURSUER_TURN = auto()   # Waiting for the AI to act
    GAME_OVER = auto()      # Somebody won

    def __str__(self) -> str:
        return self.name.lower()


class VictoryCondition(Enum):
    """
    Ways the game can end.
    """
    CAPTURED = auto()       # Pursuer stepped onto the evader
    REACHED_GOAL = auto()   # Evader made it to the goal cell

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def winner(self) -> Actor:
        """Return the winner for this condition"""
        if self == VictoryCondition.CAPTURED:
            return Actor.PURSUER
        return Actor.EVADER


class MazeAlgorithm(Enum):
    """
    Interchangeable maze carving strategies.
    """
    PURE_RECURSIVE = auto()
    RECURSIVE_TREE = auto()
    RANDOM_TREE = auto()
    OLDEST_TREE = auto()
    RECURSIVE_DIVISION = auto()

    def __str__(self) -> str:
        return self.name.lower()


class Difficulty(Enum):
    """
    Game difficulty levels affecting maze size and search depth.
    """
    EASY = 1
    MEDIUM = 2
    HARD = 3
    EXPERT = 4

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def maze_size(self) -> Tuple[int, int]:
        """(rows, columns) of the generated maze"""
        sizes = {
            Difficulty.EASY: (8, 8),
            Difficulty.MEDIUM: (12, 12),
            Difficulty.HARD: (16, 16),
            Difficulty.EXPERT: (20, 20),
        }
        return sizes.get(self, (12, 12))

    @property
    def search_depth(self) -> int:
        """Minimax plies the pursuer looks ahead"""
        depths = {
            Difficulty.EASY: 1,
            Difficulty.MEDIUM: 2,
            Difficulty.HARD: 3,
            Difficulty.EXPERT: 4,
        }
        return depths.get(self, 2)


# =============================================================================
# Utility Functions
# =============================================================================

def parse_enum(enum_cls, value: str):
    """
    Look up an enum member by case-insensitive name.

    Raises:
        ValueError: if value is not a string or no member has that name
    """
    if not isinstance(value, str):
        raise ValueError(f"{enum_cls.__name__} must be given by name, got {value!r}")
    try:
        return enum_cls[value.strip().upper()]
    except KeyError:
        valid = ", ".join(member.name.lower() for member in enum_cls)
        raise ValueError(f"Unknown {enum_cls.__name__} '{value}' (expected one of: {valid})")
