# =============================================================================
# Maze Chase - Core Data Structures
# =============================================================================
"""
Core data structures for representing game elements.
These are the fundamental building blocks of the game state.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional

from .enums import (
    Direction, PowerupType, ActionType, Difficulty, MazeAlgorithm, parse_enum
)


DEFAULT_FREEZE_DURATION = 2


# =============================================================================
# Position
# =============================================================================

class Position(NamedTuple):
    """
    A (column, row) cell coordinate.

    The type does not enforce bounds; callers range-check against the grid
    before indexing.
    """
    column: int
    row: int

    def step(self, direction: Direction) -> 'Position':
        """The neighbouring coordinate one step toward direction"""
        d_column, d_row = direction.delta
        return Position(self.column + d_column, self.row + d_row)

    def manhattan(self, other: 'Position') -> int:
        return abs(self.column - other.column) + abs(self.row - other.row)

    def to_dict(self) -> Dict[str, int]:
        return {"column": self.column, "row": self.row}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Position':
        try:
            return cls(int(data["column"]), int(data["row"]))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed position: {data!r}") from exc

    def __str__(self) -> str:
        return f"({self.column}, {self.row})"


# =============================================================================
# Maze Cell
# =============================================================================

@dataclass
class MazeCell:
    """
    Value view of a single maze cell.

    Walls are recorded per cell and per side, so the wall between two
    neighbours is stored twice. Changing one cell never touches its
    neighbour.

    Attributes:
        wall_front: Wall toward row + 1
        wall_back: Wall toward row - 1
        wall_right: Wall toward column + 1
        wall_left: Wall toward column - 1
        is_goal: Whether this is the evader's target cell
    """
    wall_front: bool = False
    wall_back: bool = False
    wall_right: bool = False
    wall_left: bool = False
    is_goal: bool = False

    def has_wall(self, direction: Direction) -> bool:
        return getattr(self, f"wall_{direction}")

    def set_wall(self, direction: Direction, state: bool):
        setattr(self, f"wall_{direction}", state)

    @property
    def walls(self) -> List[bool]:
        """Wall flags in Direction order"""
        return [self.has_wall(d) for d in Direction]

    def clone(self) -> 'MazeCell':
        """Create a copy of this cell"""
        return MazeCell(
            wall_front=self.wall_front,
            wall_back=self.wall_back,
            wall_right=self.wall_right,
            wall_left=self.wall_left,
            is_goal=self.is_goal
        )


# =============================================================================
# Power-up
# =============================================================================

@dataclass
class Powerup:
    """
    A single inventory item.

    Power-ups are values: inventories hold independent copies, so
    consuming one from a simulated inventory never reaches the source.
    """
    powerup_type: PowerupType
    name: str = ""
    freeze_duration: int = 0  # Only meaningful for FREEZE

    def __post_init__(self):
        if not self.name:
            self.name = self.powerup_type.display_name
        if self.powerup_type == PowerupType.FREEZE and self.freeze_duration <= 0:
            self.freeze_duration = DEFAULT_FREEZE_DURATION

    @classmethod
    def create(cls, powerup_type: PowerupType,
               freeze_duration: int = DEFAULT_FREEZE_DURATION) -> 'Powerup':
        """Build a power-up with the standard name and, for Freeze, a duration"""
        duration = freeze_duration if powerup_type == PowerupType.FREEZE else 0
        return cls(powerup_type=powerup_type, freeze_duration=duration)

    def clone(self) -> 'Powerup':
        return Powerup(
            powerup_type=self.powerup_type,
            name=self.name,
            freeze_duration=self.freeze_duration
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "powerup_type": self.powerup_type.name,
            "name": self.name,
            "freeze_duration": self.freeze_duration
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Powerup':
        try:
            return cls(
                powerup_type=parse_enum(PowerupType, data["powerup_type"]),
                name=data.get("name", ""),
                freeze_duration=int(data.get("freeze_duration", 0))
            )
        except KeyError as exc:
            raise ValueError("Power-up requires a powerup_type") from exc
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed power-up: {data!r}") from exc


# =============================================================================
# Game Action
# =============================================================================

@dataclass
class Action:
    """
    A move or a power-up use.

    For moves, direction is the step direction. For power-ups it is the
    target direction and stays None for Freeze and Teleport. The score is
    filled in by the search and is not part of the action's identity.
    """
    action_type: ActionType
    direction: Optional[Direction] = None
    powerup_slot: Optional[int] = None
    powerup_type: Optional[PowerupType] = None
    score: float = field(default=0.0, compare=False)

    @classmethod
    def move(cls, direction: Direction) -> 'Action':
        return cls(action_type=ActionType.MOVE, direction=direction)

    @classmethod
    def use_powerup(cls, slot: int, powerup_type: PowerupType,
                    direction: Optional[Direction] = None) -> 'Action':
        return cls(
            action_type=ActionType.USE_POWERUP,
            direction=direction,
            powerup_slot=slot,
            powerup_type=powerup_type
        )

    @property
    def is_move(self) -> bool:
        return self.action_type == ActionType.MOVE

    def clone(self) -> 'Action':
        return Action(
            action_type=self.action_type,
            direction=self.direction,
            powerup_slot=self.powerup_slot,
            powerup_type=self.powerup_type,
            score=self.score
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "action_type": self.action_type.name,
            "direction": self.direction.name if self.direction else None,
            "powerup_slot": self.powerup_slot,
            "powerup_type": self.powerup_type.name if self.powerup_type else None,
            "score": self.score
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Action':
        """
        Rebuild an action from its serialized form.

        Raises:
            ValueError: on unknown enum names or a missing action type
        """
        if "action_type" not in data:
            raise ValueError("Action requires an action_type")
        direction = data.get("direction")
        powerup_type = data.get("powerup_type")
        slot = data.get("powerup_slot")
        return cls(
            action_type=parse_enum(ActionType, data["action_type"]),
            direction=parse_enum(Direction, direction) if direction else None,
            powerup_slot=int(slot) if slot is not None else None,
            powerup_type=parse_enum(PowerupType, powerup_type) if powerup_type else None,
            score=float(data.get("score", 0.0))
        )

    def __str__(self) -> str:
        """Human-readable representation"""
        if self.is_move:
            return f"Move {self.direction}"
        label = self.powerup_type.display_name if self.powerup_type else "Power-up"
        parts = [f"Use {label} (slot {self.powerup_slot})"]
        if self.direction is not None:
            parts.append(f"toward {self.direction}")
        return " ".join(parts)


# =============================================================================
# Game Configuration
# =============================================================================

@dataclass
class GameConfig:
    """
    Configuration settings for a game instance.

    rows, columns and search_depth default from the difficulty when left
    unset.
    """
    # Basic settings
    difficulty: Difficulty = Difficulty.MEDIUM
    rows: Optional[int] = None
    columns: Optional[int] = None
    algorithm: MazeAlgorithm = MazeAlgorithm.PURE_RECURSIVE
    search_depth: Optional[int] = None

    # Power-up settings
    max_powerups: int = 3
    starting_powerups: int = 3
    freeze_duration: int = DEFAULT_FREEZE_DURATION
    powerup_award_interval: int = 10

    # Spawn placement
    spawn_min_evader_distance: int = 10
    spawn_min_goal_distance: int = 8

    # Random seed for reproducibility
    seed: Optional[int] = None

    def __post_init__(self):
        default_rows, default_columns = self.difficulty.maze_size
        if self.rows is None:
            self.rows = default_rows
        if self.columns is None:
            self.columns = default_columns
        if self.search_depth is None:
            self.search_depth = self.difficulty.search_depth
        if self.rows < 2 or self.columns < 2:
            raise ValueError(f"Maze must be at least 2x2, got {self.rows}x{self.columns}")
        if not 0 <= self.search_depth <= 4:
            raise ValueError(f"search_depth must be between 0 and 4, got {self.search_depth}")
        self.starting_powerups = min(self.starting_powerups, self.max_powerups, len(PowerupType))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "difficulty": self.difficulty.name,
            "rows": self.rows,
            "columns": self.columns,
            "algorithm": self.algorithm.name,
            "search_depth": self.search_depth,
            "max_powerups": self.max_powerups,
            "starting_powerups": self.starting_powerups,
            "freeze_duration": self.freeze_duration,
            "powerup_award_interval": self.powerup_award_interval,
            "spawn_min_evader_distance": self.spawn_min_evader_distance,
            "spawn_min_goal_distance": self.spawn_min_goal_distance,
            "seed": self.seed
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameConfig':
        values = dict(data)
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown config fields: {sorted(unknown)}")
        if "difficulty" in values:
            values["difficulty"] = parse_enum(Difficulty, values["difficulty"])
        if "algorithm" in values:
            values["algorithm"] = parse_enum(MazeAlgorithm, values["algorithm"])
        return cls(**values)


# =============================================================================
# Action Result
# =============================================================================

@dataclass
class ActionResult:
    """
    Result of executing an action against the live game.

    action is None when a turn passes without one (frozen or trapped actor).
    """
    action: Optional[Action]
    success: bool
    message: str = ""
    effects: List[str] = field(default_factory=list)
    dash_path: List[Position] = field(default_factory=list)
    teleport_destination: Optional[Position] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        return {
            "action": self.action.to_dict() if self.action else None,
            "success": self.success,
            "message": self.message,
            "effects": self.effects,
            "dash_path": [p.to_dict() for p in self.dash_path],
            "teleport_destination": (
                self.teleport_destination.to_dict() if self.teleport_destination else None
            )
        }
