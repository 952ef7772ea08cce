# =============================================================================
# Maze Chase - Game State
# =============================================================================
"""
The complete game state representation.

A GameState is the unit of simulation: both actors' positions, freeze
counters and inventories plus a grid it owns outright. The search clones
it once per branch, so no two states ever share a grid or an inventory.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import uuid

from .enums import Actor, GamePhase, VictoryCondition, parse_enum
from .data_structures import Position, Powerup
from .grid import MazeGrid


@dataclass
class GameState:
    """
    Complete state of a chase.

    The first block of fields is everything the search needs. The rest is
    live-game bookkeeping that the turn driver maintains and clones carry
    along by value.
    """

    # ==========================================================================
    # Board
    # ==========================================================================
    grid: MazeGrid
    pursuer_position: Position
    evader_position: Position

    # ==========================================================================
    # Actor State
    # ==========================================================================
    pursuer_frozen_turns: int = 0
    evader_frozen_turns: int = 0
    pursuer_powerups: List[Powerup] = field(default_factory=list)
    evader_powerups: List[Powerup] = field(default_factory=list)

    # ==========================================================================
    # Game Progress
    # ==========================================================================
    game_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    turn_number: int = 0
    phase: GamePhase = GamePhase.SETUP
    winner: Optional[Actor] = None
    victory_condition: Optional[VictoryCondition] = None
    game_over: bool = False

    # ==========================================================================
    # Properties
    # ==========================================================================

    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def columns(self) -> int:
        return self.grid.columns

    @property
    def goal(self) -> Position:
        """The evader's target cell"""
        return self.grid.goal_position()

    # ==========================================================================
    # Per-Actor Access
    # ==========================================================================

    def get_position(self, actor: Actor) -> Position:
        if actor == Actor.PURSUER:
            return self.pursuer_position
        return self.evader_position

    def set_position(self, actor: Actor, position: Position):
        if actor == Actor.PURSUER:
            self.pursuer_position = position
        else:
            self.evader_position = position

    def get_frozen_turns(self, actor: Actor) -> int:
        if actor == Actor.PURSUER:
            return self.pursuer_frozen_turns
        return self.evader_frozen_turns

    def set_frozen_turns(self, actor: Actor, turns: int):
        if actor == Actor.PURSUER:
            self.pursuer_frozen_turns = turns
        else:
            self.evader_frozen_turns = turns

    def is_frozen(self, actor: Actor) -> bool:
        return self.get_frozen_turns(actor) > 0

    def get_powerups(self, actor: Actor) -> List[Powerup]:
        """The actor's inventory itself, not a copy"""
        if actor == Actor.PURSUER:
            return self.pursuer_powerups
        return self.evader_powerups

    # ==========================================================================
    # Victory Condition Checks
    # ==========================================================================

    def check_victory_conditions(self) -> Optional[Tuple[Actor, VictoryCondition]]:
        """
        Check whether the chase is decided.
        Returns (winner, condition) or None if the game continues.

        Sharing a cell is a capture no matter who moved, and it takes
        precedence over the evader standing on the goal.
        """
        if self.pursuer_position == self.evader_position:
            return (Actor.PURSUER, VictoryCondition.CAPTURED)
        if self.evader_position == self.goal:
            return (Actor.EVADER, VictoryCondition.REACHED_GOAL)
        return None

    def is_terminal(self) -> bool:
        """Check if the game has ended"""
        return self.game_over or self.check_victory_conditions() is not None

    def end_game(self, winner: Actor, condition: VictoryCondition):
        """Mark the game as ended"""
        self.winner = winner
        self.victory_condition = condition
        self.game_over = True
        self.phase = GamePhase.GAME_OVER

    # ==========================================================================
    # Cloning (for AI Search)
    # ==========================================================================

    def clone(self) -> 'GameState':
        """
        Create a deep copy of the game state.
        The grid and every inventory entry are copied, never shared.
        """
        return GameState(
            grid=self.grid.clone(),
            pursuer_position=self.pursuer_position,
            evader_position=self.evader_position,
            pursuer_frozen_turns=self.pursuer_frozen_turns,
            evader_frozen_turns=self.evader_frozen_turns,
            pursuer_powerups=[p.clone() for p in self.pursuer_powerups],
            evader_powerups=[p.clone() for p in self.evader_powerups],
            game_id=self.game_id,
            turn_number=self.turn_number,
            phase=self.phase,
            winner=self.winner,
            victory_condition=self.victory_condition,
            game_over=self.game_over
        )

    # ==========================================================================
    # Serialization
    # ==========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary for JSON serialization"""
        return {
            "game_id": self.game_id,
            "grid": self.grid.to_dict(),
            "pursuer_position": self.pursuer_position.to_dict(),
            "evader_position": self.evader_position.to_dict(),
            "pursuer_frozen_turns": self.pursuer_frozen_turns,
            "evader_frozen_turns": self.evader_frozen_turns,
            "pursuer_powerups": [p.to_dict() for p in self.pursuer_powerups],
            "evader_powerups": [p.to_dict() for p in self.evader_powerups],
            "turn_number": self.turn_number,
            "phase": self.phase.name,
            "winner": self.winner.name if self.winner else None,
            "victory_condition": self.victory_condition.name if self.victory_condition else None,
            "game_over": self.game_over
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        """
        Rebuild a state from to_dict() output.

        Only grid and the two positions are required; everything else
        falls back to a fresh game's defaults.

        Raises:
            ValueError: if the data is malformed or a position lies off the grid
        """
        try:
            grid = MazeGrid.from_dict(data["grid"])
            pursuer = Position.from_dict(data["pursuer_position"])
            evader = Position.from_dict(data["evader_position"])
        except KeyError as exc:
            raise ValueError(f"Game state is missing {exc}") from exc
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed game state: {exc}") from exc

        for name, position in (("pursuer", pursuer), ("evader", evader)):
            if not grid.in_bounds(position):
                raise ValueError(f"{name} position {position} lies outside the grid")

        try:
            winner = data.get("winner")
            condition = data.get("victory_condition")
            state = cls(
                grid=grid,
                pursuer_position=pursuer,
                evader_position=evader,
                pursuer_frozen_turns=int(data.get("pursuer_frozen_turns", 0)),
                evader_frozen_turns=int(data.get("evader_frozen_turns", 0)),
                pursuer_powerups=[Powerup.from_dict(p) for p in data.get("pursuer_powerups", [])],
                evader_powerups=[Powerup.from_dict(p) for p in data.get("evader_powerups", [])],
                turn_number=int(data.get("turn_number", 0)),
                phase=parse_enum(GamePhase, data.get("phase", "SETUP")),
                winner=parse_enum(Actor, winner) if winner else None,
                victory_condition=parse_enum(VictoryCondition, condition) if condition else None,
                game_over=bool(data.get("game_over", False))
            )
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed game state: {exc}") from exc
        if data.get("game_id"):
            state.game_id = data["game_id"]
        return state

    # ==========================================================================
    # String Representation
    # ==========================================================================

    def __str__(self) -> str:
        """Human-readable summary of game state"""
        def inventory(powerups: List[Powerup]) -> str:
            return ", ".join(p.name for p in powerups) or "-"

        lines = [
            f"=== Game {self.game_id[:8]} ===",
            f"Turn: {self.turn_number}  Phase: {self.phase}",
            f"Maze: {self.rows}x{self.columns}, goal at {self.goal}",
            f"PURSUER: at {self.pursuer_position}, frozen={self.pursuer_frozen_turns}, "
            f"items=[{inventory(self.pursuer_powerups)}]",
            f"EVADER:  at {self.evader_position}, frozen={self.evader_frozen_turns}, "
            f"items=[{inventory(self.evader_powerups)}]",
        ]

        if self.game_over:
            lines.append(f"\nGAME OVER: {self.winner.name} wins via {self.victory_condition}")

        return "\n".join(lines)
