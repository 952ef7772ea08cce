# =============================================================================
# Core Game Module
# =============================================================================
"""
Core game engine components including:
- Maze grid and graph search
- Game state snapshots
- Actions and rules
- Maze generation and spawn placement
- Turn flow and victory conditions
"""

from .enums import (
    Direction, Actor, PowerupType, ActionType, GamePhase,
    VictoryCondition, MazeAlgorithm, Difficulty
)
from .data_structures import (
    Position, MazeCell, Powerup, Action, GameConfig, ActionResult
)
from .grid import MazeGrid
from .pathfinding import (
    UNREACHABLE, find_shortest_path, calculate_all_distances,
    calculate_distances_from_path, find_furthest_cell, calculate_dash_path,
    path_length, direction_towards
)
from .game_state import GameState
from .actions import ActionValidator, ActionSimulator, ActionExecutor
from .maze_generation import MAZE_ALGORITHMS, generate_maze, place_actors
from .game_engine import GameEngine, GameEvent, GameEventType, create_game, play_random_game

__all__ = [
    # Enums
    "Direction", "Actor", "PowerupType", "ActionType", "GamePhase",
    "VictoryCondition", "MazeAlgorithm", "Difficulty",
    # Data structures
    "Position", "MazeCell", "Powerup", "Action", "GameConfig", "ActionResult",
    "MazeGrid",
    # Graph search
    "UNREACHABLE", "find_shortest_path", "calculate_all_distances",
    "calculate_distances_from_path", "find_furthest_cell", "calculate_dash_path",
    "path_length", "direction_towards",
    # Core classes
    "GameState", "ActionValidator", "ActionSimulator", "ActionExecutor",
    "MAZE_ALGORITHMS", "generate_maze", "place_actors",
    "GameEngine", "GameEvent", "GameEventType",
    # Convenience functions
    "create_game", "play_random_game",
]
