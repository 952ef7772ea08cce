# =============================================================================
# Maze Chase - Minimax AI Agent
# =============================================================================
"""
Hand-coded bounded-depth minimax for the pursuer.

The pursuer maximizes and the evader minimizes. Every ply runs on its own
clone of the state, so sibling branches never see each other's wall
breaks or spent power-ups. There is no pruning; depth is capped at 4.

On top of the plain search the root step:
1. Takes an immediate capture without searching at all
2. Adds strategic bonuses for power-ups, scaled by a willingness factor
   that grows as the evader nears the goal
3. Nudges moves along the current shortest chase path to win ties
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, Optional

from ..core.enums import Actor, ActionType, Difficulty, PowerupType
from ..core.data_structures import Action
from ..core.game_state import GameState
from ..core.actions import ActionSimulator, ActionValidator
from ..core.pathfinding import find_shortest_path, path_length


logger = logging.getLogger(__name__)


# Scores at or beyond this magnitude mean the game is already decided
TERMINAL_THRESHOLD = 1000.0

MAX_SEARCH_DEPTH = 4


# =============================================================================
# State Evaluator
# =============================================================================

class StateEvaluator:
    """
    Scores states from the pursuer's perspective.
    Positive values favor the pursuer.
    """

    # Weights for the evaluation terms
    WEIGHTS = {
        # Terminal outcomes
        "capture": 10000.0,
        "evader_escaped": -10000.0,
        "pursuer_on_goal": -5000.0,

        # Chase
        "chase_distance": -10.0,

        # Evader closing in on the goal
        "urgency_radius": 5,
        "urgency": -100.0,

        # Freeze status
        "evader_frozen": 80.0,
        "pursuer_frozen": -80.0,
    }

    def evaluate(self, state: GameState) -> float:
        """
        Evaluate the state for the pursuer.

        Path lengths count cells, start and end included; a missing path
        counts as UNREACHABLE.
        """
        goal = state.goal

        # Check for terminal states first
        if state.pursuer_position == state.evader_position:
            return self.WEIGHTS["capture"]
        if state.evader_position == goal:
            return self.WEIGHTS["evader_escaped"]
        if state.pursuer_position == goal:
            return self.WEIGHTS["pursuer_on_goal"]

        chase = path_length(find_shortest_path(state.grid, state.pursuer_position, state.evader_position))
        to_goal = path_length(find_shortest_path(state.grid, state.evader_position, goal))

        score = chase * self.WEIGHTS["chase_distance"]

        radius = self.WEIGHTS["urgency_radius"]
        if to_goal < radius:
            score += (radius - to_goal) * self.WEIGHTS["urgency"]

        if state.evader_frozen_turns > 0:
            score += self.WEIGHTS["evader_frozen"]
        if state.pursuer_frozen_turns > 0:
            score += self.WEIGHTS["pursuer_frozen"]

        return score

    @staticmethod
    def is_terminal_score(score: float) -> bool:
        return abs(score) >= TERMINAL_THRESHOLD


# =============================================================================
# Minimax Agent
# =============================================================================

@dataclass
class SearchStats:
    """Statistics for one decision"""
    depth: int = 0
    nodes_searched: int = 0
    time_ms: float = 0.0
    best_move: Optional[Action] = None
    best_score: float = 0.0
    willingness: float = 0.0
    immediate_capture: bool = False

    def to_dict(self) -> Dict:
        return {
            "depth": self.depth,
            "nodes_searched": self.nodes_searched,
            "time_ms": self.time_ms,
            "best_move": self.best_move.to_dict() if self.best_move else None,
            "best_score": self.best_score,
            "willingness": self.willingness,
            "immediate_capture": self.immediate_capture,
        }


class MinimaxAgent:
    """
    Minimax pursuer.

    Example usage:
        agent = MinimaxAgent(depth=2)
        action = agent.get_best_action(state)
    """

    # Root-level strategic bonuses
    BONUSES = {
        "shortcut_min_improvement": 4,     # Break Wall / Jump must save this many cells
        "shortcut_per_cell": 15.0,
        "teleport_per_cell": 10.0,
        "freeze": 45.0,
        "path_tie_break": 0.01,
    }

    # Willingness ramps from its floor at the far distance to 1.0 at the near one
    WILLINGNESS_FAR = 30
    WILLINGNESS_NEAR = 5
    WILLINGNESS_FLOOR = 0.2

    def __init__(self, depth: int = 2):
        """
        Initialize the agent.

        Args:
            depth: Default search depth in plies, 0 to 4
        """
        self.depth = self._check_depth(depth)
        self.validator = ActionValidator()
        self.simulator = ActionSimulator()
        self.evaluator = StateEvaluator()

        # Search state
        self.nodes_searched = 0
        self.last_stats: Optional[SearchStats] = None

    @staticmethod
    def _check_depth(depth: int) -> int:
        if not 0 <= depth <= MAX_SEARCH_DEPTH:
            raise ValueError(f"Search depth must be between 0 and {MAX_SEARCH_DEPTH}, got {depth}")
        return depth

    # =========================================================================
    # Root Search
    # =========================================================================

    def get_best_action(self, state: GameState, depth: Optional[int] = None) -> Optional[Action]:
        """
        Find the pursuer's best action.

        Args:
            state: Current game state; never modified
            depth: Plies to search, defaults to the agent's depth

        Returns:
            The best action with its score filled in, or None if the pursuer
            has no legal action
        """
        depth = self.depth if depth is None else self._check_depth(depth)
        start_time = time.time()
        self.nodes_searched = 0
        stats = SearchStats(depth=depth)

        actions = self.validator.get_valid_actions(state, Actor.PURSUER)

        # Immediate capture beats any amount of thinking
        for action in actions:
            if action.is_move and state.pursuer_position.step(action.direction) == state.evader_position:
                logger.info("Immediate capture available: %s", action)
                action.score = self.evaluator.WEIGHTS["capture"]
                stats.immediate_capture = True
                return self._finish(stats, action, start_time)

        goal = state.goal
        ideal_path = find_shortest_path(state.grid, state.pursuer_position, state.evader_position)
        if ideal_path is not None and len(ideal_path) > 1:
            ideal_next_step = ideal_path[1]
        else:
            ideal_next_step = state.pursuer_position
        chase_before = path_length(ideal_path)
        evader_to_goal = path_length(find_shortest_path(state.grid, state.evader_position, goal))

        willingness = self.willingness(evader_to_goal)
        stats.willingness = willingness

        best_action: Optional[Action] = None
        best_score = float("-inf")

        for action in actions:
            new_state = self.simulator.simulate(state, action, Actor.PURSUER)
            score = self.minimax(new_state, depth - 1, False)

            if action.action_type == ActionType.USE_POWERUP:
                bonus = self._strategic_bonus(action, new_state, chase_before, evader_to_goal)
                score += bonus * willingness
            elif state.pursuer_position.step(action.direction) == ideal_next_step:
                score += self.BONUSES["path_tie_break"]

            logger.debug("Candidate %s scored %.2f", action, score)

            # Strictly greater keeps the first of equal scores
            if score > best_score:
                best_score = score
                action.score = score
                best_action = action

        if best_action is None:
            logger.info("Pursuer has no legal action")
        return self._finish(stats, best_action, start_time)

    def _strategic_bonus(self, action: Action, new_state: GameState,
                         chase_before: int, evader_to_goal_before: int) -> float:
        """Unscaled bonus for using a power-up"""
        if action.powerup_type in (PowerupType.BREAK_WALL, PowerupType.JUMP):
            chase_after = path_length(
                find_shortest_path(new_state.grid, new_state.pursuer_position, new_state.evader_position)
            )
            improvement = chase_before - chase_after
            if improvement >= self.BONUSES["shortcut_min_improvement"]:
                return improvement * self.BONUSES["shortcut_per_cell"]
            return 0.0

        if action.powerup_type == PowerupType.TELEPORT:
            after = path_length(find_shortest_path(new_state.grid, new_state.evader_position, new_state.goal))
            worsening = after - evader_to_goal_before
            if worsening > 0:
                return worsening * self.BONUSES["teleport_per_cell"]
            return 0.0

        if action.powerup_type == PowerupType.FREEZE:
            return self.BONUSES["freeze"]

        return 0.0

    def willingness(self, evader_to_goal: int) -> float:
        """
        How eager the pursuer is to spend power-ups, from 0.2 when the
        evader is 30 or more cells from the goal up to 1.0 at 5 or fewer.
        """
        span = self.WILLINGNESS_NEAR - self.WILLINGNESS_FAR
        t = (evader_to_goal - self.WILLINGNESS_FAR) / span
        t = max(0.0, min(1.0, t))
        return self.WILLINGNESS_FLOOR + t * (1.0 - self.WILLINGNESS_FLOOR)

    def _finish(self, stats: SearchStats, action: Optional[Action], start_time: float) -> Optional[Action]:
        stats.nodes_searched = self.nodes_searched
        stats.time_ms = (time.time() - start_time) * 1000
        stats.best_move = action
        stats.best_score = action.score if action else 0.0
        self.last_stats = stats
        if action is not None:
            logger.info("Pursuer chose %s (score %.2f, %d nodes, %.1f ms)",
                        action, action.score, stats.nodes_searched, stats.time_ms)
        return action

    # =========================================================================
    # Recursive Search
    # =========================================================================

    def minimax(self, state: GameState, depth: int, maximizing: bool) -> float:
        """
        Plain minimax value of state.

        Args:
            state: State to score; never modified
            depth: Remaining plies; 0 or less evaluates directly
            maximizing: True when the pursuer moves next
        """
        self.nodes_searched += 1

        if depth <= 0:
            return self.evaluator.evaluate(state)

        # The game may already be decided
        score = self.evaluator.evaluate(state)
        if StateEvaluator.is_terminal_score(score):
            return score

        actor = Actor.PURSUER if maximizing else Actor.EVADER
        actions = self.validator.get_valid_actions(state, actor)
        if not actions:
            return score

        values = (
            self.minimax(self.simulator.simulate(state, action, actor), depth - 1, not maximizing)
            for action in actions
        )
        if maximizing:
            return max(values)
        return min(values)

    def get_search_stats(self) -> Dict:
        """Get statistics from the most recent decision"""
        if self.last_stats is None:
            return {}
        return self.last_stats.to_dict()


# =============================================================================
# Convenience Functions
# =============================================================================

def create_minimax_agent(difficulty: Difficulty = Difficulty.MEDIUM) -> MinimaxAgent:
    """
    Create a minimax agent with difficulty-appropriate depth.

    Args:
        difficulty: Game difficulty

    Returns:
        Configured MinimaxAgent instance
    """
    settings = {
        Difficulty.EASY: {"depth": 1},
        Difficulty.MEDIUM: {"depth": 2},
        Difficulty.HARD: {"depth": 3},
        Difficulty.EXPERT: {"depth": 4},
    }

    config = settings.get(difficulty, settings[Difficulty.MEDIUM])
    return MinimaxAgent(depth=config["depth"])
