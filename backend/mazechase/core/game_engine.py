# =============================================================================
# Maze Chase - Game Engine
# =============================================================================
"""
Main game engine that orchestrates gameplay.
Manages turns, validates actions, updates state, and checks victory conditions.

Turn order: the evader acts, then the pursuer. The turn counter advances
after every pursuer turn. A frozen actor loses its turn and its freeze
counter drops by one; a frozen evader hands the move straight back to
the pursuer.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

from .enums import (
    Actor, ActionType, Difficulty, GamePhase, MazeAlgorithm, PowerupType
)
from .data_structures import Action, ActionResult, GameConfig, Powerup
from .game_state import GameState
from .maze_generation import generate_maze, place_actors
from .actions import ActionValidator, ActionExecutor
from .pathfinding import direction_towards, find_shortest_path


logger = logging.getLogger(__name__)


class GameEventType(Enum):
    """Types of events that can be emitted by the game engine"""
    GAME_STARTED = auto()
    TURN_STARTED = auto()
    ACTION_PERFORMED = auto()
    ACTION_FAILED = auto()
    TURN_ENDED = auto()
    TURN_SKIPPED = auto()
    POWERUP_AWARDED = auto()
    VICTORY = auto()


@dataclass
class GameEvent:
    """Represents a game event for logging and UI updates"""
    event_type: GameEventType
    turn: int
    actor: Optional[Actor] = None
    action: Optional[Action] = None
    result: Optional[ActionResult] = None
    message: str = ""
    data: dict = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return {
            "event_type": self.event_type.name,
            "turn": self.turn,
            "actor": self.actor.name if self.actor else None,
            "action": self.action.to_dict() if self.action else None,
            "message": self.message,
            "data": self.data,
            "timestamp": self.timestamp,
        }


class GameEngine:
    """
    Main game engine class.

    Responsibilities:
    - Generate the maze and place both actors
    - Validate and execute evader actions
    - Ask the pursuer agent for its move and execute it
    - Manage turn flow, freezes and power-up awards
    - Check victory conditions
    - Emit events for UI/logging

    Example usage:
        engine = GameEngine(GameConfig(difficulty=Difficulty.EASY, seed=7))
        engine.initialize_game()

        while not engine.is_game_over():
            engine.perform_evader_action(choose(engine.get_valid_actions()))
            if not engine.is_game_over():
                engine.take_pursuer_turn()
    """

    def __init__(self, config: Optional[GameConfig] = None, agent=None):
        """
        Initialize the game engine.

        Args:
            config: Game configuration, defaults to GameConfig()
            agent: Pursuer decision maker with get_best_action(state); a
                MinimaxAgent at the configured depth when omitted
        """
        self.config = config or GameConfig()
        self.state: Optional[GameState] = None
        self.rng = random.Random(self.config.seed)
        self.validator = ActionValidator(self.config)
        self.executor = ActionExecutor(self.config, rng=self.rng)

        if agent is None:
            from ..ai.minimax_agent import MinimaxAgent
            agent = MinimaxAgent(depth=self.config.search_depth)
        self.agent = agent

        # Event system
        self.event_listeners: Dict[GameEventType, List[Callable]] = {}
        self.event_history: List[GameEvent] = []
        self.action_history: List[dict] = []

        self._reset_stats()

    # =========================================================================
    # Game Initialization
    # =========================================================================

    def initialize_game(self) -> GameState:
        """
        Generate a maze, place both actors and deal starting power-ups.

        Returns:
            The initialized game state, waiting on the evader
        """
        config = self.config
        grid = generate_maze(config.algorithm, config.rows, config.columns, rng=self.rng)
        goal = grid.goal_position()
        evader_start, pursuer_start = place_actors(grid, goal, self.rng, config)

        self.state = GameState(
            grid=grid,
            pursuer_position=pursuer_start,
            evader_position=evader_start,
            pursuer_powerups=self._deal_starting_powerups(),
            evader_powerups=self._deal_starting_powerups(),
            turn_number=1,
            phase=GamePhase.EVADER_TURN,
        )
        self.event_history.clear()
        self.action_history.clear()
        self._reset_stats()

        logger.info("Game %s started: %dx%d %s maze, evader at %s, pursuer at %s",
                    self.state.game_id[:8], config.rows, config.columns,
                    config.algorithm, evader_start, pursuer_start)

        self._emit_event(GameEvent(
            event_type=GameEventType.GAME_STARTED,
            turn=self.state.turn_number,
            message=f"Game started! Difficulty: {config.difficulty.name}, Maze: {config.algorithm}",
            data={
                "rows": config.rows,
                "columns": config.columns,
                "difficulty": config.difficulty.name,
                "algorithm": config.algorithm.name,
            }
        ))
        self._emit_turn_started(Actor.EVADER)
        return self.state

    def load_state(self, state: GameState):
        """Continue from an existing state; an unstarted state opens on the evader's turn"""
        self.state = state
        if state.phase == GamePhase.SETUP:
            state.phase = GamePhase.EVADER_TURN
            state.turn_number = max(state.turn_number, 1)

    def _deal_starting_powerups(self) -> List[Powerup]:
        """Distinct random power-ups up to starting_powerups"""
        chosen = self.rng.sample(list(PowerupType), self.config.starting_powerups)
        return [Powerup.create(t, self.config.freeze_duration) for t in chosen]

    # =========================================================================
    # Action Management
    # =========================================================================

    def get_valid_actions(self) -> List[Action]:
        """Get all valid actions for the actor whose turn it is"""
        actor = self.get_current_actor()
        if actor is None:
            return []
        return self.validator.get_valid_actions(self.state, actor)

    def perform_evader_action(self, action: Action) -> ActionResult:
        """
        Perform the evader's action.

        Args:
            action: The action to perform

        Returns:
            ActionResult describing what happened
        """
        if self.state is None:
            return ActionResult(action=action, success=False, message="Game not initialized")
        if self.state.game_over:
            return ActionResult(action=action, success=False, message="Game is over")
        if self.state.phase != GamePhase.EVADER_TURN:
            return ActionResult(action=action, success=False, message="Not the evader's turn")

        result = self.executor.execute(self.state, action, Actor.EVADER)
        if not result.success:
            self._emit_event(GameEvent(
                event_type=GameEventType.ACTION_FAILED,
                turn=self.state.turn_number,
                actor=Actor.EVADER,
                action=action,
                message=f"Action failed: {result.message}"
            ))
            return result

        self._record_action(Actor.EVADER, result)
        if self._check_victory():
            return result

        self._end_evader_turn()
        return result

    def take_pursuer_turn(self) -> ActionResult:
        """
        Let the pursuer agent act.

        A frozen pursuer skips. When the agent finds nothing the pursuer
        steps along the shortest path toward the evader, and if there is
        no such path the turn ends without an action.
        """
        if self.state is None:
            return ActionResult(action=None, success=False, message="Game not initialized")
        if self.state.game_over:
            return ActionResult(action=None, success=False, message="Game is over")
        if self.state.phase != GamePhase.PURSUER_TURN:
            return ActionResult(action=None, success=False, message="Not the pursuer's turn")

        if self.state.is_frozen(Actor.PURSUER):
            self.state.pursuer_frozen_turns -= 1
            self.stats["turns_skipped"] += 1
            message = f"Pursuer is frozen, turn skipped ({self.state.pursuer_frozen_turns} left)"
            logger.info(message)
            self._emit_event(GameEvent(
                event_type=GameEventType.TURN_SKIPPED,
                turn=self.state.turn_number,
                actor=Actor.PURSUER,
                message=message
            ))
            self._end_pursuer_turn()
            return ActionResult(action=None, success=True, message=message)

        action = self.agent.get_best_action(self.state.clone())
        if action is None:
            action = self._fallback_action()
            if action is None:
                logger.error("Pursuer is trapped with no path to the evader; ending turn")
                self._end_pursuer_turn()
                return ActionResult(action=None, success=False,
                                    message="Pursuer has no action and no path; turn ends")
            logger.warning("Agent returned no action, falling back to %s", action)
            self.stats["fallback_moves"] += 1

        result = self.executor.execute(self.state, action, Actor.PURSUER)
        if not result.success:
            # The agent only proposes legal actions, so this is a bug in the agent
            logger.error("Pursuer action %s rejected: %s", action, result.message)
            self._end_pursuer_turn()
            return result

        self._record_action(Actor.PURSUER, result)
        if self._check_victory():
            return result

        self._end_pursuer_turn()
        return result

    def _fallback_action(self) -> Optional[Action]:
        """One step along the shortest path toward the evader"""
        path = find_shortest_path(self.state.grid, self.state.pursuer_position, self.state.evader_position)
        if path is None or len(path) < 2:
            return None
        return Action.move(direction_towards(path[0], path[1]))

    def _record_action(self, actor: Actor, result: ActionResult):
        action = result.action
        self.action_history.append({
            "turn": self.state.turn_number,
            "actor": actor.name,
            **result.to_dict(),
        })
        self._update_stats(actor, action)
        self._emit_event(GameEvent(
            event_type=GameEventType.ACTION_PERFORMED,
            turn=self.state.turn_number,
            actor=actor,
            action=action,
            result=result,
            message=result.message
        ))

    # =========================================================================
    # Turn Management
    # =========================================================================

    def _end_evader_turn(self):
        """Award power-ups if due and hand the turn to the pursuer"""
        self._emit_event(GameEvent(
            event_type=GameEventType.TURN_ENDED,
            turn=self.state.turn_number,
            actor=Actor.EVADER,
            message="Turn ended for EVADER"
        ))

        interval = self.config.powerup_award_interval
        if interval > 0 and self.state.turn_number % interval == 0:
            self._award_powerups()

        self.state.phase = GamePhase.PURSUER_TURN
        self._emit_turn_started(Actor.PURSUER)

    def _end_pursuer_turn(self):
        """Advance the turn counter; a frozen evader loses its turn"""
        self._emit_event(GameEvent(
            event_type=GameEventType.TURN_ENDED,
            turn=self.state.turn_number,
            actor=Actor.PURSUER,
            message="Turn ended for PURSUER"
        ))
        self.state.turn_number += 1

        if self.state.is_frozen(Actor.EVADER):
            self.state.evader_frozen_turns -= 1
            self.stats["turns_skipped"] += 1
            message = f"Evader is frozen, turn skipped ({self.state.evader_frozen_turns} left)"
            logger.info("Turn %d: %s", self.state.turn_number, message)
            self._emit_event(GameEvent(
                event_type=GameEventType.TURN_SKIPPED,
                turn=self.state.turn_number,
                actor=Actor.EVADER,
                message=message
            ))
            self.state.phase = GamePhase.PURSUER_TURN
            self._emit_turn_started(Actor.PURSUER)
            return

        self.state.phase = GamePhase.EVADER_TURN
        self._emit_turn_started(Actor.EVADER)

    def _award_powerups(self):
        """Give each actor below max_powerups one random power-up"""
        for actor in Actor:
            inventory = self.state.get_powerups(actor)
            if len(inventory) >= self.config.max_powerups:
                logger.debug("%s inventory is full, no power-up awarded", actor.name)
                continue
            powerup = Powerup.create(self.rng.choice(list(PowerupType)), self.config.freeze_duration)
            inventory.append(powerup)
            self._emit_event(GameEvent(
                event_type=GameEventType.POWERUP_AWARDED,
                turn=self.state.turn_number,
                actor=actor,
                message=f"{actor.name} received {powerup.name}",
                data={"powerup": powerup.to_dict()}
            ))

    def _emit_turn_started(self, actor: Actor):
        logger.debug("Turn %d: %s to act", self.state.turn_number, actor.name)
        self._emit_event(GameEvent(
            event_type=GameEventType.TURN_STARTED,
            turn=self.state.turn_number,
            actor=actor,
            message=f"Turn {self.state.turn_number}: {actor.name}'s turn"
        ))

    def _check_victory(self) -> bool:
        """End the game if it is decided"""
        victory_result = self.state.check_victory_conditions()
        if victory_result is None:
            return False

        winner, condition = victory_result
        self.state.end_game(winner, condition)
        logger.info("Game over on turn %d: %s wins (%s)", self.state.turn_number, winner.name, condition)
        self._emit_event(GameEvent(
            event_type=GameEventType.VICTORY,
            turn=self.state.turn_number,
            actor=winner,
            message=f"Game Over! {winner.name} wins by {condition}!",
            data={"winner": winner.name, "condition": condition.name}
        ))
        return True

    # =========================================================================
    # State Queries
    # =========================================================================

    def _require_state(self) -> GameState:
        if self.state is None:
            raise RuntimeError("Game not initialized")
        return self.state

    def get_current_actor(self) -> Optional[Actor]:
        """The actor whose turn it is, None once the game is over"""
        state = self._require_state()
        phases = {
            GamePhase.EVADER_TURN: Actor.EVADER,
            GamePhase.PURSUER_TURN: Actor.PURSUER,
        }
        return phases.get(state.phase)

    def is_game_over(self) -> bool:
        """Check if the game is over"""
        return self.state is not None and self.state.game_over

    def get_winner(self) -> Optional[Actor]:
        """Get the winner if game is over"""
        if not self.is_game_over():
            return None
        return self.state.winner

    def get_state_copy(self) -> GameState:
        """Get a copy of the current game state (for AI simulation)"""
        return self._require_state().clone()

    # =========================================================================
    # Event System
    # =========================================================================

    def add_event_listener(self, event_type: GameEventType, callback: Callable[[GameEvent], None]):
        """Register a callback for a specific event type"""
        if event_type not in self.event_listeners:
            self.event_listeners[event_type] = []
        self.event_listeners[event_type].append(callback)

    def remove_event_listener(self, event_type: GameEventType, callback: Callable):
        """Remove a registered callback"""
        if event_type in self.event_listeners:
            self.event_listeners[event_type] = [
                cb for cb in self.event_listeners[event_type] if cb != callback
            ]

    def _emit_event(self, event: GameEvent):
        """Emit an event to all registered listeners"""
        self.event_history.append(event)

        listeners = self.event_listeners.get(event.event_type, [])
        for callback in listeners:
            try:
                callback(event)
            except Exception:
                logger.exception("Event listener error for %s", event.event_type.name)

    def get_event_history(self,
                          event_type: Optional[GameEventType] = None,
                          limit: Optional[int] = None) -> List[GameEvent]:
        """Get event history, optionally filtered by type"""
        events = self.event_history

        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]

        if limit is not None:
            events = events[-limit:]

        return events

    # =========================================================================
    # Statistics
    # =========================================================================

    def _reset_stats(self):
        """Reset game statistics"""
        self.stats = {
            "total_actions": 0,
            "evader_actions": 0,
            "pursuer_actions": 0,
            "powerups_used": 0,
            "walls_broken": 0,
            "turns_skipped": 0,
            "fallback_moves": 0,
        }

    def _update_stats(self, actor: Actor, action: Action):
        """Update statistics after an action"""
        self.stats["total_actions"] += 1
        self.stats[f"{actor}_actions"] += 1

        if action.action_type == ActionType.USE_POWERUP:
            self.stats["powerups_used"] += 1
            if action.powerup_type == PowerupType.BREAK_WALL:
                self.stats["walls_broken"] += 1

    def get_stats(self) -> dict:
        """Get current game statistics"""
        return dict(self.stats)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict:
        """Serialize game engine state to dictionary"""
        actor = self.get_current_actor() if self.state else None
        return {
            "config": self.config.to_dict(),
            "state": self.state.to_dict() if self.state else None,
            "current_actor": actor.name if actor else None,
            "stats": self.stats,
            "event_count": len(self.event_history),
        }


# =============================================================================
# Convenience Functions
# =============================================================================

def create_game(
    difficulty: Difficulty = Difficulty.MEDIUM,
    algorithm: MazeAlgorithm = MazeAlgorithm.PURE_RECURSIVE,
    seed: Optional[int] = None,
    **overrides
) -> GameEngine:
    """
    Create and initialize a new game.

    Args:
        difficulty: Game difficulty
        algorithm: Maze carving strategy
        seed: Random seed
        **overrides: Any other GameConfig field

    Returns:
        Initialized GameEngine
    """
    config = GameConfig(difficulty=difficulty, algorithm=algorithm, seed=seed, **overrides)
    engine = GameEngine(config)
    engine.initialize_game()
    return engine


def play_random_game(
    difficulty: Difficulty = Difficulty.EASY,
    max_turns: int = 200,
    seed: Optional[int] = None
) -> Dict:
    """
    Play a random evader against the minimax pursuer (for testing/demonstration).

    Returns:
        Game results dictionary
    """
    engine = create_game(difficulty=difficulty, seed=seed)
    rng = random.Random(seed)

    while not engine.is_game_over() and engine.state.turn_number <= max_turns:
        if engine.get_current_actor() == Actor.EVADER:
            actions = engine.get_valid_actions()
            if not actions:
                break
            engine.perform_evader_action(rng.choice(actions))
        else:
            engine.take_pursuer_turn()

    winner = engine.get_winner()
    return {
        "winner": winner.name if winner else "DRAW",
        "victory_condition": engine.state.victory_condition.name if engine.state.victory_condition else None,
        "turns": engine.state.turn_number,
        "stats": engine.get_stats(),
    }
