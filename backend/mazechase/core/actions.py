# =============================================================================
# Maze Chase - Actions Module
# =============================================================================
"""
Handles action enumeration, validation, simulation and execution.

ActionValidator lists and checks legal actions. ActionSimulator applies an
action to a clone of a state for the search. ActionExecutor applies the
same rules to the live state, except that Teleport picks a random free
cell instead of the simulator's worst-case cell.
"""

import random
from typing import Callable, Dict, List, Optional, Tuple

from .enums import DIRECTIONS, ActionType, Actor, Direction, PowerupType
from .data_structures import Action, ActionResult, GameConfig, Position
from .game_state import GameState
from .pathfinding import calculate_dash_path, find_furthest_cell


# =============================================================================
# Action Validation
# =============================================================================

class ActionValidator:
    """
    Enumerates and validates actions.

    A frozen actor has no legal action. Otherwise:
    - a Move is legal toward every open passage
    - Break Wall and Jump are offered toward in-bounds neighbours behind a wall
    - Dash is offered toward every in-bounds neighbour, open or not
    - Freeze and Teleport take no direction and are always offered
    """

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()

    def get_valid_actions(self, state: GameState, actor: Actor) -> List[Action]:
        """
        All legal actions for actor, in search order: moves in Direction
        order, then power-ups by slot, then target direction within a slot.
        """
        if state.is_frozen(actor):
            return []

        grid = state.grid
        position = state.get_position(actor)
        actions = [Action.move(d) for d in DIRECTIONS if grid.is_passage_open(position, d)]

        for slot, powerup in enumerate(state.get_powerups(actor)):
            if not powerup.powerup_type.is_directional:
                actions.append(Action.use_powerup(slot, powerup.powerup_type))
                continue
            for direction in DIRECTIONS:
                if self._directional_target_ok(state, position, powerup.powerup_type, direction):
                    actions.append(Action.use_powerup(slot, powerup.powerup_type, direction))

        return actions

    def validate(self, state: GameState, action: Action, actor: Actor) -> Tuple[bool, str]:
        """
        Validate an externally submitted action.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if state.is_frozen(actor):
            return False, f"{actor.name} is frozen for {state.get_frozen_turns(actor)} more turn(s)"

        validators = {
            ActionType.MOVE: self._validate_move,
            ActionType.USE_POWERUP: self._validate_powerup,
        }

        validator = validators.get(action.action_type)
        if validator is None:
            return False, f"Unknown action type: {action.action_type}"

        return validator(state, action, actor)

    def _validate_move(self, state: GameState, action: Action, actor: Actor) -> Tuple[bool, str]:
        """Validate MOVE action"""
        if action.direction is None:
            return False, "Move requires a direction"

        position = state.get_position(actor)
        if not state.grid.is_passage_open(position, action.direction):
            return False, f"A wall blocks the way {action.direction} from {position}"

        return True, ""

    def _validate_powerup(self, state: GameState, action: Action, actor: Actor) -> Tuple[bool, str]:
        """Validate USE_POWERUP action"""
        powerups = state.get_powerups(actor)
        slot = action.powerup_slot
        if slot is None or not 0 <= slot < len(powerups):
            return False, f"No power-up in slot {slot}"

        held = powerups[slot].powerup_type
        if action.powerup_type is not None and action.powerup_type != held:
            return False, f"Slot {slot} holds {held.display_name}, not {action.powerup_type.display_name}"

        if not held.is_directional:
            if action.direction is not None:
                return False, f"{held.display_name} does not take a direction"
            return True, ""

        if action.direction is None:
            return False, f"{held.display_name} requires a target direction"

        position = state.get_position(actor)
        if not self._directional_target_ok(state, position, held, action.direction):
            if not state.grid.in_bounds(position.step(action.direction)):
                return False, f"{held.display_name} cannot target outside the maze"
            return False, f"{held.display_name} needs a wall to the {action.direction}"

        return True, ""

    def _directional_target_ok(self, state: GameState, position: Position,
                               powerup_type: PowerupType, direction: Direction) -> bool:
        """Whether a directional power-up may be aimed toward direction"""
        if not state.grid.in_bounds(position.step(direction)):
            return False
        if powerup_type in (PowerupType.BREAK_WALL, PowerupType.JUMP):
            return not state.grid.is_passage_open(position, direction)
        return True


# =============================================================================
# Action Simulation
# =============================================================================

class ActionSimulator:
    """
    Applies actions to game states.

    simulate() never touches its input: it clones first and mutates the
    clone. Legality is not re-checked; callers pass actions that came from
    ActionValidator.get_valid_actions().
    """

    def simulate(self, state: GameState, action: Action, actor: Actor) -> GameState:
        """Return the state after actor performs action"""
        new_state = state.clone()
        self.apply(new_state, action, actor)
        return new_state

    def apply(self, state: GameState, action: Action, actor: Actor) -> ActionResult:
        """Mutate state in place and describe what happened"""
        if action.action_type == ActionType.MOVE:
            destination = state.get_position(actor).step(action.direction)
            state.set_position(actor, destination)
            return ActionResult(action=action, success=True,
                                message=f"{actor.name} moved {action.direction} to {destination}")

        # The power-up is consumed before its effect resolves
        powerup = state.get_powerups(actor).pop(action.powerup_slot)

        handlers: Dict[PowerupType, Callable[..., ActionResult]] = {
            PowerupType.JUMP: self._apply_jump,
            PowerupType.FREEZE: self._apply_freeze,
            PowerupType.BREAK_WALL: self._apply_break_wall,
            PowerupType.TELEPORT: self._apply_teleport,
            PowerupType.DASH: self._apply_dash,
        }
        return handlers[powerup.powerup_type](state, action, actor, powerup)

    def _apply_jump(self, state, action, actor, powerup) -> ActionResult:
        """Step over whatever wall is in the way"""
        destination = state.get_position(actor).step(action.direction)
        state.set_position(actor, destination)
        return ActionResult(action=action, success=True,
                            message=f"{actor.name} jumped {action.direction} to {destination}")

    def _apply_freeze(self, state, action, actor, powerup) -> ActionResult:
        state.set_frozen_turns(actor.opponent, powerup.freeze_duration)
        return ActionResult(
            action=action, success=True,
            message=f"{actor.opponent.name} frozen for {powerup.freeze_duration} turn(s)",
            effects=[f"freeze:{actor.opponent}"]
        )

    def _apply_break_wall(self, state, action, actor, powerup) -> ActionResult:
        """Clear both sides of the wall; an off-grid target wastes the item"""
        position = state.get_position(actor)
        if not state.grid.in_bounds(position.step(action.direction)):
            return ActionResult(action=action, success=True,
                                message="Break Wall hit the maze boundary and fizzled")
        state.grid.remove_wall_between(position, action.direction)
        return ActionResult(
            action=action, success=True,
            message=f"{actor.name} broke the wall {action.direction} of {position}",
            effects=[f"wall_removed:{position.column},{position.row},{action.direction}"]
        )

    def _apply_teleport(self, state, action, actor, powerup) -> ActionResult:
        destination = self._teleport_destination(state, actor)
        state.set_position(actor.opponent, destination)
        return ActionResult(
            action=action, success=True,
            message=f"{actor.opponent.name} teleported to {destination}",
            teleport_destination=destination
        )

    def _apply_dash(self, state, action, actor, powerup) -> ActionResult:
        start = state.get_position(actor)
        path = calculate_dash_path(state.grid, start, action.direction)
        destination = path[-1] if path else start
        state.set_position(actor, destination)
        return ActionResult(
            action=action, success=True,
            message=f"{actor.name} dashed {len(path)} cell(s) {action.direction} to {destination}",
            dash_path=path
        )

    def _teleport_destination(self, state: GameState, actor: Actor) -> Position:
        """Worst case for the opponent: the cell farthest from the goal"""
        return find_furthest_cell(state.grid, state.goal)


# =============================================================================
# Action Execution
# =============================================================================

class ActionExecutor(ActionSimulator):
    """
    Executes validated actions against the live game state.

    Shares every rule with ActionSimulator except Teleport, which sends the
    opponent to a uniformly random cell that neither actor occupies.
    """

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.validator = ActionValidator(self.config)
        self.rng = rng or random.Random(self.config.seed)

    def execute(self, state: GameState, action: Action, actor: Actor) -> ActionResult:
        """
        Validate and execute an action in place.

        Returns:
            ActionResult describing the outcome; success is False and the
            state untouched when the action is illegal.
        """
        is_valid, error = self.validator.validate(state, action, actor)
        if not is_valid:
            return ActionResult(action=action, success=False, message=error)

        if action.action_type == ActionType.USE_POWERUP and action.powerup_type is None:
            action = action.clone()
            action.powerup_type = state.get_powerups(actor)[action.powerup_slot].powerup_type

        return self.apply(state, action, actor)

    def _teleport_destination(self, state: GameState, actor: Actor) -> Position:
        occupied = {state.pursuer_position, state.evader_position}
        candidates = [p for p in state.grid.all_positions() if p not in occupied]
        if not candidates:
            return state.get_position(actor.opponent)
        return self.rng.choice(candidates)
