"""
Action Tests

Enumeration, validation, simulation and live execution of actions.
"""

import random

from mazechase.core import (
    Action, ActionExecutor, ActionSimulator, ActionType, ActionValidator,
    Actor, Direction, GameConfig, Position, PowerupType, find_furthest_cell
)


validator = ActionValidator()
simulator = ActionSimulator()


# =============================================================================
# Enumeration
# =============================================================================

def test_moves_in_direction_order(make_state):
    state = make_state(pursuer=(2, 2), evader=(4, 4))
    actions = validator.get_valid_actions(state, Actor.PURSUER)
    assert actions == [Action.move(d) for d in Direction]


def test_frozen_actor_has_no_actions(make_state):
    state = make_state(evader_frozen_turns=1, evader_powerups=[PowerupType.FREEZE])
    assert validator.get_valid_actions(state, Actor.EVADER) == []


def test_corner_moves_skip_boundary(make_state):
    state = make_state(pursuer=(0, 0))
    actions = validator.get_valid_actions(state, Actor.PURSUER)
    assert actions == [Action.move(Direction.FRONT), Action.move(Direction.RIGHT)]


def test_break_wall_needs_a_wall(make_state):
    state = make_state(pursuer=(0, 0), pursuer_powerups=[PowerupType.BREAK_WALL])
    actions = validator.get_valid_actions(state, Actor.PURSUER)
    assert all(a.is_move for a in actions)

    state.grid.add_wall_between(Position(0, 0), Direction.RIGHT)
    actions = validator.get_valid_actions(state, Actor.PURSUER)
    assert actions == [
        Action.move(Direction.FRONT),
        Action.use_powerup(0, PowerupType.BREAK_WALL, Direction.RIGHT),
    ]


def test_dash_offered_toward_in_bounds_neighbours(make_state):
    state = make_state(pursuer=(0, 0), pursuer_powerups=[PowerupType.DASH])
    dashes = [a for a in validator.get_valid_actions(state, Actor.PURSUER) if not a.is_move]
    assert [a.direction for a in dashes] == [Direction.FRONT, Direction.RIGHT]


def test_undirected_powerups_follow_moves_by_slot(make_state):
    state = make_state(
        pursuer=(0, 0),
        pursuer_powerups=[PowerupType.TELEPORT, PowerupType.FREEZE]
    )
    actions = validator.get_valid_actions(state, Actor.PURSUER)
    assert actions[2:] == [
        Action.use_powerup(0, PowerupType.TELEPORT),
        Action.use_powerup(1, PowerupType.FREEZE),
    ]


# =============================================================================
# Validation
# =============================================================================

def test_validate_move_into_wall(make_state):
    state = make_state(pursuer=(0, 0))
    is_valid, message = validator.validate(state, Action.move(Direction.LEFT), Actor.PURSUER)
    assert not is_valid
    assert "wall" in message.lower()


def test_validate_empty_slot(make_state):
    state = make_state()
    action = Action(action_type=ActionType.USE_POWERUP, powerup_slot=2)
    is_valid, message = validator.validate(state, action, Actor.EVADER)
    assert not is_valid
    assert "slot 2" in message


def test_validate_mismatched_powerup_type(make_state):
    state = make_state(evader_powerups=[PowerupType.FREEZE])
    action = Action.use_powerup(0, PowerupType.TELEPORT)
    is_valid, _ = validator.validate(state, action, Actor.EVADER)
    assert not is_valid


def test_validate_directional_powerup_needs_direction(make_state):
    state = make_state(evader_powerups=[PowerupType.JUMP])
    is_valid, message = validator.validate(state, Action.use_powerup(0, PowerupType.JUMP), Actor.EVADER)
    assert not is_valid
    assert "direction" in message


def test_validate_frozen_actor(make_state):
    state = make_state(pursuer_frozen_turns=2)
    is_valid, message = validator.validate(state, Action.move(Direction.FRONT), Actor.PURSUER)
    assert not is_valid
    assert "frozen" in message


# =============================================================================
# Simulation
# =============================================================================

def test_simulate_leaves_source_untouched(make_state):
    state = make_state(pursuer=(0, 0), pursuer_powerups=[PowerupType.BREAK_WALL])
    state.grid.add_wall_between(Position(0, 0), Direction.FRONT)
    before = state.to_dict()

    action = Action.use_powerup(0, PowerupType.BREAK_WALL, Direction.FRONT)
    new_state = simulator.simulate(state, action, Actor.PURSUER)

    assert state.to_dict() == before
    assert new_state.grid.is_passage_open(Position(0, 0), Direction.FRONT)
    assert new_state.grid.is_passage_open(Position(0, 1), Direction.BACK)
    assert new_state.pursuer_powerups == []


def test_simulate_move(make_state):
    state = make_state(pursuer=(1, 1))
    new_state = simulator.simulate(state, Action.move(Direction.BACK), Actor.PURSUER)
    assert new_state.pursuer_position == Position(1, 0)


def test_jump_crosses_wall(make_state):
    state = make_state(evader=(2, 2), evader_powerups=[PowerupType.JUMP])
    state.grid.add_wall_between(Position(2, 2), Direction.LEFT)

    action = Action.use_powerup(0, PowerupType.JUMP, Direction.LEFT)
    new_state = simulator.simulate(state, action, Actor.EVADER)

    assert new_state.evader_position == Position(1, 2)
    assert new_state.grid.has_wall(Position(2, 2), Direction.LEFT)


def test_freeze_targets_opponent(make_state):
    state = make_state(pursuer_powerups=[PowerupType.FREEZE])
    new_state = simulator.simulate(state, Action.use_powerup(0, PowerupType.FREEZE), Actor.PURSUER)
    assert new_state.evader_frozen_turns == 2
    assert new_state.pursuer_frozen_turns == 0


def test_simulated_teleport_is_worst_case(make_state):
    state = make_state(pursuer=(0, 0), evader=(3, 3), pursuer_powerups=[PowerupType.TELEPORT])
    new_state = simulator.simulate(state, Action.use_powerup(0, PowerupType.TELEPORT), Actor.PURSUER)

    assert new_state.evader_position == find_furthest_cell(state.grid, state.goal)
    assert new_state.pursuer_position == Position(0, 0)


def test_dash_moves_to_end_of_run(make_state):
    state = make_state(pursuer=(0, 0), evader=(4, 4), pursuer_powerups=[PowerupType.DASH])
    state.grid.add_wall_between(Position(3, 0), Direction.RIGHT)

    result = simulator.apply(state, Action.use_powerup(0, PowerupType.DASH, Direction.RIGHT), Actor.PURSUER)

    assert state.pursuer_position == Position(3, 0)
    assert result.dash_path == [Position(1, 0), Position(2, 0), Position(3, 0)]


def test_dash_into_wall_stays_put(make_state):
    state = make_state(pursuer=(0, 0), pursuer_powerups=[PowerupType.DASH])
    state.grid.add_wall_between(Position(0, 0), Direction.FRONT)

    new_state = simulator.simulate(state, Action.use_powerup(0, PowerupType.DASH, Direction.FRONT), Actor.PURSUER)

    assert new_state.pursuer_position == Position(0, 0)
    assert new_state.pursuer_powerups == []


# =============================================================================
# Live Execution
# =============================================================================

def test_execute_rejects_illegal_action(make_state):
    executor = ActionExecutor(GameConfig(seed=1))
    state = make_state(evader=(4, 4))
    before = state.to_dict()

    result = executor.execute(state, Action.move(Direction.FRONT), Actor.EVADER)

    assert not result.success
    assert state.to_dict() == before


def test_execute_fills_in_powerup_type(make_state):
    executor = ActionExecutor(GameConfig(seed=1))
    state = make_state(evader_powerups=[PowerupType.FREEZE])
    action = Action(action_type=ActionType.USE_POWERUP, powerup_slot=0)

    result = executor.execute(state, action, Actor.EVADER)

    assert result.success
    assert result.action.powerup_type == PowerupType.FREEZE
    assert state.pursuer_frozen_turns == 2


def test_live_teleport_picks_free_cell(make_state):
    for seed in range(10):
        executor = ActionExecutor(GameConfig(seed=seed), rng=random.Random(seed))
        state = make_state(pursuer=(0, 0), evader=(1, 0), pursuer_powerups=[PowerupType.TELEPORT])

        result = executor.execute(state, Action.use_powerup(0, PowerupType.TELEPORT), Actor.PURSUER)

        assert result.success
        assert result.teleport_destination == state.evader_position
        assert state.evader_position not in (Position(0, 0), Position(1, 0))
