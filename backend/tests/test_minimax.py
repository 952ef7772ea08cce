"""
Minimax Agent Tests

Tests for the evaluator and the pursuer's search:
- Terminal and positional scores
- Immediate capture shortcut
- Depth handling
- Power-up bonuses and willingness
"""

import pytest

from mazechase.core import Action, ActionType, Difficulty, Direction, MazeGrid, Position, PowerupType
from mazechase.ai import MinimaxAgent, StateEvaluator, create_minimax_agent


evaluator = StateEvaluator()


def walled_corridor_grid() -> MazeGrid:
    """Two rows joined only at the rightmost column"""
    grid = MazeGrid.open(2, 6)
    for column in range(5):
        grid.add_wall_between(Position(column, 0), Direction.FRONT)
    return grid


# =============================================================================
# Evaluator
# =============================================================================

def test_capture_score(make_state):
    state = make_state(pursuer=(2, 2), evader=(2, 2), evader_frozen_turns=3)
    assert evaluator.evaluate(state) == 10000


def test_evader_escaped_score(make_state):
    state = make_state(pursuer=(0, 0), evader=(4, 4), pursuer_frozen_turns=1)
    assert evaluator.evaluate(state) == -10000


def test_pursuer_on_goal_score(make_state):
    state = make_state(pursuer=(4, 4), evader=(0, 0))
    assert evaluator.evaluate(state) == -5000


def test_chase_distance_score(make_state):
    # Chase path (0,0)->(2,0) is 3 cells, evader is 7 cells from the goal
    state = make_state(pursuer=(0, 0), evader=(2, 0))
    assert evaluator.evaluate(state) == -30


def test_urgency_penalty(make_state):
    # Chase is 7 cells, evader is 3 cells from the goal
    state = make_state(pursuer=(0, 0), evader=(4, 2))
    assert evaluator.evaluate(state) == -70 - 200


def test_freeze_terms(make_state):
    base = evaluator.evaluate(make_state(pursuer=(0, 0), evader=(2, 0)))
    assert evaluator.evaluate(make_state(pursuer=(0, 0), evader=(2, 0), evader_frozen_turns=1)) == base + 80
    assert evaluator.evaluate(make_state(pursuer=(0, 0), evader=(2, 0), pursuer_frozen_turns=1)) == base - 80


def test_unreachable_evader_uses_sentinel(make_state):
    grid = MazeGrid.closed(3, 3)
    state = make_state(grid=grid, pursuer=(0, 0), evader=(1, 1))
    assert evaluator.evaluate(state) == 999 * -10


def test_terminal_threshold():
    assert StateEvaluator.is_terminal_score(10000)
    assert StateEvaluator.is_terminal_score(-1000)
    assert not StateEvaluator.is_terminal_score(-999)


# =============================================================================
# Recursive Search
# =============================================================================

@pytest.mark.parametrize("maximizing", [True, False])
def test_depth_zero_is_evaluation(make_state, maximizing):
    agent = MinimaxAgent()
    state = make_state(pursuer=(1, 0), evader=(3, 2), pursuer_powerups=[PowerupType.FREEZE])
    assert agent.minimax(state, 0, maximizing) == evaluator.evaluate(state)


def test_terminal_state_stops_recursion(make_state):
    agent = MinimaxAgent()
    state = make_state(pursuer=(2, 2), evader=(2, 2))
    assert agent.minimax(state, 3, True) == 10000
    assert agent.nodes_searched == 1


def test_side_without_actions_scores_state(make_state):
    agent = MinimaxAgent()
    state = make_state(pursuer=(0, 0), evader=(2, 2), evader_frozen_turns=1)
    assert agent.minimax(state, 2, False) == evaluator.evaluate(state)


def test_search_never_mutates_input(make_state):
    agent = MinimaxAgent(depth=2)
    state = make_state(
        pursuer=(0, 0), evader=(3, 3),
        pursuer_powerups=[PowerupType.BREAK_WALL, PowerupType.TELEPORT],
        evader_powerups=[PowerupType.DASH]
    )
    before = state.to_dict()
    agent.get_best_action(state)
    assert state.to_dict() == before


# =============================================================================
# Root Decision
# =============================================================================

@pytest.mark.parametrize("depth", [0, 1, 2, 3])
def test_immediate_capture(make_state, depth):
    agent = MinimaxAgent()
    state = make_state(pursuer=(0, 0), evader=(0, 1), pursuer_powerups=[PowerupType.FREEZE])

    action = agent.get_best_action(state, depth=depth)

    assert action == Action.move(Direction.FRONT)
    assert action.score == 10000
    assert agent.last_stats.immediate_capture
    assert agent.last_stats.nodes_searched == 0


def test_open_grid_chase_moves_closer(make_state):
    agent = MinimaxAgent(depth=2)
    state = make_state(pursuer=(0, 0), evader=(4, 4), goal=(4, 4))

    action = agent.get_best_action(state)

    assert action.action_type == ActionType.MOVE
    destination = state.pursuer_position.step(action.direction)
    assert destination.manhattan(state.evader_position) < state.pursuer_position.manhattan(state.evader_position)
    assert action == Action.move(Direction.FRONT)


def test_mid_maze_chase_moves_closer(make_state):
    agent = MinimaxAgent(depth=2)
    state = make_state(pursuer=(0, 0), evader=(2, 2))

    action = agent.get_best_action(state)

    assert action.is_move
    destination = state.pursuer_position.step(action.direction)
    assert destination.manhattan(state.evader_position) == 3


@pytest.mark.parametrize("depth", [1, 2])
def test_break_wall_shortcut_beats_move(make_state, depth):
    agent = MinimaxAgent()
    state = make_state(
        grid=walled_corridor_grid(),
        pursuer=(0, 0), evader=(0, 1), goal=(5, 1),
        pursuer_powerups=[PowerupType.BREAK_WALL]
    )

    action = agent.get_best_action(state, depth=depth)

    assert action == Action.use_powerup(0, PowerupType.BREAK_WALL, Direction.FRONT)


def test_break_wall_score_includes_scaled_bonus(make_state):
    agent = MinimaxAgent()
    state = make_state(
        grid=walled_corridor_grid(),
        pursuer=(0, 0), evader=(0, 1), goal=(5, 1),
        pursuer_powerups=[PowerupType.BREAK_WALL]
    )

    action = agent.get_best_action(state, depth=1)

    # Chase drops from 12 cells to 2; the evader is 6 cells from the goal
    willingness = agent.willingness(6)
    assert action.score == pytest.approx(-20 + 10 * 15 * willingness)
    assert agent.last_stats.willingness == pytest.approx(willingness)
    assert agent.last_stats.nodes_searched == 2


def test_small_improvement_earns_no_bonus(make_state):
    agent = MinimaxAgent()
    grid = MazeGrid.open(2, 3)
    grid.add_wall_between(Position(0, 0), Direction.FRONT)
    state = make_state(
        grid=grid, pursuer=(0, 0), evader=(0, 1), goal=(2, 1),
        pursuer_powerups=[PowerupType.BREAK_WALL]
    )

    action = agent.get_best_action(state, depth=1)

    # Breaking saves only two cells, so the score is the bare evaluation:
    # a 2 cell chase plus the urgency of an evader 3 cells from the goal
    assert action.action_type == ActionType.USE_POWERUP
    assert action.score == pytest.approx(-20.0 - 200.0)


def test_freeze_score_includes_flat_bonus(make_state):
    agent = MinimaxAgent()
    state = make_state(pursuer=(0, 0), evader=(2, 0), pursuer_powerups=[PowerupType.FREEZE])

    action = agent.get_best_action(state, depth=1)

    # 3 cell chase with the evader frozen, evader 7 cells from the goal
    assert action == Action.use_powerup(0, PowerupType.FREEZE)
    assert action.score == pytest.approx(-30 + 80 + 45 * agent.willingness(7))
    assert agent.last_stats.willingness == pytest.approx(0.936)


def test_teleport_score_includes_worsening_bonus(make_state):
    agent = MinimaxAgent()
    state = make_state(pursuer=(4, 0), evader=(3, 3), pursuer_powerups=[PowerupType.TELEPORT])

    action = agent.get_best_action(state, depth=1)

    # The evader lands on (0, 0): 9 cells from the goal instead of 3,
    # and 5 cells from the pursuer
    assert action == Action.use_powerup(0, PowerupType.TELEPORT)
    assert action.score == pytest.approx(-50 + (9 - 3) * 10)


def test_tie_break_prefers_ideal_path_step(make_state):
    agent = MinimaxAgent()
    # Whatever the pursuer does, the evader steps onto the goal next ply
    state = make_state(pursuer=(1, 3), evader=(4, 3), goal=(4, 4))

    action = agent.get_best_action(state, depth=2)

    assert action == Action.move(Direction.RIGHT)
    assert action.score == pytest.approx(-10000 + 0.01)


def test_frozen_pursuer_has_no_action(make_state):
    agent = MinimaxAgent()
    state = make_state(pursuer_frozen_turns=1)
    assert agent.get_best_action(state) is None


def test_search_stats_reported(make_state):
    agent = MinimaxAgent(depth=1)
    assert agent.get_search_stats() == {}

    agent.get_best_action(make_state(pursuer=(0, 0), evader=(3, 3)))
    stats = agent.get_search_stats()

    assert stats["depth"] == 1
    assert stats["nodes_searched"] == 2
    assert stats["best_move"]["action_type"] == "MOVE"
    assert not stats["immediate_capture"]


# =============================================================================
# Configuration
# =============================================================================

def test_willingness_ramp():
    agent = MinimaxAgent()
    assert agent.willingness(100) == pytest.approx(0.2)
    assert agent.willingness(30) == pytest.approx(0.2)
    assert agent.willingness(17.5) == pytest.approx(0.6)
    assert agent.willingness(5) == pytest.approx(1.0)
    assert agent.willingness(1) == pytest.approx(1.0)


@pytest.mark.parametrize("depth", [-1, 5])
def test_depth_out_of_range(depth, make_state):
    with pytest.raises(ValueError):
        MinimaxAgent(depth=depth)
    with pytest.raises(ValueError):
        MinimaxAgent().get_best_action(make_state(), depth=depth)


@pytest.mark.parametrize("difficulty,depth", [
    (Difficulty.EASY, 1),
    (Difficulty.MEDIUM, 2),
    (Difficulty.HARD, 3),
    (Difficulty.EXPERT, 4),
])
def test_create_minimax_agent(difficulty, depth):
    assert create_minimax_agent(difficulty).depth == depth
