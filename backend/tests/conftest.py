"""
Shared fixtures for the Maze Chase tests.
"""

import pytest

from mazechase.core import GameState, MazeGrid, Position, Powerup


@pytest.fixture
def make_state():
    """
    Factory for hand-built states on an open grid.

    Positions are (column, row) tuples and power-ups are PowerupType
    members; pass grid= to use a prepared maze instead.
    """
    def factory(rows=5, columns=5, pursuer=(0, 0), evader=(4, 4), goal=None,
                pursuer_powerups=(), evader_powerups=(), grid=None, **fields):
        if grid is None:
            grid = MazeGrid.open(rows, columns)
        if goal is not None:
            grid.set_goal(Position(*goal))
        return GameState(
            grid=grid,
            pursuer_position=Position(*pursuer),
            evader_position=Position(*evader),
            pursuer_powerups=[Powerup.create(t) for t in pursuer_powerups],
            evader_powerups=[Powerup.create(t) for t in evader_powerups],
            **fields
        )

    return factory
