# =============================================================================
# Maze Chase - Baseline Agents
# =============================================================================
"""
Simple evader agents for demos, benchmarks and tests.
"""

import random
from typing import Optional

from ..core.enums import Actor, PowerupType
from ..core.data_structures import Action
from ..core.pathfinding import direction_towards, find_shortest_path, path_length


class RandomAgent:
    """Picks uniformly among the current actor's legal actions"""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def get_action(self, engine) -> Optional[Action]:
        valid_actions = engine.get_valid_actions()
        if valid_actions:
            return self.rng.choice(valid_actions)
        return None


class GreedyEvaderAgent:
    """
    Runs along the shortest path to the goal.

    Freezes the pursuer when it gets within freeze_radius cells and still
    holds a Freeze; otherwise takes the next step of the route.
    """

    def __init__(self, freeze_radius: int = 3):
        self.freeze_radius = freeze_radius

    def get_action(self, engine) -> Optional[Action]:
        valid_actions = engine.get_valid_actions()
        if not valid_actions:
            return None

        state = engine.state
        chase = path_length(find_shortest_path(state.grid, state.pursuer_position, state.evader_position))
        if chase <= self.freeze_radius and not state.is_frozen(Actor.PURSUER):
            for action in valid_actions:
                if action.powerup_type == PowerupType.FREEZE:
                    return action

        route = find_shortest_path(state.grid, state.evader_position, state.goal)
        if route is not None and len(route) > 1:
            step = Action.move(direction_towards(route[0], route[1]))
            if step in valid_actions:
                return step

        return valid_actions[0]
