# =============================================================================
# AI Module
# =============================================================================
"""
AI agents for Maze Chase.

Contains:
- MinimaxAgent: bounded-depth minimax pursuer
- RandomAgent / GreedyEvaderAgent: baseline opponents
"""

from .minimax_agent import (
    MinimaxAgent,
    create_minimax_agent,
    StateEvaluator,
    SearchStats,
    MAX_SEARCH_DEPTH,
    TERMINAL_THRESHOLD,
)

from .baseline_agents import (
    RandomAgent,
    GreedyEvaderAgent,
)

__all__ = [
    "MinimaxAgent",
    "create_minimax_agent",
    "StateEvaluator",
    "SearchStats",
    "MAX_SEARCH_DEPTH",
    "TERMINAL_THRESHOLD",
    "RandomAgent",
    "GreedyEvaderAgent",
]
