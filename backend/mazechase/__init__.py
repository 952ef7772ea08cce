# =============================================================================
# Maze Chase - Backend Package
# =============================================================================
"""
Maze Chase Backend

A turn-based pursuit game on a procedurally generated maze. A minimax
pursuer hunts an evader who is racing for the goal cell, with power-ups
that break walls, jump, dash, freeze and teleport.
"""

__version__ = "0.1.0"
