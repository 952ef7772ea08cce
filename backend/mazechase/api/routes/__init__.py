"""
Routes Module

Contains API route definitions.
"""

from . import games, ai

__all__ = ['games', 'ai']
