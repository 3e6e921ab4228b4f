"""
World state management for the Grid Arena engine.

This module provides:
- Grid: Spatial logic and geometry
- GameState: Central game state store
"""

from .grid import Grid, Occupant
from .world import GameState

__all__ = [
    "Grid",
    "Occupant",
    "GameState",
]
