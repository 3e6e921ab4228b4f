"""
Entity definitions for the Grid Arena engine.

This module exports all entity types:
- Entity (base)
- Player (a seat in the game)
- Obstacle (destructible block)
"""

from .base import Entity
from .player import Player, normalize_color, normalize_name
from .obstacle import Obstacle

__all__ = [
    "Entity",
    "Player",
    "Obstacle",
    "normalize_color",
    "normalize_name",
]
