"""
Grid Arena - rules engine for a 4-player turn-based grid combat game.

Usage:
    from arena import GameManager
    game = GameManager()
"""

from .core import (
    Action,
    ActionType,
    ActionValidation,
    DEFAULT_RULES,
    GameRules,
    GameStatus,
    GridPos,
    PlayerStatus,
)
from .entities import Obstacle, Player
from .game import ActionOutcome, GameManager
from .mechanics import JoinOutcome, JoinResult
from .world import GameState, Grid

__all__ = [
    "Action",
    "ActionType",
    "ActionValidation",
    "DEFAULT_RULES",
    "GameRules",
    "GameStatus",
    "GridPos",
    "PlayerStatus",
    "Obstacle",
    "Player",
    "ActionOutcome",
    "GameManager",
    "JoinOutcome",
    "JoinResult",
    "GameState",
    "Grid",
]
