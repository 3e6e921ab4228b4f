"""
Core types and constants for the Grid Arena engine.
"""

# Instead of from arena.core.types import GridPos, you can do: from arena.core import GridPos
from .types import (
    GridPos,
    GameStatus,
    PlayerStatus,
    ActionType,
    EntityKind,
    ActionValidation,
)
from .rules import GameRules, DEFAULT_RULES
from .actions import Action, ActionParseError


__all__ = [
    "GridPos",
    "GameStatus",
    "PlayerStatus",
    "ActionType",
    "EntityKind",
    "ActionValidation",
    "GameRules",
    "DEFAULT_RULES",
    "Action",
    "ActionParseError",
]
