"""
Mechanics module - Action resolution and lifecycle systems.

This module provides the rule systems that operate on a GameState:
- MovementResolver: Resolves MOVE actions
- CombatResolver: Resolves ATTACK actions
- PlacementResolver: Resolves PLACE_OBSTACLE actions
- VictoryConditions: Checks game ending conditions
- LifecycleController: Turn rotation, defeats, join/leave/reset

Resolvers never check turn order themselves; the GameManager does that first.
"""

from .movement import MovementResolver, MovementResult
from .combat import CombatResolver, CombatResult
from .placement import PlacementResolver, PlacementResult
from .victory import VictoryConditions, VictoryResult, GameResult
from .lifecycle import LifecycleController, JoinOutcome, JoinResult, TurnReport

__all__ = [
    "MovementResolver",
    "MovementResult",
    "CombatResolver",
    "CombatResult",
    "PlacementResolver",
    "PlacementResult",
    "VictoryConditions",
    "VictoryResult",
    "GameResult",
    "LifecycleController",
    "JoinOutcome",
    "JoinResult",
    "TurnReport",
]
