"""
Core type definitions for the Grid Arena engine.

This module contains all fundamental types, enums, and result objects used
throughout the system. No logic, just pure data structures.
"""

from __future__ import annotations
from enum import Enum
from typing import Tuple
from dataclasses import dataclass

# ============================================================================
# SPATIAL TYPES
# ============================================================================

# Grid position: (x, y) where:
# - X increases to the RIGHT
# - Y increases DOWNWARD
# - Origin (0, 0) is the TOP-LEFT corner
GridPos = Tuple[int, int]


# ============================================================================
# LIFECYCLE
# ============================================================================

class GameStatus(Enum):
    """Lifecycle state of the single game."""
    LOBBY = "Lobby"
    IN_PROGRESS = "InProgress"
    FINISHED = "Finished"

    def __str__(self) -> str:
        return self.value


class PlayerStatus(Enum):
    """Whether a player still takes part in the rotation."""
    ACTIVE = "Active"
    DEFEATED = "Defeated"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# ACTIONS
# ============================================================================

class ActionType(Enum):
    """Types of actions a player can request on their turn."""
    MOVE = "MOVE"  # Slide up to move_range cells in a straight line
    ATTACK = "ATTACK"  # Hit the first entity along a straight line
    PLACE_OBSTACLE = "PLACE_OBSTACLE"  # Drop an obstacle on an adjacent cell

    def __str__(self) -> str:
        return self.name


# ============================================================================
# ENTITY KINDS
# ============================================================================

class EntityKind(Enum):
    """Types of entities that can occupy a cell."""
    PLAYER = "player"
    OBSTACLE = "obstacle"

    def __str__(self) -> str:
        return self.value


# ============================================================================
# ACTION VALIDATION
# ============================================================================

@dataclass
class ActionValidation:
    """
    Structured result of validating (and possibly executing) a request.

    Attributes:
        valid: Whether the request was accepted
        error_code: Machine-readable error code (None if valid)
        message: Human-readable message explaining the result

    Error codes:
        - "GAME_NOT_IN_PROGRESS": Actions are only accepted while InProgress
        - "GAME_NOT_FINISHED": Reset is only accepted once Finished
        - "PLAYER_NOT_FOUND": No player with this id
        - "PLAYER_DEFEATED": Player is no longer active
        - "NOT_YOUR_TURN": Player does not hold the turn
        - "UNKNOWN_ACTION": Action kind is not recognised
        - "INVALID_TARGET": Target is not a pair of integer coordinates
        - "OUT_OF_BOUNDS": Target lies outside the grid
        - "NOT_STRAIGHT_LINE": Target is not on the same row or column
        - "OUT_OF_RANGE": Target distance is zero or above the action range
        - "PATH_BLOCKED": A player or obstacle sits on the movement path
        - "NO_TARGET": Nothing to hit along the attack line
        - "BLOCKED": A nearer entity shields the named target
        - "NO_OBSTACLES_LEFT": Obstacle stock is exhausted
        - "NOT_ADJACENT": Obstacle cell is not next to the player
        - "CELL_OCCUPIED": Obstacle cell already holds an entity
        - "INVALID_NAME": Display name is empty
        - "INVALID_COLOR": Color is not a #RRGGBB string
        - "LOBBY_FULL": No seat left, caller becomes a spectator
    """
    valid: bool
    error_code: str | None = None
    message: str = ""

    @staticmethod
    def success(message: str = "") -> ActionValidation:
        """Create a validation success result."""
        return ActionValidation(valid=True, error_code=None, message=message)

    @staticmethod
    def fail(error_code: str, message: str) -> ActionValidation:
        """Create a validation failure result."""
        return ActionValidation(valid=False, error_code=error_code, message=message)
