"""
PlacementResolver - Obstacle placement resolution.

This module handles:
- Validating placement (bounds, stock, adjacency, free cell)
- Creating the obstacle and consuming one unit of stock
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from ..core.types import ActionType, GridPos
from ..core.validation import validate_action_in_state
from ..entities import Obstacle
from ..utils import IdFactory, new_entity_id

if TYPE_CHECKING:
    from ..core.actions import Action
    from ..core.rules import GameRules
    from ..entities import Player
    from ..world.world import GameState


@dataclass
class PlacementResult:
    """
    Result of resolving a single obstacle placement.

    Attributes:
        player_id: ID of the placing player
        success: Whether the obstacle was placed
        position: Cell named by the client
        obstacle_id: ID of the new obstacle (None on failure)
        stock_left: Obstacles the player can still place
        failure_reason: Machine-readable reason code when placement fails
    """
    player_id: str
    success: bool
    position: GridPos
    obstacle_id: Optional[str]
    stock_left: int
    failure_reason: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize placement result to a plain dict."""
        return {
            "action": ActionType.PLACE_OBSTACLE.name,
            "player_id": self.player_id,
            "success": self.success,
            "position": list(self.position),
            "obstacle_id": self.obstacle_id,
            "stock_left": self.stock_left,
            "failure_reason": self.failure_reason,
        }


class PlacementResolver:
    """Resolver for obstacle placement. Only holds the id factory for new obstacles."""

    def __init__(self, id_factory: IdFactory = new_entity_id):
        self._id_factory = id_factory

    def resolve(
        self,
        state: GameState,
        rules: GameRules,
        player: Player,
        action: Action,
    ) -> Tuple[PlacementResult, str]:
        """
        Resolve a single placement.

        Args:
            state: Current game state (modified in-place on success)
            rules: Rules of the session
            player: Player placing the obstacle
            action: Placement action

        Returns:
            Tuple of (PlacementResult, log message)
        """
        validation = validate_action_in_state(state, rules, player, action)
        if not validation.valid:
            result = PlacementResult(
                player_id=player.id,
                success=False,
                position=action.target,
                obstacle_id=None,
                stock_left=player.obstacle_stock,
                failure_reason=validation.error_code,
            )
            return result, validation.message

        obstacle = Obstacle(
            id=self._id_factory(),
            position=action.target,
            hp=rules.obstacle_hp,
            owner_id=player.id,
        )
        state.add_obstacle(obstacle)
        player.obstacle_stock -= 1

        result = PlacementResult(
            player_id=player.id,
            success=True,
            position=action.target,
            obstacle_id=obstacle.id,
            stock_left=player.obstacle_stock,
            failure_reason=None,
        )
        log_message = (
            f"{player.label()} places an obstacle at {action.target} "
            f"({player.obstacle_stock} left)"
        )
        return result, log_message
