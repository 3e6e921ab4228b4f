"""
MovementResolver - Movement action resolution.

This module handles:
- Validating movement actions (bounds, straight line, range, free path)
- Applying position changes
- Generating movement logs
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple
from dataclasses import dataclass

from ..core.types import ActionType, GridPos
from ..core.validation import validate_action_in_state

if TYPE_CHECKING:
    from ..core.actions import Action
    from ..core.rules import GameRules
    from ..entities import Player
    from ..world.world import GameState


@dataclass
class MovementResult:
    """
    Result of resolving a single movement action.

    Attributes:
        player_id: ID of player that moved (or tried to)
        success: Whether movement succeeded
        old_pos: Position before movement
        new_pos: Position after movement (same as old if failed)
        failure_reason: Optional machine-readable reason code when movement fails
    """
    player_id: str
    success: bool
    old_pos: GridPos
    new_pos: GridPos
    failure_reason: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize movement result to a plain dict."""
        return {
            "action": ActionType.MOVE.name,
            "player_id": self.player_id,
            "success": self.success,
            "old_pos": list(self.old_pos),
            "new_pos": list(self.new_pos),
            "failure_reason": self.failure_reason,
        }


class MovementResolver:
    """
    Stateless resolver for movement actions.

    The MovementResolver:
    - Validates movement requests
    - Checks the whole path for collisions
    - Applies position changes
    - Generates logs

    Turn preconditions are checked by the caller before resolution.
    """

    def resolve(
        self,
        state: GameState,
        rules: GameRules,
        player: Player,
        action: Action,
    ) -> Tuple[MovementResult, str]:
        """
        Resolve a single movement action.

        Args:
            state: Current game state (modified in-place on success)
            rules: Rules of the session
            player: Player attempting to move
            action: Movement action

        Returns:
            Tuple of (MovementResult, log message)
        """
        old_pos = player.position

        validation = validate_action_in_state(state, rules, player, action)
        if not validation.valid:
            result = MovementResult(
                player_id=player.id,
                success=False,
                old_pos=old_pos,
                new_pos=old_pos,
                failure_reason=validation.error_code
            )
            return result, validation.message

        player.position = action.target

        result = MovementResult(
            player_id=player.id,
            success=True,
            old_pos=old_pos,
            new_pos=action.target,
            failure_reason=None
        )
        log_message = f"{player.label()} moves from {old_pos} to {action.target}"
        return result, log_message
