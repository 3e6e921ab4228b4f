"""
Shared action validation helpers.

This module holds the turn preconditions and the per-action legality rules so
both the resolvers and any "where can I act?" queries use the same checks.
Checks run in a stable order (bounds -> geometry/range -> occupancy/stock) so
the first failure reported for a request is deterministic.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .types import ActionType, ActionValidation, GameStatus

if TYPE_CHECKING:
    from ..world.world import GameState
    from ..entities import Player
    from .actions import Action
    from .rules import GameRules


def check_turn_preconditions(state: GameState, player_id: Optional[str]) -> ActionValidation:
    """
    Validate that a player may act right now.

    Order: game in progress, player exists, player active, player holds the turn.
    """
    if state.status != GameStatus.IN_PROGRESS:
        return ActionValidation.fail("GAME_NOT_IN_PROGRESS", "Game must be in progress.")

    player = state.get_player(player_id)
    if player is None:
        return ActionValidation.fail("PLAYER_NOT_FOUND", "Player not found.")
    if not player.active:
        return ActionValidation.fail("PLAYER_DEFEATED", "Player already defeated.")
    if state.current_turn != player.id:
        return ActionValidation.fail("NOT_YOUR_TURN", "Not your turn.")

    return ActionValidation.success()


def validate_action_in_state(
    state: GameState,
    rules: GameRules,
    player: Player,
    action: Action,
) -> ActionValidation:
    """
    Validate the geometry and resources of an action.

    Turn preconditions are NOT checked here. For attacks this stops before the
    ray cast: what the attack actually strikes is decided by the CombatResolver.
    """
    grid = state.grid
    target = action.target

    if not grid.in_bounds(target):
        return ActionValidation.fail("OUT_OF_BOUNDS", "Target cell is out of bounds.")

    if action.type == ActionType.MOVE:
        if not grid.straight_line(player.position, target):
            return ActionValidation.fail("NOT_STRAIGHT_LINE", "Moves must follow a straight line.")
        distance = grid.manhattan_distance(player.position, target)
        if distance == 0 or distance > rules.move_range:
            return ActionValidation.fail(
                "OUT_OF_RANGE",
                f"Move distance must be between 1 and {rules.move_range} cells."
            )
        if not grid.path_clear(player.position, target):
            return ActionValidation.fail("PATH_BLOCKED", "Path blocked by a player or an obstacle.")
        return ActionValidation.success()

    if action.type == ActionType.ATTACK:
        if not grid.straight_line(player.position, target):
            return ActionValidation.fail("NOT_STRAIGHT_LINE", "Attacks must follow a straight line.")
        distance = grid.manhattan_distance(player.position, target)
        if distance == 0 or distance > rules.attack_range:
            return ActionValidation.fail(
                "OUT_OF_RANGE",
                f"Attack range is between 1 and {rules.attack_range} cells."
            )
        return ActionValidation.success()

    if action.type == ActionType.PLACE_OBSTACLE:
        if player.obstacle_stock <= 0:
            return ActionValidation.fail("NO_OBSTACLES_LEFT", "No obstacles left.")
        if not grid.adjacent(player.position, target):
            return ActionValidation.fail("NOT_ADJACENT", "Obstacle cell must be adjacent.")
        if grid.is_occupied(target):
            return ActionValidation.fail("CELL_OCCUPIED", "Cell already occupied.")
        return ActionValidation.success()

    return ActionValidation.fail("UNKNOWN_ACTION", f"Unknown action: {action.type}.")
