"""
CombatResolver - Attack action resolution.

An attack is resolved in two separate passes:
1. A pure ray cast from the attacker's cell finds what is actually struck
2. A cross-check against the cell the client named rejects attacks that try
   to reach an entity standing behind a nearer one

Only then are hit points removed. Defeat marking and obstacle removal are left
to the LifecycleController cleanup that follows every successful action.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from ..core.types import ActionType, ActionValidation, GridPos
from ..core.validation import validate_action_in_state

if TYPE_CHECKING:
    from ..core.actions import Action
    from ..core.rules import GameRules
    from ..entities import Player
    from ..world.grid import Occupant
    from ..world.world import GameState


@dataclass
class CombatResult:
    """
    Result of resolving a single attack.

    Attributes:
        player_id: ID of the attacker
        success: Whether the attack was carried out
        target: Cell named by the client
        struck_id: ID of the entity hit (None on failure)
        struck_kind: "player" or "obstacle" (None on failure)
        damage: Hit points removed from the struck entity
        struck_hp: Hit points the struck entity has left
        destroyed: True if the struck entity dropped to 0 hp or below
        attacker_hp: Hit points the attacker has left after paying the attack cost
        failure_reason: Machine-readable reason code when the attack fails
    """
    player_id: str
    success: bool
    target: GridPos
    struck_id: Optional[str] = None
    struck_kind: Optional[str] = None
    damage: int = 0
    struck_hp: Optional[int] = None
    destroyed: bool = False
    attacker_hp: Optional[int] = None
    failure_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize combat result to a plain dict."""
        return {
            "action": ActionType.ATTACK.name,
            "player_id": self.player_id,
            "success": self.success,
            "target": list(self.target),
            "struck_id": self.struck_id,
            "struck_kind": self.struck_kind,
            "damage": self.damage,
            "struck_hp": self.struck_hp,
            "destroyed": self.destroyed,
            "attacker_hp": self.attacker_hp,
            "failure_reason": self.failure_reason,
        }


class CombatResolver:
    """
    Stateless resolver for attack actions.

    Turn preconditions are checked by the caller before resolution.
    """

    def resolve(
        self,
        state: GameState,
        rules: GameRules,
        player: Player,
        action: Action,
    ) -> Tuple[CombatResult, str]:
        """
        Resolve a single attack.

        Args:
            state: Current game state (modified in-place on success)
            rules: Rules of the session
            player: Attacking player
            action: Attack action

        Returns:
            Tuple of (CombatResult, log message)
        """
        validation, struck = self.select_target(state, rules, player, action)
        if not validation.valid:
            return self._failed(player, action, validation)

        attacker_hp = player.take_damage(rules.attack_cost)
        struck_hp = struck.entity.take_damage(rules.attack_damage)

        result = CombatResult(
            player_id=player.id,
            success=True,
            target=action.target,
            struck_id=struck.id,
            struck_kind=struck.kind.value,
            damage=rules.attack_damage,
            struck_hp=struck_hp,
            destroyed=struck_hp <= 0,
            attacker_hp=attacker_hp,
        )
        log_message = (
            f"{player.label()} hits {struck.entity.label()} for {rules.attack_damage} "
            f"({struck_hp} hp left)"
        )
        if result.destroyed:
            log_message += " - destroyed"
        return result, log_message

    def select_target(
        self,
        state: GameState,
        rules: GameRules,
        player: Player,
        action: Action,
    ) -> Tuple[ActionValidation, Optional[Occupant]]:
        """
        Decide what an attack would strike, without changing anything.

        Returns:
            Tuple of (validation, struck occupant or None)
        """
        validation = validate_action_in_state(state, rules, player, action)
        if not validation.valid:
            return validation, None

        struck = state.grid.first_entity_along_ray(player.position, action.target, rules.attack_range)
        if struck is None:
            return ActionValidation.fail("NO_TARGET", "No target in that direction."), None

        validation = self._check_explicit_target(state, action.target, struck)
        if not validation.valid:
            return validation, None
        return validation, struck

    @staticmethod
    def _check_explicit_target(
        state: GameState,
        target: GridPos,
        struck: Occupant,
    ) -> ActionValidation:
        """
        Reject an attack whose named cell holds something other than what the ray struck.

        An empty named cell is fine: the attack simply lands on the first entity
        in that direction.
        """
        named = state.occupant_at(target)
        if named is not None and named.id != struck.id:
            return ActionValidation.fail("BLOCKED", "Something blocks the attack.")
        return ActionValidation.success()

    @staticmethod
    def _failed(
        player: Player,
        action: Action,
        validation: ActionValidation,
    ) -> Tuple[CombatResult, str]:
        result = CombatResult(
            player_id=player.id,
            success=False,
            target=action.target,
            failure_reason=validation.error_code,
        )
        return result, validation.message
