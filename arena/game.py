"""
GameManager - Main engine interface.

This is the primary API of the Grid Arena engine. A transport layer (the
FastAPI app in this repository, or anything else) drives one game through it.

Usage:
    from arena import GameManager, ActionType

    game = GameManager()
    result = game.join("Alice", "#FF0000")
    ...
    outcome = game.request_action(player_id, ActionType.MOVE, (0, 3))
    if not outcome.success:
        print(outcome.validation.message)

    broadcast(game.snapshot().to_dict())

Every public method runs under one lock: validation, mutation and the
snapshot a caller takes afterwards never interleave with another request.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .core.actions import Action, ActionParseError, parse_action_type
from .core.rules import DEFAULT_RULES, GameRules
from .core.types import ActionType, ActionValidation, GameStatus, GridPos
from .core.validation import check_turn_preconditions, validate_action_in_state
from .mechanics import (
    CombatResolver,
    JoinResult,
    LifecycleController,
    MovementResolver,
    PlacementResolver,
    TurnReport,
)
from .utils import IdFactory, new_entity_id
from .world import GameState

from infra.logger import get_logger

log = get_logger(__name__)


@dataclass
class ActionOutcome:
    """
    Result of an action request.

    Attributes:
        validation: Success, or the reason the request was refused
        action: The parsed action (None if the request could not be parsed)
        details: Serialized resolver result (movement, combat or placement)
        report: Defeats, destroyed obstacles, victory and next turn (success only)
    """
    validation: ActionValidation
    action: Optional[Action] = None
    details: Optional[Dict[str, Any]] = None
    report: Optional[TurnReport] = None

    @property
    def success(self) -> bool:
        return self.validation.valid

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.validation.valid,
            "error_code": self.validation.error_code,
            "message": self.validation.message,
            "action": self.action.to_dict() if self.action else None,
            "details": self.details,
            "report": self.report.to_dict() if self.report else None,
        }


class GameManager:
    """
    Owner of the single game of a process.

    The manager orchestrates all subsystems:
    - GameState (the store)
    - Movement / combat / placement resolvers
    - LifecycleController (turns, defeats, victory, roster)

    Attributes:
        rules: Rules fixed for the lifetime of the manager
    """

    def __init__(
        self,
        rules: GameRules = DEFAULT_RULES,
        id_factory: IdFactory = new_entity_id,
    ):
        """
        Create an empty Lobby on the rules' default grid size.

        Args:
            rules: Numeric rules of the session
            id_factory: Source of player and obstacle ids
        """
        self.rules = rules
        self._lock = threading.RLock()
        self._state = GameState(grid_size=rules.default_grid_size)

        self._lifecycle = LifecycleController(rules, id_factory=id_factory)
        self._resolvers = {
            ActionType.MOVE: MovementResolver(),
            ActionType.ATTACK: CombatResolver(),
            ActionType.PLACE_OBSTACLE: PlacementResolver(id_factory=id_factory),
        }

    # ========================================================================
    # ROSTER
    # ========================================================================

    def join(self, name: Any, color: Any, grid_size_hint: Any = None) -> JoinResult:
        """
        Seat a player, or turn the caller into a spectator when no seat is left.

        Args:
            name: Display name (trimmed; must not be blank)
            color: "#RRGGBB" color
            grid_size_hint: Grid size wished by the first player of an empty lobby
        """
        with self._lock:
            result = self._lifecycle.join(self._state, name, color, grid_size_hint)
            if not result.joined:
                log.debug("Join refused (%s): %s", result.error_code, result.message)
            return result

    def leave(self, player_id: Optional[str]) -> None:
        """Remove a player. Unknown ids are ignored."""
        with self._lock:
            self._state = self._lifecycle.leave(self._state, player_id)

    # ========================================================================
    # ACTIONS
    # ========================================================================

    def request_action(self, player_id: Optional[str], kind: Any, target: Any) -> ActionOutcome:
        """
        Validate and execute an action for the player holding the turn.

        Args:
            player_id: Acting player
            kind: ActionType or its name ("MOVE", "ATTACK", "PLACE_OBSTACLE")
            target: (x, y) pair or {"x": .., "y": ..} mapping

        Returns:
            ActionOutcome; on failure the game state is unchanged
        """
        with self._lock:
            state = self._state

            validation = check_turn_preconditions(state, player_id)
            if not validation.valid:
                return self._refused(player_id, validation)

            try:
                action = Action.parse(kind, target)
            except ActionParseError as exc:
                return self._refused(player_id, ActionValidation.fail(exc.error_code, exc.message))

            player = state.get_player(player_id)
            result, message = self._resolvers[action.type].resolve(state, self.rules, player, action)
            if not result.success:
                return self._refused(
                    player_id,
                    ActionValidation.fail(result.failure_reason, message),
                    action=action,
                )

            log.info(message)
            report = self._lifecycle.finish_action(state)
            return ActionOutcome(
                validation=ActionValidation.success(message),
                action=action,
                details=result.to_dict(),
                report=report,
            )

    def legal_targets(self, player_id: Optional[str], kind: Any) -> List[GridPos]:
        """
        List every cell an active player could aim an action at right now.

        Turn order is ignored so clients can preview options while waiting.
        Unknown players, defeated players and games not in progress yield [].
        """
        with self._lock:
            state = self._state
            player = state.get_player(player_id)
            if state.status != GameStatus.IN_PROGRESS or player is None or not player.active:
                return []
            try:
                action_type = parse_action_type(kind)
            except ActionParseError:
                return []

            combat = self._resolvers[ActionType.ATTACK]
            targets: List[GridPos] = []
            for y in range(state.grid_size):
                for x in range(state.grid_size):
                    action = Action(action_type, (x, y))
                    if action_type == ActionType.ATTACK:
                        validation, _ = combat.select_target(state, self.rules, player, action)
                    else:
                        validation = validate_action_in_state(state, self.rules, player, action)
                    if validation.valid:
                        targets.append((x, y))
            return targets

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    def reset(self) -> ActionValidation:
        """Start a new Lobby of the same grid size. Only allowed once Finished."""
        with self._lock:
            validation, self._state = self._lifecycle.reset(self._state)
            return validation

    def snapshot(self) -> GameState:
        """Deep, independent copy of the current game state."""
        with self._lock:
            return self._state.clone()

    @property
    def status(self) -> GameStatus:
        with self._lock:
            return self._state.status

    def _refused(
        self,
        player_id: Optional[str],
        validation: ActionValidation,
        action: Optional[Action] = None,
    ) -> ActionOutcome:
        log.debug("Action refused for %s (%s): %s", player_id, validation.error_code, validation.message)
        return ActionOutcome(validation=validation, action=action)

    def __repr__(self) -> str:
        return f"GameManager(state={self._state!r})"
