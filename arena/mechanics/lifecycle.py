"""
LifecycleController - turn rotation, defeat, victory and roster changes.

The controller owns every transition of the game lifecycle:
Lobby -> InProgress (last seat taken) -> Finished (<= 1 player active) -> Lobby (reset).

Every successful action and every in-game departure goes through
finish_action(): mark defeats, prune the board, check victory, hand the turn on.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .victory import VictoryConditions, VictoryResult
from ..core.rules import GameRules
from ..core.types import ActionValidation, GameStatus
from ..entities import Player, normalize_color, normalize_name
from ..utils import IdFactory, new_entity_id
from ..world.world import GameState

from infra.logger import get_logger

log = get_logger(__name__)


class JoinOutcome(Enum):
    """How a join request ended."""
    PLAYER = "player"  # Seat taken
    SPECTATOR = "spectator"  # No seat available; caller only watches
    REJECTED = "rejected"  # Invalid name or color

    def __str__(self) -> str:
        return self.value


@dataclass
class JoinResult:
    """
    Result of a join request.

    Attributes:
        outcome: PLAYER, SPECTATOR or REJECTED
        player: Copy of the new player (PLAYER only)
        error_code: Machine-readable reason (SPECTATOR / REJECTED)
        message: Human-readable explanation
    """
    outcome: JoinOutcome
    player: Optional[Player] = None
    error_code: Optional[str] = None
    message: str = ""

    @property
    def joined(self) -> bool:
        return self.outcome == JoinOutcome.PLAYER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "player": self.player.to_dict() if self.player else None,
            "error_code": self.error_code,
            "message": self.message,
        }


@dataclass
class TurnReport:
    """
    What happened after an action besides the action itself.

    Attributes:
        defeated_ids: Players defeated during this step
        destroyed_obstacle_ids: Obstacles removed from the board
        victory: Outcome if the game ended during this step
        next_turn: Id of the player who now holds the turn
    """
    defeated_ids: List[str] = field(default_factory=list)
    destroyed_obstacle_ids: List[str] = field(default_factory=list)
    victory: Optional[VictoryResult] = None
    next_turn: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "defeated_ids": list(self.defeated_ids),
            "destroyed_obstacle_ids": list(self.destroyed_obstacle_ids),
            "victory": self.victory.to_dict() if self.victory else None,
            "next_turn": self.next_turn,
        }


class LifecycleController:
    """
    Applies the turn and lifecycle rules to a GameState.

    The controller keeps no game state of its own; it only holds the session
    rules, the victory checker and the id factory used for new players.
    """

    def __init__(self, rules: GameRules, id_factory: IdFactory = new_entity_id):
        self.rules = rules
        self._victory = VictoryConditions()
        self._id_factory = id_factory

    # ========================================================================
    # ROSTER
    # ========================================================================

    def join(
        self,
        state: GameState,
        name: Any,
        color: Any,
        grid_size_hint: Any = None,
    ) -> JoinResult:
        """
        Seat a new player.

        A full or already started game turns the caller into a spectator
        instead of failing. The grid size hint is honoured only for the first
        player of an empty Lobby, and only if the size is allow-listed.
        """
        if len(state.players) >= self.rules.max_players or state.status != GameStatus.LOBBY:
            return JoinResult(
                outcome=JoinOutcome.SPECTATOR,
                error_code="LOBBY_FULL",
                message="Game full or already started, you are a spectator.",
            )

        clean_name = normalize_name(name)
        if clean_name is None:
            return JoinResult(JoinOutcome.REJECTED, error_code="INVALID_NAME", message="Invalid pseudo.")

        clean_color = normalize_color(color)
        if clean_color is None:
            return JoinResult(JoinOutcome.REJECTED, error_code="INVALID_COLOR", message="Invalid color.")

        if grid_size_hint is not None and not state.players and self.rules.is_allowed_grid_size(grid_size_hint):
            state.grid_size = grid_size_hint

        player = Player(
            id=self._id_factory(),
            position=state.grid.starting_positions()[len(state.players)],
            hp=self.rules.player_hp,
            name=clean_name,
            color=clean_color,
            obstacle_stock=self.rules.obstacle_stock,
        )
        state.players.append(player)
        log.info("%s joined at %s (%d/%d)", player.label(), player.position,
                 len(state.players), self.rules.max_players)

        if len(state.players) == self.rules.max_players:
            state.status = GameStatus.IN_PROGRESS
            state.current_turn = state.players[0].id
            log.info("Game started, %s plays first", state.players[0].label())

        return JoinResult(JoinOutcome.PLAYER, player=Player.from_dict(player.to_dict()))

    def leave(self, state: GameState, player_id: Optional[str]) -> GameState:
        """
        Remove a player from the roster.

        Returns:
            The state to keep using: the same object, or a fresh Lobby when the
            roster became empty
        """
        player = state.get_player(player_id)
        if player is None:
            return state

        if state.status == GameStatus.IN_PROGRESS and player.active:
            self.finish_action(state, defeated_ids=[player.id])

        state.players.remove(player)
        log.info("%s left the game", player.label())

        if not state.players:
            log.info("Roster empty, back to a fresh lobby")
            return GameState(grid_size=state.grid_size)

        if state.status == GameStatus.LOBBY:
            corners = state.grid.starting_positions()
            for index, remaining in enumerate(state.players):
                remaining.position = corners[index]

        return state

    def reset(self, state: GameState) -> Tuple[ActionValidation, GameState]:
        """
        Start over with an empty Lobby of the same grid size.

        Only allowed once the game is Finished; otherwise the state is returned
        untouched together with a failure.
        """
        if state.status != GameStatus.FINISHED:
            return ActionValidation.fail("GAME_NOT_FINISHED", "Game is not finished yet."), state
        log.info("Game reset")
        return ActionValidation.success("New game available. Join the lobby."), GameState(state.grid_size)

    # ========================================================================
    # AFTER-ACTION PIPELINE
    # ========================================================================

    def finish_action(
        self,
        state: GameState,
        defeated_ids: Iterable[str] = (),
        advance: bool = True,
    ) -> TurnReport:
        """
        Run the shared post-action pipeline.

        mark defeated -> cleanup (prune, defeat hp <= 0, victory) -> advance turn -> victory

        Args:
            state: Game state (modified in-place)
            defeated_ids: Players to take out regardless of their hp (e.g. departures)
            advance: Hand the turn to the next active player
        """
        report = TurnReport()
        for player_id in defeated_ids:
            if self.mark_defeated(state, player_id):
                report.defeated_ids.append(player_id)

        self.cleanup_after_action(state, report)
        if advance:
            self.advance_turn(state)
        self.evaluate_victory(state, report)

        report.next_turn = state.current_turn
        return report

    def mark_defeated(self, state: GameState, player_id: str) -> bool:
        """Defeat a player; already defeated or unknown players are left alone."""
        player = state.get_player(player_id)
        if player is None or not player.defeat():
            return False
        log.info("%s is defeated", player.label())
        return True

    def cleanup_after_action(self, state: GameState, report: Optional[TurnReport] = None) -> TurnReport:
        """Prune destroyed obstacles, defeat players at 0 hp, then check victory."""
        report = report if report is not None else TurnReport()

        for obstacle in state.prune_destroyed_obstacles():
            report.destroyed_obstacle_ids.append(obstacle.id)

        for player in state.players:
            if player.hp <= 0 and self.mark_defeated(state, player.id):
                report.defeated_ids.append(player.id)

        self.evaluate_victory(state, report)
        return report

    def evaluate_victory(self, state: GameState, report: Optional[TurnReport] = None) -> VictoryResult:
        """
        Finish the game if at most one player is active.

        Finishing records the winner (or a draw) and clears the turn holder.
        """
        result = self._victory.check_all(state)
        if result.is_game_over:
            state.status = GameStatus.FINISHED
            state.winner_id = result.winner_id
            state.winner_name = result.winner_name
            state.current_turn = None
            log.info("Game over: %s", result)
            if report is not None:
                report.victory = result
        return result

    def advance_turn(self, state: GameState) -> Optional[str]:
        """
        Hand the turn to the next active player in join order.

        Scans forward from the current holder, wrapping around, skipping
        defeated seats and the holder itself.

        Returns:
            Id of the new turn holder, or None if nobody else can play
        """
        if state.status != GameStatus.IN_PROGRESS:
            return state.current_turn

        count = len(state.players)
        start = state.index_of(state.current_turn)
        for offset in range(1, count + 1):
            candidate = state.players[(start + offset) % count]
            if candidate.active and candidate.id != state.current_turn:
                state.current_turn = candidate.id
                return candidate.id

        state.current_turn = None
        return None
