"""
Victory condition checking for the Grid Arena engine.

This module provides pure logic for determining the game outcome:
- Last player standing wins
- Nobody standing is a draw

Applying the outcome to the state is the LifecycleController's job.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.types import GameStatus

if TYPE_CHECKING:
    from ..world.world import GameState


class GameResult(Enum):
    """Possible game outcomes."""
    IN_PROGRESS = "in_progress"
    WIN = "win"
    DRAW = "draw"

    def __str__(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass
class VictoryResult:
    """
    Result of a victory condition check.

    Attributes:
        result: Game outcome (IN_PROGRESS, WIN, DRAW)
        reason: Human-readable explanation of the outcome
        winner_id: Id of the winning player (None if draw or in progress)
        winner_name: Display name of the winning player
    """
    result: GameResult
    reason: str
    winner_id: Optional[str] = None
    winner_name: Optional[str] = None

    @property
    def is_game_over(self) -> bool:
        """Check if the game has ended."""
        return self.result != GameResult.IN_PROGRESS

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.result == GameResult.IN_PROGRESS:
            return "Game in progress"
        return f"{self.result}: {self.reason}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize victory result to a plain dict."""
        return {
            "result": self.result.name,
            "reason": self.reason,
            "winner_id": self.winner_id,
            "winner_name": self.winner_name,
        }


class VictoryConditions:
    """
    Stateless checker for game victory conditions.

    Usage:
        result = VictoryConditions().check_all(state)

        if result.is_game_over:
            print(f"Game Over: {result.reason}")
    """

    def check_all(self, state: GameState) -> VictoryResult:
        """
        Check whether the running game has just ended.

        Only a game that is InProgress can end: a Lobby is never decided and a
        Finished game keeps its recorded outcome.

        Args:
            state: Current game state

        Returns:
            VictoryResult indicating the outcome
        """
        if state.status != GameStatus.IN_PROGRESS:
            return VictoryResult(
                result=GameResult.IN_PROGRESS,
                reason=f"Game is {state.status}",
            )
        return self.check_last_player_standing(state)

    def check_last_player_standing(self, state: GameState) -> VictoryResult:
        """
        Count active players.

        - Exactly one left: that player wins
        - None left: draw
        - Otherwise the game continues
        """
        active = state.get_active_players()

        if len(active) == 1:
            winner = active[0]
            return VictoryResult(
                result=GameResult.WIN,
                reason=f"{winner.name} is the last player standing",
                winner_id=winner.id,
                winner_name=winner.name,
            )

        if not active:
            return VictoryResult(
                result=GameResult.DRAW,
                reason="No player left standing - DRAW",
            )

        return VictoryResult(
            result=GameResult.IN_PROGRESS,
            reason=f"{len(active)} players still standing",
        )
