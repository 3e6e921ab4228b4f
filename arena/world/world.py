"""
GameState - the single source of truth of a game.

The GameState:
- Holds the lifecycle status, grid size, players (in join order) and obstacles
- Answers occupancy lookups for the Grid
- Serializes to and from plain dicts (snapshots are clones)

It does NOT apply game rules:
- Action legality and effects live in the mechanics resolvers
- Turn rotation and victory live in the LifecycleController
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .grid import Grid, Occupant
from ..core.types import EntityKind, GameStatus, GridPos
from ..entities import Obstacle, Player


class GameState:
    """
    The central game state.

    Attributes:
        status: LOBBY, IN_PROGRESS or FINISHED
        grid_size: Width and height of the board
        players: Players in join order (join order is turn order)
        obstacles: Obstacles currently on the board
        current_turn: Id of the player whose action is accepted, or None
        winner_id: Id of the last player standing (None for a draw or an unfinished game)
        winner_name: Display name of the winner
    """

    def __init__(self, grid_size: int):
        """
        Create an empty Lobby.

        Args:
            grid_size: Board width and height

        Raises:
            ValueError: If the size is not positive
        """
        if grid_size <= 0:
            raise ValueError(f"Grid size must be positive: {grid_size}")

        self.status: GameStatus = GameStatus.LOBBY
        self.grid_size: int = grid_size
        self.players: List[Player] = []
        self.obstacles: List[Obstacle] = []
        self.current_turn: Optional[str] = None
        self.winner_id: Optional[str] = None
        self.winner_name: Optional[str] = None

    @property
    def grid(self) -> Grid:
        """Spatial queries over the live board."""
        return Grid(self.grid_size, self.occupant_at)

    # ========================================================================
    # PLAYER ACCESS
    # ========================================================================

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def index_of(self, player_id: Optional[str]) -> int:
        """Index of a player in join order, or -1."""
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return -1

    def get_active_players(self) -> List[Player]:
        return [p for p in self.players if p.active]

    # ========================================================================
    # OCCUPANCY
    # ========================================================================

    def player_at(self, pos: GridPos) -> Optional[Player]:
        """Active player standing on a cell (defeated players stand nowhere)."""
        return next((p for p in self.players if p.active and p.position == pos), None)

    def obstacle_at(self, pos: GridPos) -> Optional[Obstacle]:
        return next((o for o in self.obstacles if o.position == pos), None)

    def occupant_at(self, pos: GridPos) -> Optional[Occupant]:
        """
        Find what occupies a cell, players first.

        Args:
            pos: Cell to inspect

        Returns:
            Occupant tagged with its kind, or None if the cell is free
        """
        player = self.player_at(pos)
        if player is not None:
            return Occupant(EntityKind.PLAYER, player)
        obstacle = self.obstacle_at(pos)
        if obstacle is not None:
            return Occupant(EntityKind.OBSTACLE, obstacle)
        return None

    def is_position_occupied(self, pos: GridPos) -> bool:
        return self.occupant_at(pos) is not None

    # ========================================================================
    # OBSTACLES
    # ========================================================================

    def add_obstacle(self, obstacle: Obstacle) -> None:
        """
        Put an obstacle on the board.

        Raises:
            ValueError: If its cell is out of bounds or occupied
        """
        if obstacle.position is None or not self.grid.in_bounds(obstacle.position):
            raise ValueError(f"Obstacle position out of bounds: {obstacle.position}")
        if self.is_position_occupied(obstacle.position):
            raise ValueError(f"Position already occupied: {obstacle.position}")
        self.obstacles.append(obstacle)

    def prune_destroyed_obstacles(self) -> List[Obstacle]:
        """Drop obstacles with no hit points left and return them."""
        destroyed = [o for o in self.obstacles if o.destroyed]
        if destroyed:
            self.obstacles = [o for o in self.obstacles if not o.destroyed]
        return destroyed

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the game to a dictionary.

        Returns:
            JSON-serializable dictionary of the complete game state
        """
        return {
            "status": self.status.value,
            "grid_size": self.grid_size,
            "players": [player.to_dict() for player in self.players],
            "obstacles": [obstacle.to_dict() for obstacle in self.obstacles],
            "current_turn": self.current_turn,
            "winner_id": self.winner_id,
            "winner_name": self.winner_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameState:
        """
        Deserialize a game from a dictionary.

        Args:
            data: Dictionary from to_dict()

        Returns:
            Reconstructed GameState
        """
        state = cls(grid_size=data["grid_size"])
        state.status = GameStatus(data["status"])
        state.players = [Player.from_dict(p) for p in data.get("players", [])]
        state.obstacles = [Obstacle.from_dict(o) for o in data.get("obstacles", [])]
        state.current_turn = data.get("current_turn")
        state.winner_id = data.get("winner_id")
        state.winner_name = data.get("winner_name")
        return state

    def clone(self) -> GameState:
        """
        Create a deep copy of this game state.

        The copy shares no objects with this state, so it can be handed to
        other code (broadcast, tests) without exposing the live state.

        Returns:
            Independent copy of this GameState
        """
        return GameState.from_dict(self.to_dict())

    def __str__(self) -> str:
        """String representation."""
        active = len(self.get_active_players())
        return (f"GameState(status={self.status}, players={active}/{len(self.players)}, "
                f"obstacles={len(self.obstacles)}, grid={self.grid_size}x{self.grid_size})")

    def __repr__(self) -> str:
        """Detailed representation."""
        return (f"GameState(status={self.status!r}, grid_size={self.grid_size}, "
                f"players={len(self.players)}, current_turn={self.current_turn!r})")
