"""
Game rules - the fixed numeric constants of a session.

Rules are chosen once when a GameManager is created and are never changed
while that manager lives. Every client must be built against the same values.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class GameRules:
    """
    Numeric rules shared by the engine and its clients.

    Attributes:
        max_players: Seats in a game; the last seat starts the game
        player_hp: Starting hit points of a player
        obstacle_hp: Starting hit points of a placed obstacle
        obstacle_stock: Obstacles each player may place in a game
        attack_cost: Hit points the attacker pays per attack
        attack_damage: Hit points removed from the struck entity
        move_range: Maximum cells covered by one move
        attack_range: Maximum cells reached by one attack
        allowed_grid_sizes: Grid sizes a first joiner may request
        default_grid_size: Grid size of a fresh process
    """
    max_players: int = 4
    player_hp: int = 10
    obstacle_hp: int = 2
    obstacle_stock: int = 3
    attack_cost: int = 0
    attack_damage: int = 2
    move_range: int = 3
    attack_range: int = 2
    allowed_grid_sizes: Tuple[int, ...] = field(default=(9, 11, 13))
    default_grid_size: int = 9

    def __post_init__(self):
        if self.max_players <= 0:
            raise ValueError(f"max_players must be positive: {self.max_players}")
        if self.max_players > 4:
            raise ValueError(f"Only four starting corners exist: {self.max_players}")
        if self.default_grid_size not in self.allowed_grid_sizes:
            raise ValueError(
                f"Default grid size {self.default_grid_size} not in {self.allowed_grid_sizes}"
            )
        if self.attack_cost < 0 or self.attack_damage < 0:
            raise ValueError("Attack cost and damage cannot be negative")

    def is_allowed_grid_size(self, size: Any) -> bool:
        """Check a (possibly untrusted) grid size against the allow-list."""
        return isinstance(size, int) and not isinstance(size, bool) and size in self.allowed_grid_sizes

    def with_default_grid_size(self, size: int) -> GameRules:
        """Return a copy starting on another allow-listed grid size."""
        return replace(self, default_grid_size=size)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize rules for clients."""
        return {
            "max_players": self.max_players,
            "player_hp": self.player_hp,
            "obstacle_hp": self.obstacle_hp,
            "obstacle_stock": self.obstacle_stock,
            "attack_cost": self.attack_cost,
            "attack_damage": self.attack_damage,
            "move_range": self.move_range,
            "attack_range": self.attack_range,
            "allowed_grid_sizes": list(self.allowed_grid_sizes),
            "default_grid_size": self.default_grid_size,
        }


DEFAULT_RULES = GameRules()
