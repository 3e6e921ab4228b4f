"""
Player entity - a seat in the game.

Players:
- Occupy one cell while Active
- Move, attack, and place obstacles on their turn
- Lose their cell for good once Defeated
"""

from __future__ import annotations
from dataclasses import dataclass
import re
from typing import Any, Dict, Optional

from .base import Entity, _pos_from_dict, _pos_to_dict
from ..core.types import EntityKind, PlayerStatus

COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_color(color: Any) -> Optional[str]:
    """
    Validate a "#RRGGBB" color.

    Returns:
        The trimmed, upper-cased color, or None if it does not match
    """
    if not isinstance(color, str):
        return None
    trimmed = color.strip()
    if not COLOR_PATTERN.match(trimmed):
        return None
    return trimmed.upper()


def normalize_name(name: Any) -> Optional[str]:
    """Return the trimmed display name, or None if it is empty."""
    if not isinstance(name, str):
        return None
    trimmed = name.strip()
    return trimmed or None


@dataclass
class Player(Entity):
    """
    A participant in the game.

    Attributes:
        name: Display name (trimmed, never empty)
        color: "#RRGGBB" in upper case
        obstacle_stock: Obstacles left to place; never replenished
        status: ACTIVE while in the rotation, DEFEATED afterwards
    """

    name: str
    color: str
    obstacle_stock: int
    status: PlayerStatus = PlayerStatus.ACTIVE

    @property
    def kind(self) -> EntityKind:
        return EntityKind.PLAYER

    @property
    def active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE

    def defeat(self) -> bool:
        """
        Take the player out of the game.

        Idempotent: a player who is already defeated is left untouched.

        Returns:
            True if the player was active before the call
        """
        if not self.active:
            return False
        self.status = PlayerStatus.DEFEATED
        self.position = None
        return True

    def label(self) -> str:
        return f"{self.name}({self.id[:8]})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "color": self.color,
            "hp": self.hp,
            "position": _pos_to_dict(self.position),
            "obstacle_stock": self.obstacle_stock,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        return cls(
            id=data["id"],
            position=_pos_from_dict(data.get("position")),
            hp=data["hp"],
            name=data["name"],
            color=data["color"],
            obstacle_stock=data["obstacle_stock"],
            status=PlayerStatus(data["status"]),
        )
