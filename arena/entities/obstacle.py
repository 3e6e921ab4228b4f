"""
Obstacle entity - a destructible block placed by a player.

Obstacles block movement and absorb attacks. They outlive the player who
placed them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .base import Entity, _pos_from_dict, _pos_to_dict
from ..core.types import EntityKind


@dataclass
class Obstacle(Entity):
    """
    A block on the grid.

    Attributes:
        owner_id: Id of the player who placed it (informational only)
    """

    owner_id: Optional[str] = None

    @property
    def kind(self) -> EntityKind:
        return EntityKind.OBSTACLE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "position": _pos_to_dict(self.position),
            "hp": self.hp,
            "owner_id": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Obstacle:
        return cls(
            id=data["id"],
            position=_pos_from_dict(data.get("position")),
            hp=data["hp"],
            owner_id=data.get("owner_id"),
        )
