"""
Entity base class shared by players and obstacles.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from ..core.types import EntityKind, GridPos


@dataclass
class Entity:
    """
    Anything that can occupy a grid cell and take damage.

    Attributes:
        id: Opaque unique id
        position: Current cell, or None once removed from the grid
        hp: Remaining hit points
    """

    id: str
    position: Optional[GridPos]
    hp: int

    @property
    def kind(self) -> EntityKind:
        raise NotImplementedError

    def take_damage(self, amount: int) -> int:
        """Remove hit points and return what is left (may go below zero)."""
        self.hp -= amount
        return self.hp

    @property
    def destroyed(self) -> bool:
        return self.hp <= 0

    def label(self) -> str:
        return f"{self.kind.value}#{self.id[:8]}"


def _pos_to_dict(pos: Optional[GridPos]) -> Optional[Dict[str, int]]:
    if pos is None:
        return None
    return {"x": pos[0], "y": pos[1]}


def _pos_from_dict(data: Optional[Dict[str, int]]) -> Optional[GridPos]:
    if data is None:
        return None
    return (int(data["x"]), int(data["y"]))
