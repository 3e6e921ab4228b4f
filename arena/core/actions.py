"""
Action definitions and utilities.

Actions represent what a player asks to do on their turn. This module provides:
- Action dataclass
- Parsing of untrusted kind/target values
- Action serialization
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .types import ActionType, GridPos


class ActionParseError(ValueError):
    """Raised when a raw action request cannot be turned into an Action."""

    def __init__(self, error_code: str, message: str):
        super().__init__(message)
        self.error_code = error_code
        self.message = message


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_target(raw: Any) -> GridPos:
    """
    Normalize a raw target into a grid position.

    Accepts an (x, y) pair (tuple or list) or a mapping with "x" and "y" keys.
    Coordinates must be real integers; bounds are checked later against the grid.

    Raises:
        ActionParseError: If the value is not a pair of integers
    """
    if isinstance(raw, Mapping):
        if "x" not in raw or "y" not in raw:
            raise ActionParseError("INVALID_TARGET", "Target must have 'x' and 'y' coordinates.")
        x, y = raw["x"], raw["y"]
    elif isinstance(raw, (tuple, list)) and len(raw) == 2:
        x, y = raw
    else:
        raise ActionParseError("INVALID_TARGET", "Target must be an (x, y) cell.")

    if not (_is_int(x) and _is_int(y)):
        raise ActionParseError("INVALID_TARGET", "Target coordinates must be integers.")
    return (x, y)


def parse_action_type(raw: Any) -> ActionType:
    """
    Resolve an ActionType from an enum member or its name.

    Raises:
        ActionParseError: If the value names no action
    """
    if isinstance(raw, ActionType):
        return raw
    if isinstance(raw, str) and raw.strip().upper() in ActionType.__members__:
        return ActionType[raw.strip().upper()]
    raise ActionParseError("UNKNOWN_ACTION", f"Unknown action: {raw!r}.")


@dataclass(frozen=True)
class Action:
    """
    An action requested by a player.

    Every action kind takes a single target cell. Untrusted input goes
    through parse():
        - Action.parse("MOVE", {"x": 3, "y": 0})
    """

    type: ActionType
    target: GridPos

    @classmethod
    def parse(cls, kind: Any, target: Any) -> Action:
        """
        Build an action from untrusted values.

        Raises:
            ActionParseError: If the kind or target is malformed
        """
        return cls(type=parse_action_type(kind), target=parse_target(target))

    def to_dict(self) -> Dict[str, Any]:
        """Convert action to the wire format used by clients."""
        return {
            "actionType": self.type.name,
            "target": {"x": self.target[0], "y": self.target[1]},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Action:
        """
        Create an action from a wire dictionary.

        Raises:
            ActionParseError: If the dictionary is malformed
        """
        return cls.parse(data.get("actionType"), data.get("target"))

    def __str__(self) -> str:
        return f"{self.type.name} {self.target}"

