"""Message shapes exchanged with clients over the WebSocket."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ClientMessage(BaseModel):
    """Envelope of every client message: {"type": ..., "payload": {...}}."""
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class JoinPayload(BaseModel):
    """
    JOIN_GAME payload.

    Both the French keys sent by the browser client (pseudo, couleur) and
    English keys are accepted. Values are not type-checked here: the engine
    rejects bad names and colors with a proper reason.
    """
    pseudo: Any = None
    name: Any = None
    couleur: Any = None
    color: Any = None
    gridSize: Any = None

    @property
    def display_name(self) -> Any:
        return self.pseudo if self.pseudo is not None else self.name

    @property
    def display_color(self) -> Any:
        return self.couleur if self.couleur is not None else self.color

    def grid_size_hint(self) -> Optional[int]:
        """Integer grid size if one was sent, else None; allow-listing is the engine's job."""
        value = self.gridSize
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None


class ActionPayload(BaseModel):
    """REQUEST_ACTION payload: {"actionType": "MOVE", "target": {"x": 0, "y": 3}}."""
    actionType: Any = None
    target: Any = None


class ServerMessage(BaseModel):
    """Envelope of every server message."""
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)
