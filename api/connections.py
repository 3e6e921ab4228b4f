"""
connections.py - WebSocket connection registry.

Keeps track of every open socket and whether it is bound to a player or only
watching, and sends messages to one socket or to all of them.

Usage:
    connections = ConnectionManager()
    await connections.connect(websocket)
    await connections.send(websocket, "GAME_STATE_UPDATE", snapshot)
    await connections.broadcast("GAME_OVER", {"winnerPseudo": "Alice"})
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from api.schema import ServerMessage
from infra.logger import get_logger

log = get_logger(__name__)

SPECTATOR = "spectator"
PLAYER = "player"


@dataclass
class ClientMeta:
    """What a connection is allowed to do."""
    role: str = SPECTATOR
    player_id: Optional[str] = None

    @property
    def is_player(self) -> bool:
        return self.role == PLAYER


class ConnectionManager:
    """Registry of open sockets -> ClientMeta."""

    def __init__(self):
        self._clients: Dict[WebSocket, ClientMeta] = {}

    async def connect(self, websocket: WebSocket) -> ClientMeta:
        """Accept a socket; every connection starts as a spectator."""
        await websocket.accept()
        meta = ClientMeta()
        self._clients[websocket] = meta
        log.info("Client connected (%d open)", len(self._clients))
        return meta

    def disconnect(self, websocket: WebSocket) -> Optional[ClientMeta]:
        """Forget a socket and return what it was."""
        meta = self._clients.pop(websocket, None)
        log.info("Client disconnected (%d open)", len(self._clients))
        return meta

    def get(self, websocket: WebSocket) -> ClientMeta:
        return self._clients.get(websocket, ClientMeta())

    def bind_player(self, websocket: WebSocket, player_id: str) -> None:
        self._clients[websocket] = ClientMeta(role=PLAYER, player_id=player_id)

    def demote_all(self) -> None:
        """Turn every connection back into a spectator (after a reset)."""
        for websocket in list(self._clients):
            self._clients[websocket] = ClientMeta()

    def sockets(self) -> List[WebSocket]:
        return list(self._clients)

    async def send(self, websocket: WebSocket, type_: str, payload: Dict[str, Any]) -> None:
        """Send one message to one socket if it is still open."""
        if websocket.application_state != WebSocketState.CONNECTED:
            return
        message = ServerMessage(type=type_, payload=payload)
        try:
            await websocket.send_json(message.model_dump())
        except (WebSocketDisconnect, RuntimeError) as exc:
            log.warning("Dropping %s for a closed socket: %s", type_, exc)

    async def broadcast(self, type_: str, payload: Dict[str, Any]) -> None:
        """Send one message to every open socket."""
        for websocket in self.sockets():
            await self.send(websocket, type_, payload)

    def __len__(self) -> int:
        return len(self._clients)
