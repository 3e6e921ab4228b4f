"""HTTP + WebSocket entrypoint that lets browser clients play the game."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from api.connections import ConnectionManager
from api.schema import ActionPayload, ClientMessage, JoinPayload
from arena import GameManager, GameState, GameStatus
from infra.logger import get_logger
from infra.settings import Settings, get_settings
from runtime.events import extract_events
from runtime.logfire_config import configure_logfire

log = get_logger(__name__)


def create_app(game: Optional[GameManager] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application around one GameManager.

    Args:
        game: Engine to serve; a new one built from settings by default
        settings: Process settings; read from the environment by default
    """
    settings = settings or get_settings()
    app = FastAPI(title="Grid Arena")
    app.state.game = game or GameManager(rules=settings.game_rules())
    app.state.connections = ConnectionManager()

    # Allow the browser client (served from file:// or other origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_http_routes(app)
    _register_websocket_route(app)

    configure_logfire(app, enabled=settings.logfire)
    return app


# ============================================================================
# SHARED BROADCAST HELPERS
# ============================================================================

async def broadcast_game_state(app: FastAPI, before: Optional[GameState] = None) -> None:
    """Push the current snapshot to everyone, plus GAME_OVER while the game is finished."""
    game: GameManager = app.state.game
    connections: ConnectionManager = app.state.connections

    snapshot = game.snapshot()
    if before is not None:
        for event in extract_events(prev_state=before, state=snapshot):
            log.info("Game event: %s", event)

    await connections.broadcast("GAME_STATE_UPDATE", snapshot.to_dict())
    if snapshot.status == GameStatus.FINISHED:
        await connections.broadcast(
            "GAME_OVER",
            {"winnerPseudo": snapshot.winner_name, "winnerId": snapshot.winner_id},
        )


async def perform_reset(app: FastAPI) -> bool:
    """Reset a finished game and send every client back to the lobby as a spectator."""
    game: GameManager = app.state.game
    connections: ConnectionManager = app.state.connections

    validation = game.reset()
    if not validation.valid:
        return False

    connections.demote_all()
    await connections.broadcast("GAME_RESET", {"message": validation.message})
    await broadcast_game_state(app)
    return True


# ============================================================================
# HTTP
# ============================================================================

def _register_http_routes(app: FastAPI) -> None:

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/state")
    def state(request: Request):
        return request.app.state.game.snapshot().to_dict()

    @app.get("/api/rules")
    def rules(request: Request):
        return request.app.state.game.rules.to_dict()

    @app.get("/api/players/{player_id}/targets")
    def targets(player_id: str, kind: str, request: Request):
        cells = request.app.state.game.legal_targets(player_id, kind)
        return {"kind": kind.upper(), "targets": [{"x": x, "y": y} for x, y in cells]}

    @app.post("/api/reset")
    async def reset(request: Request):
        if not await perform_reset(request.app):
            raise HTTPException(409, "Game is not finished yet.")
        return request.app.state.game.snapshot().to_dict()


# ============================================================================
# WEBSOCKET
# ============================================================================

def _register_websocket_route(app: FastAPI) -> None:

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        connections: ConnectionManager = websocket.app.state.connections
        game: GameManager = websocket.app.state.game

        await connections.connect(websocket)
        await connections.send(websocket, "GAME_STATE_UPDATE", game.snapshot().to_dict())

        try:
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    break
                raw = frame.get("text")
                if raw is None:
                    await _invalid(websocket, "Only text messages are accepted.", "MALFORMED_MESSAGE")
                    continue
                await handle_message(websocket, raw)
        except WebSocketDisconnect:
            pass
        except Exception:
            log.exception("WebSocket handler failed, dropping %s", connections.get(websocket))
        finally:
            await handle_disconnect(websocket)


async def handle_message(websocket: WebSocket, raw: str) -> None:
    """Route one raw client message."""
    connections: ConnectionManager = websocket.app.state.connections

    try:
        message = ClientMessage.model_validate(json.loads(raw))
    except json.JSONDecodeError:
        await _invalid(websocket, "Invalid JSON message.", "INVALID_JSON")
        return
    except ValidationError:
        await _invalid(websocket, "Malformed message.", "MALFORMED_MESSAGE")
        return

    if message.type == "JOIN_GAME":
        await handle_join(websocket, message.payload)
    elif message.type == "REQUEST_ACTION":
        await handle_request_action(websocket, message.payload)
    elif message.type == "RESET_GAME":
        if not await perform_reset(websocket.app):
            await _invalid(websocket, "Game is not finished yet.", "GAME_NOT_FINISHED")
    else:
        log.debug("Unknown message type %r from %s", message.type, connections.get(websocket))
        await _invalid(websocket, "Unknown message type.", "UNKNOWN_MESSAGE")


async def handle_join(websocket: WebSocket, payload: Dict[str, Any]) -> None:
    connections: ConnectionManager = websocket.app.state.connections
    game: GameManager = websocket.app.state.game

    if connections.get(websocket).is_player:
        await _invalid(websocket, "Player already joined.", "ALREADY_JOINED")
        return

    try:
        join = JoinPayload.model_validate(payload)
    except ValidationError:
        await _invalid(websocket, "Malformed join request.", "MALFORMED_MESSAGE")
        return

    before = game.snapshot()
    result = game.join(join.display_name, join.display_color, join.grid_size_hint())

    if result.joined:
        connections.bind_player(websocket, result.player.id)
        await connections.send(websocket, "JOINED_AS_PLAYER", {"playerId": result.player.id})
        await broadcast_game_state(websocket.app, before)
    elif result.error_code == "LOBBY_FULL":
        await connections.send(websocket, "JOINED_AS_SPECTATOR", {"message": result.message})
    else:
        await _invalid(websocket, result.message, result.error_code)


async def handle_request_action(websocket: WebSocket, payload: Dict[str, Any]) -> None:
    connections: ConnectionManager = websocket.app.state.connections
    game: GameManager = websocket.app.state.game

    meta = connections.get(websocket)
    if not meta.is_player:
        await _invalid(websocket, "Spectators are not allowed.", "SPECTATOR")
        return

    try:
        request = ActionPayload.model_validate(payload)
    except ValidationError:
        await _invalid(websocket, "Malformed action request.", "MALFORMED_MESSAGE")
        return

    before = game.snapshot()
    outcome = game.request_action(meta.player_id, request.actionType, request.target)
    if not outcome.success:
        await _invalid(websocket, outcome.validation.message, outcome.validation.error_code)
        return

    await broadcast_game_state(websocket.app, before)


async def handle_disconnect(websocket: WebSocket) -> None:
    connections: ConnectionManager = websocket.app.state.connections
    game: GameManager = websocket.app.state.game

    meta = connections.disconnect(websocket)
    if meta is None or not meta.is_player:
        return

    before = game.snapshot()
    game.leave(meta.player_id)
    await broadcast_game_state(websocket.app, before)


async def _invalid(websocket: WebSocket, message: str, code: Optional[str]) -> None:
    await websocket.app.state.connections.send(
        websocket, "ACTION_INVALID", {"message": message, "code": code}
    )


app = create_app()
