"""
HTTP and WebSocket tests for the game server.

Each test builds its own app around a fresh GameManager so the module-level
app (and its process-wide game) is never touched.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from arena import GameManager, GameRules
from infra.settings import Settings

from helpers import seat_players


@pytest.fixture
def game():
    return GameManager()


@pytest.fixture
def client(game):
    return TestClient(create_app(game, Settings(_env_file=None)))


def join(ws, name="Alice", color="#FF0000", **extra):
    ws.send_json({"type": "JOIN_GAME", "payload": {"pseudo": name, "couleur": color, **extra}})


def act(ws, kind, x, y):
    ws.send_json({"type": "REQUEST_ACTION", "payload": {"actionType": kind, "target": {"x": x, "y": y}}})


def receive(ws, expected_type):
    message = ws.receive_json()
    assert message["type"] == expected_type, message
    return message["payload"]


# ============================================================================
# HTTP
# ============================================================================

def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_state_and_rules(client, game):
    seat_players(game, count=1)
    state = client.get("/api/state").json()
    assert state["status"] == "Lobby"
    assert state["players"][0]["name"] == "Alice"

    rules = client.get("/api/rules").json()
    assert rules["player_hp"] == 10
    assert rules["attack_range"] == 2


def test_targets_endpoint(client, game):
    ids = seat_players(game)
    response = client.get(f"/api/players/{ids[0]}/targets", params={"kind": "place_obstacle"})
    assert response.json() == {
        "kind": "PLACE_OBSTACLE",
        "targets": [{"x": 1, "y": 0}, {"x": 0, "y": 1}, {"x": 1, "y": 1}],
    }


def test_reset_before_the_game_is_over_is_a_conflict(client):
    response = client.post("/api/reset")
    assert response.status_code == 409


# ============================================================================
# WEBSOCKET
# ============================================================================

def test_new_connection_receives_the_state(client):
    with client.websocket_connect("/ws") as ws:
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["status"] == "Lobby"
        assert state["players"] == []


def test_join_binds_the_socket_to_a_player(client, game):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws, gridSize=11)

        player_id = receive(ws, "JOINED_AS_PLAYER")["playerId"]
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["grid_size"] == 11
        assert state["players"][0]["id"] == player_id

        join(ws, name="Again")
        assert receive(ws, "ACTION_INVALID")["code"] == "ALREADY_JOINED"
        assert len(game.snapshot().players) == 1


def test_invalid_join_reports_the_reason(client):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws, color="blue")
        payload = receive(ws, "ACTION_INVALID")
        assert payload == {"message": "Invalid color.", "code": "INVALID_COLOR"}


def test_join_when_full_makes_a_spectator(client, game):
    seat_players(game)
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws, name="Eve")
        receive(ws, "JOINED_AS_SPECTATOR")


def test_spectators_cannot_act(client):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        act(ws, "MOVE", 0, 1)
        assert receive(ws, "ACTION_INVALID")["code"] == "SPECTATOR"


def test_actions_in_the_lobby_are_refused(client):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws)
        receive(ws, "JOINED_AS_PLAYER")
        receive(ws, "GAME_STATE_UPDATE")

        act(ws, "MOVE", 0, 1)
        assert receive(ws, "ACTION_INVALID")["code"] == "GAME_NOT_IN_PROGRESS"


@pytest.mark.parametrize(
    "send, code",
    [
        (lambda ws: ws.send_text("{not json"), "INVALID_JSON"),
        (lambda ws: ws.send_json([1, 2]), "MALFORMED_MESSAGE"),
        (lambda ws: ws.send_json({"type": "DANCE"}), "UNKNOWN_MESSAGE"),
        (lambda ws: ws.send_json({"type": "RESET_GAME"}), "GAME_NOT_FINISHED"),
    ],
)
def test_bad_messages_are_answered_with_a_reason(client, send, code):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        send(ws)
        assert receive(ws, "ACTION_INVALID")["code"] == code


def test_full_game_over_the_socket():
    game = GameManager(rules=GameRules(max_players=2, attack_damage=10))
    client = TestClient(create_app(game, Settings(_env_file=None)))
    bot = game.join("Bot", "#00FF00").player.id

    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws, name="Bob")
        me = receive(ws, "JOINED_AS_PLAYER")["playerId"]
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["status"] == "InProgress"
        assert state["current_turn"] == bot

        assert game.request_action(bot, "MOVE", (2, 0)).success
        act(ws, "MOVE", 5, 0)
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["players"][1]["position"] == {"x": 5, "y": 0}

        assert game.request_action(bot, "MOVE", (3, 0)).success
        act(ws, "ATTACK", 3, 0)
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["status"] == "Finished"
        assert receive(ws, "GAME_OVER") == {"winnerPseudo": "Bob", "winnerId": me}

        ws.send_json({"type": "RESET_GAME"})
        receive(ws, "GAME_RESET")
        state = receive(ws, "GAME_STATE_UPDATE")
        assert state["status"] == "Lobby"
        assert state["players"] == []

        act(ws, "MOVE", 0, 1)
        assert receive(ws, "ACTION_INVALID")["code"] == "SPECTATOR"


def test_disconnect_removes_the_player(client, game):
    with client.websocket_connect("/ws") as observer:
        receive(observer, "GAME_STATE_UPDATE")

        with client.websocket_connect("/ws") as ws:
            receive(ws, "GAME_STATE_UPDATE")
            join(ws)
            receive(ws, "JOINED_AS_PLAYER")
            receive(ws, "GAME_STATE_UPDATE")
            assert len(receive(observer, "GAME_STATE_UPDATE")["players"]) == 1

        assert receive(observer, "GAME_STATE_UPDATE")["players"] == []


def test_binary_frames_are_refused_without_dropping_the_player(client, game):
    with client.websocket_connect("/ws") as ws:
        receive(ws, "GAME_STATE_UPDATE")
        join(ws)
        receive(ws, "JOINED_AS_PLAYER")
        receive(ws, "GAME_STATE_UPDATE")

        ws.send_bytes(b"\x00\x01")
        assert receive(ws, "ACTION_INVALID")["code"] == "MALFORMED_MESSAGE"
        assert len(game.snapshot().players) == 1

        act(ws, "MOVE", 0, 1)
        assert receive(ws, "ACTION_INVALID")["code"] == "GAME_NOT_IN_PROGRESS"


def test_handler_failure_still_removes_the_player(client, game, monkeypatch):
    async def explode(websocket, raw):
        raise RuntimeError("handler bug")

    with client.websocket_connect("/ws") as observer:
        receive(observer, "GAME_STATE_UPDATE")

        with client.websocket_connect("/ws") as ws:
            receive(ws, "GAME_STATE_UPDATE")
            join(ws)
            receive(ws, "JOINED_AS_PLAYER")
            receive(ws, "GAME_STATE_UPDATE")
            assert len(receive(observer, "GAME_STATE_UPDATE")["players"]) == 1

            monkeypatch.setattr("api.app.handle_message", explode)
            ws.send_text("{}")
            assert receive(observer, "GAME_STATE_UPDATE")["players"] == []

        assert game.snapshot().players == []
        assert len(client.app.state.connections) == 1
