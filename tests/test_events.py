from arena import GameManager, GameState
from runtime.events import extract_events

from helpers import build_state, manager_for, seat_players


def event_types(events):
    return [event["type"] for event in events]


def test_game_started_event():
    game = GameManager()
    seat_players(game, count=3)
    before = game.snapshot()
    assert game.join("Dave", "#FFFF00").joined

    events = extract_events(prev_state=before, state=game.snapshot())
    assert event_types(events) == ["GAME_STARTED"]
    assert events[0]["first_turn"] == game.snapshot().players[0].id


def test_defeat_and_game_over_events():
    game = manager_for(build_state([(0, 0), (0, 1), None, None], hp=(10, 2)))
    before = game.snapshot()
    game.request_action("p1", "ATTACK", (0, 1))

    events = extract_events(prev_state=before, state=game.snapshot())
    assert event_types(events) == ["PLAYER_DEFEATED", "GAME_OVER"]
    assert events[0]["player_id"] == "p2"
    assert events[0]["last_position"] == (0, 1)
    assert events[1]["winner_id"] == "p1"


def test_obstacle_destroyed_event():
    state = build_state([(0, 0), (8, 0), (0, 8), (8, 8)], obstacles=[((0, 1), 2, "p3")])
    game = manager_for(state)
    before = game.snapshot()
    game.request_action("p1", "ATTACK", (0, 1))

    events = extract_events(prev_state=before, state=game.snapshot())
    assert events == [{"type": "OBSTACLE_DESTROYED", "obstacle_id": "o1", "position": (0, 1), "owner_id": "p3"}]


def test_reset_does_not_report_obstacles_as_destroyed():
    before = build_state([(0, 0), None, None, None], obstacles=[((0, 1), 2, None)])
    assert extract_events(prev_state=before, state=GameState(grid_size=9)) == []


def test_leaving_mid_game_is_reported_as_a_defeat():
    game = manager_for(build_state([(0, 0), (8, 0), (0, 8), (8, 8)]))
    before = game.snapshot()
    game.leave("p3")

    events = extract_events(prev_state=before, state=game.snapshot())
    assert events == [{
        "type": "PLAYER_DEFEATED",
        "player_id": "p3",
        "name": "Carol",
        "last_position": (0, 8),
        "left": True,
    }]


def test_leaving_the_lobby_is_not_a_defeat():
    game = GameManager()
    ids = seat_players(game, count=2)
    before = game.snapshot()
    game.leave(ids[1])
    assert extract_events(prev_state=before, state=game.snapshot()) == []
