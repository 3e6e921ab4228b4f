from arena import DEFAULT_RULES, GameState, GameStatus
from arena.mechanics import GameResult, LifecycleController, VictoryConditions

from helpers import build_state


def controller():
    return LifecycleController(DEFAULT_RULES)


def test_advance_turn_wraps_around():
    state = build_state([(0, 0), (8, 0), (0, 8), (8, 8)], current=3)
    assert controller().advance_turn(state) == "p1"


def test_advance_turn_skips_defeated_seats():
    state = build_state([(0, 0), None, None, (8, 8)], current=3)
    assert controller().advance_turn(state) == "p1"
    assert controller().advance_turn(state) == "p4"


def test_advance_turn_without_holder_starts_from_first_seat():
    state = build_state([(0, 0), (8, 0), (0, 8), (8, 8)])
    state.current_turn = None
    assert controller().advance_turn(state) == "p1"


def test_advance_turn_with_nobody_else_left():
    state = build_state([(0, 0), None, None, None])
    assert controller().advance_turn(state) is None


def test_evaluate_victory_leaves_running_games_alone():
    state = build_state([(0, 0), (8, 0), None, None])
    result = controller().evaluate_victory(state)
    assert result.result == GameResult.IN_PROGRESS
    assert state.status == GameStatus.IN_PROGRESS
    assert state.current_turn == "p1"


def test_evaluate_victory_records_the_winner():
    state = build_state([None, (8, 0), None, None])
    result = controller().evaluate_victory(state)
    assert result.result == GameResult.WIN
    assert state.status == GameStatus.FINISHED
    assert state.winner_id == "p2"
    assert state.winner_name == "Bob"
    assert state.current_turn is None


def test_victory_is_not_decided_in_the_lobby():
    state = GameState(grid_size=9)
    assert not VictoryConditions().check_all(state).is_game_over


def test_cleanup_defeats_players_without_hp_and_prunes_obstacles():
    state = build_state(
        [(0, 0), (8, 0), (0, 8), (8, 8)],
        hp=(10, 0),
        obstacles=[((4, 4), 0, None), ((5, 5), 1, "p1")],
    )
    report = controller().cleanup_after_action(state)

    assert report.defeated_ids == ["p2"]
    assert report.destroyed_obstacle_ids == ["o1"]
    assert [o.id for o in state.obstacles] == ["o2"]
    assert state.get_player("p2").position is None


def test_mark_defeated_is_idempotent():
    state = build_state([(0, 0), (8, 0), (0, 8), (8, 8)])
    lifecycle = controller()
    assert lifecycle.mark_defeated(state, "p2")
    assert not lifecycle.mark_defeated(state, "p2")
    assert not lifecycle.mark_defeated(state, "ghost")
