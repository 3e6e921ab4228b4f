import pytest

from arena.core.actions import Action, ActionParseError, parse_target
from arena.core.rules import GameRules
from arena.core.types import ActionType
from arena.entities import normalize_color, normalize_name


def test_parse_target_accepts_pairs_and_mappings():
    assert parse_target((1, 2)) == (1, 2)
    assert parse_target([3, 4]) == (3, 4)
    assert parse_target({"x": 5, "y": 6}) == (5, 6)


@pytest.mark.parametrize("raw", [None, "1,2", (1,), {"x": 1}, (1.5, 2), (True, 0), {"x": "1", "y": 2}])
def test_parse_target_rejects_malformed_values(raw):
    with pytest.raises(ActionParseError) as exc_info:
        parse_target(raw)
    assert exc_info.value.error_code == "INVALID_TARGET"


def test_action_parse_accepts_names_case_insensitively():
    action = Action.parse("place_obstacle", {"x": 1, "y": 1})
    assert action == Action(ActionType.PLACE_OBSTACLE, (1, 1))
    assert action.type == ActionType.PLACE_OBSTACLE


def test_action_parse_rejects_unknown_kind():
    with pytest.raises(ActionParseError) as exc_info:
        Action.parse("JUMP", (0, 1))
    assert exc_info.value.error_code == "UNKNOWN_ACTION"


def test_action_wire_format():
    action = Action(ActionType.ATTACK, (2, 0))
    assert action.to_dict() == {"actionType": "ATTACK", "target": {"x": 2, "y": 0}}
    assert Action.from_dict(action.to_dict()) == action


def test_color_normalization():
    assert normalize_color(" #ff00aa ") == "#FF00AA"
    assert normalize_color("#FFF") is None
    assert normalize_color("#12345G") is None
    assert normalize_color("red") is None
    assert normalize_color(0xFF0000) is None


def test_name_normalization():
    assert normalize_name("  Alice ") == "Alice"
    assert normalize_name("   ") is None
    assert normalize_name(None) is None


def test_rules_reject_default_grid_size_outside_allow_list():
    with pytest.raises(ValueError):
        GameRules(default_grid_size=10)


def test_rules_grid_size_check_ignores_non_integers():
    rules = GameRules()
    assert rules.is_allowed_grid_size(11)
    assert not rules.is_allowed_grid_size("11")
    assert not rules.is_allowed_grid_size(True)
    assert not rules.is_allowed_grid_size(10)
