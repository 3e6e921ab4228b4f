"""Builders shared by the test modules."""

from typing import Optional, Sequence, Tuple

from arena import DEFAULT_RULES, GameManager, GameRules, GameState, GameStatus, Obstacle, Player
from arena.core.types import PlayerStatus
from arena.utils import IDGenerator

COLORS = ["#FF0000", "#00FF00", "#0000FF", "#FFFF00"]
NAMES = ["Alice", "Bob", "Carol", "Dave"]


def seat_players(game: GameManager, count: int = 4, grid_size_hint=None) -> list:
    """Join `count` players through the public API and return their ids."""
    ids = []
    for index in range(count):
        hint = grid_size_hint if index == 0 else None
        result = game.join(NAMES[index], COLORS[index], hint)
        assert result.joined, result.message
        ids.append(result.player.id)
    return ids


def build_state(
    positions: Sequence[Optional[Tuple[int, int]]],
    *,
    obstacles: Sequence[Tuple[Tuple[int, int], int, Optional[str]]] = (),
    hp: Sequence[int] = (),
    stock: Sequence[int] = (),
    grid_size: int = 9,
    current: int = 0,
    rules: GameRules = DEFAULT_RULES,
) -> GameState:
    """
    Build an in-progress game by hand.

    Players get ids p1, p2, ... in order; a position of None makes that player
    Defeated. Obstacles are (position, hp, owner_id) and get ids o1, o2, ...
    """
    state = GameState(grid_size=grid_size)
    state.status = GameStatus.IN_PROGRESS
    for index, pos in enumerate(positions):
        player = Player(
            id=f"p{index + 1}",
            position=pos,
            hp=hp[index] if index < len(hp) else rules.player_hp,
            name=NAMES[index],
            color=COLORS[index],
            obstacle_stock=stock[index] if index < len(stock) else rules.obstacle_stock,
        )
        if pos is None:
            player.status = PlayerStatus.DEFEATED
        state.players.append(player)
    for index, (pos, obstacle_hp, owner) in enumerate(obstacles):
        state.obstacles.append(Obstacle(id=f"o{index + 1}", position=pos, hp=obstacle_hp, owner_id=owner))
    state.current_turn = state.players[current].id
    return state


def manager_for(state: GameState, rules: GameRules = DEFAULT_RULES) -> GameManager:
    """A GameManager driving a hand-built state; new entities get ids n1, n2, ..."""
    game = GameManager(rules=rules, id_factory=IDGenerator("n"))
    game._state = state
    return game
