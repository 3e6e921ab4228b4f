from typing import Any, Dict, List

from arena.core.types import GameStatus
from arena.world import GameState


def extract_events(
    *,
    prev_state: GameState,
    state: GameState,
) -> List[Dict[str, Any]]:
    """
    Diff two snapshots into the notable things that happened in between.
    """
    events: List[Dict[str, Any]] = []

    # ---------------------------------------------------------
    # 1. LIFECYCLE
    # ---------------------------------------------------------
    if prev_state.status == GameStatus.LOBBY and state.status == GameStatus.IN_PROGRESS:
        events.append({
            "type": "GAME_STARTED",
            "players": [p.id for p in state.players],
            "first_turn": state.current_turn,
        })

    # ---------------------------------------------------------
    # 2. DEFEATS (irreversible)
    # ---------------------------------------------------------
    # A player missing from the new roster left mid-game, which counts as a defeat.
    current_players = {p.id: p for p in state.players}
    if prev_state.status == GameStatus.IN_PROGRESS and state.status != GameStatus.LOBBY:
        for before in prev_state.players:
            after = current_players.get(before.id)
            if before.active and (after is None or not after.active):
                events.append({
                    "type": "PLAYER_DEFEATED",
                    "player_id": before.id,
                    "name": before.name,
                    "last_position": before.position,
                    "left": after is None,
                })

    # ---------------------------------------------------------
    # 3. BOARD
    # ---------------------------------------------------------
    current_obstacles = {o.id for o in state.obstacles}
    for obstacle in prev_state.obstacles:
        if obstacle.id not in current_obstacles and state.status != GameStatus.LOBBY:
            events.append({
                "type": "OBSTACLE_DESTROYED",
                "obstacle_id": obstacle.id,
                "position": obstacle.position,
                "owner_id": obstacle.owner_id,
            })

    # ---------------------------------------------------------
    # 4. TERMINAL
    # ---------------------------------------------------------
    if prev_state.status != GameStatus.FINISHED and state.status == GameStatus.FINISHED:
        events.append({
            "type": "GAME_OVER",
            "winner_id": state.winner_id,
            "winner_name": state.winner_name,
        })

    return events
