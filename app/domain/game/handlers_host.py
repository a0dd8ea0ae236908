# app/domain/game/handlers_host.py
from __future__ import annotations

from typing import Any, List, Tuple

from app.domain.common.events import error, game_state_for_all
from app.domain.common.resolve import resolve_room
from app.domain.common.validation import is_host
from app.transport.protocols import InNextRound, InPlayAgain, InStartGame

Outgoing = List[Any]
Result = Tuple[Outgoing, Outgoing]


async def handle_start_game(*, ctx, conn_id: str, msg: InStartGame) -> Result:
    pid, room = resolve_room(ctx, conn_id)
    if room is None:
        return [], []
    # only the host may start; anyone else is ignored
    if not is_host(room, pid) or room.phase != "lobby":
        return [], []

    if len(room.players) < room.min_players:
        return [error("NOT_ENOUGH_PLAYERS", f"Need at least {room.min_players} players")], []

    if not room.start_game(pid):
        return [], []
    return [], game_state_for_all(room)


async def handle_next_round(*, ctx, conn_id: str, msg: InNextRound) -> Result:
    pid, room = resolve_room(ctx, conn_id)
    if room is None:
        return [], []
    if not room.next_round(pid):
        return [], []
    return [], game_state_for_all(room)


async def handle_play_again(*, ctx, conn_id: str, msg: InPlayAgain) -> Result:
    pid, room = resolve_room(ctx, conn_id)
    if room is None:
        return [], []
    if not is_host(room, pid) or room.phase != "game_over":
        return [], []

    if len(room.players) < room.min_players:
        return [error("NOT_ENOUGH_PLAYERS", f"Need at least {room.min_players} players")], []

    if not room.play_again(pid):
        return [], []
    return [], game_state_for_all(room)
