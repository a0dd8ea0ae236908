# app/domain/lifecycle/handlers.py
from __future__ import annotations

import logging
import random
import string
from typing import Any, List, Tuple

from app.domain.common.events import error
from app.domain.common.reveal import reveal_if_ready
from app.domain.common.resolve import resolve_room
from app.store.registry import normalize_code
from app.transport.protocols import (
    InCreateRoom,
    InJoinRoom,
    OutPlayerJoined,
    OutPlayerLeft,
    OutRoomCreated,
    OutRoomJoined,
)

logger = logging.getLogger(__name__)

# Returns: (to_sender, to_room)
Result = Tuple[List[Any], List[Any]]

_PID_ALPHABET = string.ascii_lowercase + string.digits


def _gen_player_id(n: int = 8) -> str:
    return "p_" + "".join(random.choice(_PID_ALPHABET) for _ in range(n))


def _already_seated(ctx, conn_id: str) -> bool:
    session = ctx.sessions.get(conn_id)
    return session is not None and session.in_room and session.room_code in ctx.registry


# -------------------------
# Handlers
# -------------------------

async def handle_create_room(*, ctx, conn_id: str, msg: InCreateRoom) -> Result:
    """
    Open a fresh room with the caller as host and only member.
    The code is always generated; clients cannot pick one.
    """
    if _already_seated(ctx, conn_id):
        return [error("ALREADY_IN_ROOM", "Already in a room")], []

    pid = _gen_player_id()
    room = ctx.registry.create(pid)
    room.add_player(pid, msg.name, msg.emoji, msg.color)
    ctx.sessions.bind(conn_id, room.code, pid)

    return [OutRoomCreated(room_code=room.code, player_id=pid, state=room.public_state(pid))], []


async def handle_join_room(*, ctx, conn_id: str, msg: InJoinRoom) -> Result:
    """
    Join:
    - room must exist, still be in the lobby and have a free seat
    - send a room_joined snapshot to the joiner
    - broadcast player_joined to everyone else
    """
    if _already_seated(ctx, conn_id):
        return [error("ALREADY_IN_ROOM", "Already in a room")], []

    code = normalize_code(msg.room_code)
    room = ctx.registry.get(code)
    if room is None:
        return [error("ROOM_NOT_FOUND", "Room not found")], []
    if room.phase != "lobby":
        return [error("GAME_IN_PROGRESS", "Game already in progress")], []
    if room.is_full:
        return [error("ROOM_FULL", f"Room is full (max {room.cap} players)")], []

    pid = _gen_player_id()
    while pid in room.players:
        pid = _gen_player_id()
    player = room.add_player(pid, msg.name, msg.emoji, msg.color)
    ctx.sessions.bind(conn_id, room.code, pid)
    logger.info("room %s: %s joined (%d players)", room.code, pid, len(room.players))

    return (
        [OutRoomJoined(room_code=room.code, player_id=pid, state=room.public_state(pid))],
        [OutPlayerJoined(player=player, players=room.player_list())],
    )


async def handle_disconnect(*, ctx, conn_id: str) -> Result:
    """
    Called by transport when the socket goes away.
    Connection loss is an implicit leave: never an error.
    """
    pid, room = resolve_room(ctx, conn_id)
    if pid is None or room is None:
        return [], []

    room.remove_player(pid)
    logger.info("room %s: %s left (%d players)", room.code, pid, len(room.players))

    if room.is_empty:
        ctx.registry.destroy(room.code)
        return [], []

    to_room: List[Any] = [OutPlayerLeft(player_id=pid, players=room.player_list(), new_host_id=room.host_id)]
    # losing a guesser can complete the ready set
    if room.phase == "dial":
        to_room.extend(reveal_if_ready(room))
    return [], to_room
