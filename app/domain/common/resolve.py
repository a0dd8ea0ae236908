# app/domain/common/resolve.py
from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from app.context import ServerContext
    from app.domain.room import Room


def resolve_room(ctx: "ServerContext", conn_id: str) -> Tuple[Optional[str], Optional["Room"]]:
    """
    Look up the caller's player id and room.
    Either may be None: no session, not in a room yet, or the room is gone.
    """
    session = ctx.sessions.get(conn_id)
    if session is None or not session.in_room:
        return None, None
    return session.player_id, ctx.registry.get(session.room_code)
