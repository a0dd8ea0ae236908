# app/transport/dispatcher.py
from __future__ import annotations

import contextlib
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from app.transport.protocols import (
    parse_incoming,
    InCreateRoom,
    InJoinRoom,
    InStartGame,
    InSubmitClue,
    InMoveDial,
    InSetReady,
    InNextRound,
    InPlayAgain,
    InEmojiReaction,
    IncomingMessage,
    OutBase,
)
from app.domain.lifecycle.handlers import handle_create_room, handle_join_room, handle_disconnect
from app.domain.game.handlers import (
    handle_start_game,
    handle_submit_clue,
    handle_move_dial,
    handle_set_ready,
    handle_next_round,
    handle_play_again,
    handle_emoji_reaction,
)
from app.domain.common.resolve import resolve_room

logger = logging.getLogger(__name__)

DispatchResult = Tuple[List[Dict[str, Any]], List[Dict[str, Any]]]
# (to_sender_events, to_room_events), each event is JSON dict

Handler = Callable[..., Awaitable[Tuple[List[Any], List[Any]]]]

# One handler per inbound kind; parse_incoming only yields these types.
_HANDLERS: Dict[Type[IncomingMessage], Handler] = {
    InCreateRoom: handle_create_room,
    InJoinRoom: handle_join_room,
    InStartGame: handle_start_game,
    InSubmitClue: handle_submit_clue,
    InMoveDial: handle_move_dial,
    InSetReady: handle_set_ready,
    InNextRound: handle_next_round,
    InPlayAgain: handle_play_again,
    InEmojiReaction: handle_emoji_reaction,
}


def _lock_for(ctx, conn_id: str, msg: Optional[IncomingMessage]):
    """
    The room whose state this event touches: the join target for
    join_room, the caller's room otherwise. create_room touches no
    existing room.
    """
    if isinstance(msg, InCreateRoom):
        return contextlib.nullcontext()
    if isinstance(msg, InJoinRoom):
        room = ctx.registry.get(msg.room_code)
    else:
        _, room = resolve_room(ctx, conn_id)
    return room.lock if room is not None else contextlib.nullcontext()


async def dispatch_message(
    *,
    ctx,
    conn_id: str,
    raw: Any,
) -> DispatchResult:
    """
    Transport layer calls this.
    - Parses + validates raw JSON
    - Routes to the correct domain handler under the room's lock
    - Returns (to_sender, to_room) events as JSON dicts

    Malformed messages are dropped without a reply.
    NOTE: This file contains NO game rules.
    """
    try:
        msg = parse_incoming(raw)
    except (ValidationError, ValueError) as e:
        logger.debug("conn %s: dropping bad message: %s", conn_id, e)
        return [], []

    handler = _HANDLERS.get(type(msg))
    if handler is None:
        logger.debug("conn %s: no handler for type=%s", conn_id, msg.type)
        return [], []

    async with _lock_for(ctx, conn_id, msg):
        to_sender, to_room = await handler(ctx=ctx, conn_id=conn_id, msg=msg)
    return _dump(to_sender), _dump(to_room)


async def dispatch_disconnect(*, ctx, conn_id: str) -> DispatchResult:
    async with _lock_for(ctx, conn_id, None):
        to_sender, to_room = await handle_disconnect(ctx=ctx, conn_id=conn_id)
    return _dump(to_sender), _dump(to_room)


def _dump(events: List[Any]) -> List[Dict[str, Any]]:
    """
    Convert pydantic events -> JSON dicts; targeted dicts pass through.
    """
    return [e.to_wire() if isinstance(e, OutBase) else e for e in events]
