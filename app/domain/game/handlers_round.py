# app/domain/game/handlers_round.py
from __future__ import annotations

from typing import Any, List, Tuple

from app.domain.common.events import everyone, game_state_for_all
from app.domain.common.resolve import resolve_room
from app.domain.common.reveal import reveal_if_ready
from app.transport.protocols import (
    InEmojiReaction,
    InMoveDial,
    InSetReady,
    InSubmitClue,
    OutClueSubmitted,
    OutDialUpdate,
    OutEmojiBroadcast,
    OutReadyUpdate,
)

Outgoing = List[Any]
Result = Tuple[Outgoing, Outgoing]


async def handle_submit_clue(*, ctx, conn_id: str, msg: InSubmitClue) -> Result:
    pid, room = resolve_room(ctx, conn_id)
    if room is None:
        return [], []
    if not room.submit_clue(pid, msg.clue):
        return [], []
    return [], [everyone(room, OutClueSubmitted(clue=room.clue)), *game_state_for_all(room)]


async def handle_move_dial(*, ctx, conn_id: str, msg: InMoveDial) -> Result:
    """
    Narrow delta only: the new average, not a full state.
    Moves that arrive outside the dial phase are race artifacts and dropped.
    """
    pid, room = resolve_room(ctx, conn_id)
    if room is None:
        return [], []
    if not room.move_dial(pid, msg.position):
        return [], []
    return [], [everyone(room, OutDialUpdate(average_dial_position=room.average_dial_position, player_id=pid))]


async def handle_set_ready(*, ctx, conn_id: str, msg: InSetReady) -> Result:
    pid, room = resolve_room(ctx, conn_id)
    # late repeats after the reveal are race artifacts
    if room is None or room.phase != "dial":
        return [], []

    room.set_ready(pid)
    if pid not in room.ready_players:
        # the psychic
        return [], []

    update = OutReadyUpdate(
        ready_count=len(room.ready_players),
        total_guessers=room.total_guessers,
        player_id=pid,
    )
    return [], [everyone(room, update), *reveal_if_ready(room)]


async def handle_emoji_reaction(*, ctx, conn_id: str, msg: InEmojiReaction) -> Result:
    """Ephemeral; goes to everyone but the sender."""
    pid, room = resolve_room(ctx, conn_id)
    if room is None or pid not in room.players:
        return [], []
    return [], [OutEmojiBroadcast(emoji=msg.emoji, player_id=pid, player_name=room.player_name(pid))]
