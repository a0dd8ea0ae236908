# app/domain/common/reveal.py
from __future__ import annotations

from typing import Any, List, TYPE_CHECKING

from app.domain.common.events import everyone, game_state_for_all
from app.transport.protocols import OutRevealTarget

if TYPE_CHECKING:
    from app.domain.room import Room


def reveal_if_ready(room: "Room") -> List[Any]:
    """
    The single reveal trigger, shared by set_ready and disconnect.

    When the room is in the dial phase and every guesser is ready,
    score the round and return reveal_target for everyone followed by
    a fresh game_state per member. Otherwise return nothing.
    """
    if room.phase != "dial" or not room.all_guessers_ready():
        return []

    result = room.reveal_and_score()
    reveal = OutRevealTarget(
        points=result.points,
        distance=result.distance,
        target=result.target,
        dial=result.dial,
        total_score=room.total_score,
        current_round=room.current_round,
        total_rounds=room.total_rounds,
    )
    return [everyone(room, reveal), *game_state_for_all(room)]
