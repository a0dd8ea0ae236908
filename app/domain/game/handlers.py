# app/domain/game/handlers.py
from __future__ import annotations

from app.domain.game.handlers_host import handle_next_round, handle_play_again, handle_start_game
from app.domain.game.handlers_round import (
    handle_emoji_reaction,
    handle_move_dial,
    handle_set_ready,
    handle_submit_clue,
)

__all__ = [
    "handle_start_game",
    "handle_next_round",
    "handle_play_again",
    "handle_submit_clue",
    "handle_move_dial",
    "handle_set_ready",
    "handle_emoji_reaction",
]
