from __future__ import annotations

from .handlers import (
    handle_start_game,
    handle_next_round,
    handle_play_again,
    handle_submit_clue,
    handle_move_dial,
    handle_set_ready,
    handle_emoji_reaction,
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
