# app/domain/common/types.py
from __future__ import annotations

from typing import Literal

Phase = Literal["lobby", "psychic_clue", "dial", "reveal", "game_over"]

# Phases in which the room's target may be shown to every player.
TARGET_PUBLIC_PHASES: frozenset[str] = frozenset({"reveal", "game_over"})

# Phases a host may skip out of with next_round.
ROUND_PHASES: frozenset[str] = frozenset({"psychic_clue", "dial", "reveal"})
