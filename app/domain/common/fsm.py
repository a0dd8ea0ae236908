# app/domain/common/fsm.py
from __future__ import annotations

from app.domain.common.types import Phase


def can_transition_phase(current: Phase, target: Phase) -> bool:
    """
    Validate room phase transitions.
    Within a round phases only move forward; a new round (or game over)
    can be entered from any in-game phase via next_round.
    """
    transitions: dict[Phase, list[Phase]] = {
        "lobby": ["psychic_clue", "game_over"],
        "psychic_clue": ["dial", "psychic_clue", "game_over"],
        "dial": ["reveal", "psychic_clue", "game_over"],
        "reveal": ["psychic_clue", "game_over"],
        "game_over": ["psychic_clue", "game_over"],
    }
    return target in transitions.get(current, [])
