# app/domain/common/validation.py
from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from app.domain.common.types import TARGET_PUBLIC_PHASES

if TYPE_CHECKING:
    from app.domain.room import Room


def is_host(room: "Room", pid: Optional[str]) -> bool:
    """Check if player is the room host."""
    return pid is not None and room.host_id == pid


def is_psychic(room: "Room", pid: Optional[str]) -> bool:
    """Check if player is this round's psychic."""
    return pid is not None and room.psychic_id == pid


def is_guesser(room: "Room", pid: Optional[str]) -> bool:
    """Check if player is a live member who is not the psychic."""
    return pid is not None and pid in room.players and pid != room.psychic_id


def can_see_target(room: "Room", pid: Optional[str]) -> bool:
    """Psychic always; everyone once the round is revealed or the game is over."""
    return is_psychic(room, pid) or room.phase in TARGET_PUBLIC_PHASES
