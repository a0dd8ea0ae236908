# app/domain/common/events.py
from __future__ import annotations

"""
Common event builders and helpers.
Events are the Out* models in app/transport/protocols.py.
A dict carrying "targets" is delivered to exactly those player ids;
everything else in to_room goes to the room minus the sender.
"""

from typing import Any, Dict, Iterable, List, TYPE_CHECKING

from app.transport.protocols import OutBase, OutError, OutGameState

if TYPE_CHECKING:
    from app.domain.room import Room


def targeted(event: OutBase, player_ids: Iterable[str]) -> Dict[str, Any]:
    return {**event.to_wire(), "targets": list(player_ids)}


def everyone(room: "Room", event: OutBase) -> Dict[str, Any]:
    """Send to every current member, the sender included."""
    return targeted(event, room.players)


def game_state_for_all(room: "Room") -> List[Dict[str, Any]]:
    """
    One game_state per member, each projected for its recipient.
    Never reuse a view across recipients: the target is role-filtered.
    """
    return [targeted(OutGameState(state=room.public_state(pid)), [pid]) for pid in room.players]


def error(code: str, message: str) -> OutError:
    return OutError(code=code, message=message)
