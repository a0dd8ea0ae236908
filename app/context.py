# app/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from app.settings import Settings, get_settings
from app.store.registry import RoomRegistry
from app.transport.sessions import SessionDirectory


@dataclass
class ServerContext:
    """
    Everything the handlers share: the room table and the connection
    table. Built once per application and passed to every handler.
    """
    settings: Settings
    registry: RoomRegistry
    sessions: SessionDirectory = field(default_factory=SessionDirectory)


def build_context(settings: Optional[Settings] = None, **room_options: Any) -> ServerContext:
    settings = settings or get_settings()
    options = {
        "total_rounds": settings.TOTAL_ROUNDS,
        "cap": settings.ROOM_CAP,
        "min_players": settings.MIN_PLAYERS,
        **room_options,
    }
    return ServerContext(settings=settings, registry=RoomRegistry(**options))
