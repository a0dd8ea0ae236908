# app/store/registry.py
from __future__ import annotations

import logging
import random
from typing import Any, Dict, Iterator, Optional

from app.domain.room import Room

logger = logging.getLogger(__name__)

# No I or O, no digits: codes are read aloud across the table.
ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ"
ROOM_CODE_LENGTH = 4


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


class RoomRegistry:
    """
    In-memory room table: room_code -> Room.
    Owns code generation; a room lives until its last member leaves.
    """

    def __init__(self, *, code_rng: Optional[random.Random] = None, **room_options: Any) -> None:
        self._rooms: Dict[str, Room] = {}
        self._rng = code_rng if code_rng is not None else random.Random()
        # forwarded to every Room (total_rounds, cap, min_players, ...)
        self._room_options = room_options

    def _gen_room_code(self) -> str:
        return "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))

    def new_code(self) -> str:
        code = self._gen_room_code()
        while code in self._rooms:
            code = self._gen_room_code()
        return code

    def create(self, host_id: str) -> Room:
        code = self.new_code()
        room = Room(code, host_id, **self._room_options)
        self._rooms[code] = room
        logger.info("room %s created (live rooms: %d)", code, len(self._rooms))
        return room

    def get(self, code: Optional[str]) -> Optional[Room]:
        return self._rooms.get(normalize_code(code))

    def destroy(self, code: str) -> None:
        if self._rooms.pop(normalize_code(code), None) is not None:
            logger.info("room %s destroyed (live rooms: %d)", code, len(self._rooms))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))
