# app/transport/protocols.py
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.store.models import PlayerStore, RoomView


# =========================
# Incoming (Client -> Server)
# =========================

class InBase(BaseModel):
    # clients send camelCase keys (roomCode)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str


# ---- Lifecycle ----

class InCreateRoom(InBase):
    type: Literal["create_room"] = "create_room"
    name: Optional[str] = Field(default=None, max_length=24)
    emoji: Optional[str] = Field(default=None, max_length=16)
    color: Optional[str] = Field(default=None, max_length=32)


class InJoinRoom(InBase):
    type: Literal["join_room"] = "join_room"
    room_code: str = Field(default="", max_length=16)
    name: Optional[str] = Field(default=None, max_length=24)
    emoji: Optional[str] = Field(default=None, max_length=16)
    color: Optional[str] = Field(default=None, max_length=32)


# ---- Host controls ----

class InStartGame(InBase):
    type: Literal["start_game"] = "start_game"


class InNextRound(InBase):
    type: Literal["next_round"] = "next_round"


class InPlayAgain(InBase):
    type: Literal["play_again"] = "play_again"


# ---- Round inputs ----

class InSubmitClue(InBase):
    type: Literal["submit_clue"] = "submit_clue"
    clue: str = Field(min_length=1, max_length=100)


class InMoveDial(InBase):
    type: Literal["move_dial"] = "move_dial"
    position: float = Field(allow_inf_nan=False)


class InSetReady(InBase):
    type: Literal["set_ready"] = "set_ready"


class InEmojiReaction(InBase):
    type: Literal["emoji_reaction"] = "emoji_reaction"
    emoji: str = Field(min_length=1, max_length=16)


IncomingMessage = Union[
    InCreateRoom,
    InJoinRoom,
    InStartGame,
    InSubmitClue,
    InMoveDial,
    InSetReady,
    InNextRound,
    InPlayAgain,
    InEmojiReaction,
]


# =========================
# Outgoing (Server -> Client)
# =========================

class OutBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class OutError(OutBase):
    type: Literal["error"] = "error"
    code: str
    message: str


class OutRoomCreated(OutBase):
    type: Literal["room_created"] = "room_created"
    room_code: str
    player_id: str
    state: RoomView


class OutRoomJoined(OutBase):
    type: Literal["room_joined"] = "room_joined"
    room_code: str
    player_id: str
    state: RoomView


class OutPlayerJoined(OutBase):
    type: Literal["player_joined"] = "player_joined"
    player: PlayerStore
    players: List[PlayerStore]


class OutPlayerLeft(OutBase):
    type: Literal["player_left"] = "player_left"
    player_id: str
    players: List[PlayerStore]
    new_host_id: Optional[str] = None


class OutGameState(OutBase):
    type: Literal["game_state"] = "game_state"
    state: RoomView


class OutClueSubmitted(OutBase):
    type: Literal["clue_submitted"] = "clue_submitted"
    clue: str


class OutDialUpdate(OutBase):
    type: Literal["dial_update"] = "dial_update"
    average_dial_position: float
    player_id: str


class OutReadyUpdate(OutBase):
    type: Literal["ready_update"] = "ready_update"
    ready_count: int
    total_guessers: int
    player_id: str


class OutRevealTarget(OutBase):
    type: Literal["reveal_target"] = "reveal_target"
    points: int
    distance: float
    target: int
    dial: float
    total_score: int
    current_round: int
    total_rounds: int


class OutEmojiBroadcast(OutBase):
    type: Literal["emoji_broadcast"] = "emoji_broadcast"
    emoji: str
    player_id: str
    player_name: str


# =========================
# Parser helpers
# =========================

# A small map so we can parse by "type" quickly (simple & readable)
_INCOMING_BY_TYPE = {
    "create_room": InCreateRoom,
    "join_room": InJoinRoom,
    "start_game": InStartGame,
    "submit_clue": InSubmitClue,
    "move_dial": InMoveDial,
    "set_ready": InSetReady,
    "next_round": InNextRound,
    "play_again": InPlayAgain,
    "emoji_reaction": InEmojiReaction,
}


def parse_incoming(payload: Any) -> IncomingMessage:
    """
    Convert raw dict -> validated message model.
    Raises ValueError for a non-object or unknown type and
    ValidationError (a ValueError) for a bad payload.
    """
    if not isinstance(payload, dict):
        raise ValueError("Message must be a JSON object")

    t = payload.get("type")
    cls = _INCOMING_BY_TYPE.get(t) if isinstance(t, str) else None
    if cls is None:
        raise ValueError(f"Unknown message type: {t!r}")

    return cls.model_validate(payload)
