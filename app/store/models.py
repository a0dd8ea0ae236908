# app/store/models.py
from __future__ import annotations

from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.common.types import Phase

Card = Tuple[str, str]


class WireModel(BaseModel):
    """
    Python attributes are snake_case, the wire is camelCase.
    Dump with by_alias=True when serializing for clients.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlayerStore(WireModel):
    id: str
    name: str
    emoji: str = "😎"
    color: str = "#7c3aed"
    is_host: bool = False


class ScoreEntry(WireModel):
    round: int
    card: Optional[Card] = None
    clue: str = ""
    target: int
    dial: float
    distance: float
    points: int
    psychic_name: str = "Unknown"


class RevealResult(WireModel):
    points: int
    distance: float
    target: int
    dial: float


class RoomView(WireModel):
    """
    Role-filtered projection of a room for one recipient.
    Built fresh per recipient; target_position is None unless the
    recipient may see it.
    """
    room_code: str
    phase: Phase
    host_id: Optional[str] = None
    players: List[PlayerStore] = Field(default_factory=list)
    current_round: int = 0
    total_rounds: int = 10
    total_score: int = 0
    scores: List[ScoreEntry] = Field(default_factory=list)
    psychic_id: Optional[str] = None
    is_psychic: bool = False
    current_card: Optional[Card] = None
    target_position: Optional[int] = None
    clue: str = ""
    average_dial_position: float = 50.0
    ready_count: int = 0
    total_guessers: int = 0
    is_ready: bool = False
