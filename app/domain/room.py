# app/domain/room.py
from __future__ import annotations

import asyncio
import logging
import random
from typing import Dict, List, Optional, Set

from app.domain.cards import CardSource
from app.domain.common.fsm import can_transition_phase
from app.domain.common.scoring import (
    DIAL_CENTER,
    TARGET_MAX,
    TARGET_MIN,
    average_position,
    clamp_dial,
    points_for_distance,
)
from app.domain.common.types import Phase, ROUND_PHASES
from app.domain.common.validation import can_see_target, is_guesser, is_host, is_psychic
from app.store.models import Card, PlayerStore, RevealResult, RoomView, ScoreEntry

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_ROUNDS = 10
DEFAULT_CAP = 10
DEFAULT_MIN_PLAYERS = 2


class Room:
    """
    One game's full state: membership, the phase machine, dial
    aggregation, readiness and scoring for a single room code.

    Operations are synchronous and return a bool (accepted / rejected);
    rejected operations leave the state untouched. Callers serialize
    access per room through `lock`.
    """

    def __init__(
        self,
        code: str,
        host_id: str,
        *,
        total_rounds: int = DEFAULT_TOTAL_ROUNDS,
        cap: int = DEFAULT_CAP,
        min_players: int = DEFAULT_MIN_PLAYERS,
        cards: Optional[CardSource] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.code = code
        self.host_id: Optional[str] = host_id
        self.players: Dict[str, PlayerStore] = {}
        self.phase: Phase = "lobby"
        self.cap = cap
        self.min_players = min_players

        self.current_round = 0
        self.total_rounds = total_rounds
        self.scores: List[ScoreEntry] = []
        self.total_score = 0

        self._rng = rng if rng is not None else random.Random()
        # an unreset CardSource is empty, hence falsy
        self.cards = cards if cards is not None else CardSource(rng=self._rng)

        # round state
        self.current_card: Optional[Card] = None
        self.target_position = 0
        self.psychic_id: Optional[str] = None
        self.psychic_index = 0
        self.clue = ""
        self.dial_positions: Dict[str, float] = {}
        self.average_dial_position = DIAL_CENTER
        self.ready_players: Set[str] = set()

        self.lock = asyncio.Lock()

    # ----------------------------
    # Membership
    # ----------------------------
    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.cap

    @property
    def is_empty(self) -> bool:
        return not self.players

    def add_player(
        self,
        pid: str,
        name: Optional[str] = None,
        emoji: Optional[str] = None,
        color: Optional[str] = None,
    ) -> PlayerStore:
        player = PlayerStore(
            id=pid,
            name=name or f"Player {len(self.players) + 1}",
            emoji=emoji or "😎",
            color=color or "#7c3aed",
            is_host=pid == self.host_id,
        )
        self.players[pid] = player
        return player

    def remove_player(self, pid: str) -> bool:
        """
        Drop a member and everything keyed by them.
        Returns True if the host changed as a result.
        """
        if pid not in self.players:
            return False

        del self.players[pid]
        self.dial_positions.pop(pid, None)
        self.ready_players.discard(pid)

        host_changed = False
        if pid == self.host_id:
            if self.players:
                new_host = next(iter(self.players))
                self.host_id = new_host
                self.players[new_host].is_host = True
                host_changed = True
                logger.info("room %s: host %s left, %s promoted", self.code, pid, new_host)
            else:
                self.host_id = None

        if self.phase == "dial":
            self.recalculate_average()
        return host_changed

    def player_list(self) -> List[PlayerStore]:
        return list(self.players.values())

    def player_name(self, pid: Optional[str], default: str = "Player") -> str:
        player = self.players.get(pid) if pid else None
        return player.name if player else default

    # ----------------------------
    # Game / round lifecycle
    # ----------------------------
    def _set_phase(self, target: Phase) -> None:
        if not can_transition_phase(self.phase, target):
            raise RuntimeError(f"illegal phase transition {self.phase} -> {target}")
        self.phase = target

    def start_game(self, requester_id: Optional[str]) -> bool:
        if not is_host(self, requester_id):
            return False
        if self.phase != "lobby":
            return False
        if len(self.players) < self.min_players:
            return False
        self._reset_game()
        logger.info("room %s: game started with %d players", self.code, len(self.players))
        self.start_new_round()
        return True

    def _reset_game(self) -> None:
        self.cards.reset()
        self.current_round = 0
        self.scores = []
        self.total_score = 0
        self.psychic_index = 0

    def start_new_round(self) -> bool:
        """
        Begin the next round. Returns False (and moves to game_over) when
        the round limit is reached, the deck is exhausted or the room
        has no members.
        """
        self.current_round += 1
        if self.current_round > self.total_rounds or self.cards.exhausted or not self.players:
            self._set_phase("game_over")
            logger.info("room %s: game over, total score %d", self.code, self.total_score)
            return False

        join_order = list(self.players)
        self.psychic_id = join_order[self.psychic_index % len(join_order)]
        self.psychic_index += 1

        self.current_card = self.cards.draw()
        self.target_position = self._rng.randint(TARGET_MIN, TARGET_MAX)

        self.clue = ""
        self.ready_players = set()
        self.dial_positions = {pid: DIAL_CENTER for pid in join_order if pid != self.psychic_id}
        self.average_dial_position = DIAL_CENTER

        self._set_phase("psychic_clue")
        return True

    def submit_clue(self, pid: Optional[str], clue: str) -> bool:
        if self.phase != "psychic_clue":
            return False
        if not is_psychic(self, pid):
            return False
        self.clue = clue
        self._set_phase("dial")
        return True

    def move_dial(self, pid: Optional[str], position: float) -> bool:
        if self.phase != "dial":
            return False
        if not is_guesser(self, pid):
            return False
        self.dial_positions[pid] = clamp_dial(position)
        self.recalculate_average()
        return True

    def recalculate_average(self) -> float:
        self.average_dial_position = average_position(self.dial_positions.values())
        return self.average_dial_position

    def set_ready(self, pid: Optional[str]) -> bool:
        """
        Lock in a guesser's dial. Returns whether every guesser is now
        ready; a rejected call returns False.
        """
        if self.phase != "dial":
            return False
        if not is_guesser(self, pid):
            return False
        self.ready_players.add(pid)
        return self.all_guessers_ready()

    @property
    def total_guessers(self) -> int:
        return max(0, len(self.players) - 1)

    def all_guessers_ready(self) -> bool:
        guessers = self.total_guessers
        return guessers > 0 and len(self.ready_players) >= guessers

    def reveal_and_score(self) -> RevealResult:
        self._set_phase("reveal")
        distance = abs(self.average_dial_position - self.target_position)
        points = points_for_distance(distance)

        self.scores.append(
            ScoreEntry(
                round=self.current_round,
                card=self.current_card,
                clue=self.clue,
                target=self.target_position,
                dial=self.average_dial_position,
                distance=distance,
                points=points,
                psychic_name=self.player_name(self.psychic_id, default="Unknown"),
            )
        )
        self.total_score += points
        logger.info(
            "room %s: round %d revealed target=%d dial=%.1f points=%d",
            self.code, self.current_round, self.target_position, self.average_dial_position, points,
        )
        return RevealResult(
            points=points,
            distance=distance,
            target=self.target_position,
            dial=self.average_dial_position,
        )

    def next_round(self, requester_id: Optional[str]) -> bool:
        """
        Host advances to the next round. Allowed from any in-round phase
        so a stalled round can be skipped; a skipped round is not scored.
        """
        if not is_host(self, requester_id):
            return False
        if self.phase not in ROUND_PHASES:
            return False
        # start_new_round moves the room to game_over when nothing is left
        self.start_new_round()
        return True

    def play_again(self, requester_id: Optional[str]) -> bool:
        if not is_host(self, requester_id):
            return False
        if self.phase != "game_over":
            return False
        if len(self.players) < self.min_players:
            return False
        self._reset_game()
        logger.info("room %s: new game started with %d players", self.code, len(self.players))
        self.start_new_round()
        return True

    # ----------------------------
    # Views
    # ----------------------------
    def public_state(self, for_pid: Optional[str]) -> RoomView:
        return RoomView(
            room_code=self.code,
            phase=self.phase,
            host_id=self.host_id,
            players=[p.model_copy() for p in self.players.values()],
            current_round=self.current_round,
            total_rounds=self.total_rounds,
            total_score=self.total_score,
            scores=[s.model_copy() for s in self.scores],
            psychic_id=self.psychic_id,
            is_psychic=is_psychic(self, for_pid),
            current_card=self.current_card,
            target_position=self.target_position if can_see_target(self, for_pid) else None,
            clue=self.clue,
            average_dial_position=self.average_dial_position,
            ready_count=len(self.ready_players),
            total_guessers=self.total_guessers,
            is_ready=for_pid in self.ready_players if for_pid else False,
        )

