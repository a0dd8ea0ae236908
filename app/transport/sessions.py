# app/transport/sessions.py
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Session:
    conn_id: str
    ws: Any = None
    room_code: Optional[str] = None
    player_id: Optional[str] = None
    outbox: "asyncio.Queue[dict]" = field(default_factory=asyncio.Queue)

    @property
    def in_room(self) -> bool:
        return self.room_code is not None and self.player_id is not None


class SessionDirectory:
    """
    In-memory connection registry.
    - conn_id -> Session{room_code, player_id, outbox}
    Transport-only: no game rules.

    Sending never awaits: events are queued on each session's outbox and
    a per-connection writer drains it, so every member sees a room's
    events in the order they were produced.
    """
    def __init__(self) -> None:
        self._sessions: Dict[str, Session] = {}

    def open(self, conn_id: str, ws: Any = None) -> Session:
        session = Session(conn_id=conn_id, ws=ws)
        self._sessions[conn_id] = session
        return session

    def get(self, conn_id: str) -> Optional[Session]:
        return self._sessions.get(conn_id)

    def bind(self, conn_id: str, room_code: str, player_id: str) -> None:
        session = self._sessions.get(conn_id)
        if session is None:
            return
        session.room_code = room_code
        session.player_id = player_id

    def close(self, conn_id: str) -> Optional[Session]:
        return self._sessions.pop(conn_id, None)

    def members(self, room_code: Optional[str]) -> List[Session]:
        if not room_code:
            return []
        return [s for s in self._sessions.values() if s.room_code == room_code]

    def __len__(self) -> int:
        return len(self._sessions)

    # ----------------------------
    # Outbound
    # ----------------------------
    def send(self, conn_id: str, event: dict) -> None:
        session = self._sessions.get(conn_id)
        if session is None:
            return
        session.outbox.put_nowait(event)

    def send_to_player(self, room_code: Optional[str], player_id: str, event: dict) -> None:
        for s in self.members(room_code):
            if s.player_id == player_id:
                s.outbox.put_nowait(event)
                return

    def broadcast(self, room_code: Optional[str], event: dict, exclude_conn_id: Optional[str] = None) -> None:
        for s in self.members(room_code):
            if exclude_conn_id and s.conn_id == exclude_conn_id:
                continue
            s.outbox.put_nowait(event)

    def deliver(
        self,
        conn_id: str,
        to_sender: Iterable[dict],
        to_room: Iterable[dict],
        *,
        room_code: Optional[str] = None,
    ) -> None:
        """
        Fan out a handler's result.
        to_sender goes to the caller only. to_room goes to the caller's
        room excluding the caller, except entries carrying "targets",
        which go to exactly those player ids.
        """
        session = self._sessions.get(conn_id)
        if room_code is None and session is not None:
            room_code = session.room_code

        for e in to_sender:
            self.send(conn_id, e)

        for e in to_room:
            if isinstance(e, dict) and "targets" in e:
                targets = e.get("targets") or []
                payload = {k: v for k, v in e.items() if k != "targets"}
                for t in targets:
                    self.send_to_player(room_code, t, payload)
                continue
            self.broadcast(room_code, e, exclude_conn_id=conn_id)


async def pump_outbox(session: Session) -> None:
    """Writer task: drain one session's outbox onto its websocket."""
    while True:
        event = await session.outbox.get()
        try:
            await session.ws.send_json(event)
        except Exception:
            # socket is gone; ws.py cleans up on disconnect
            logger.debug("conn %s: dropping outbound %s, socket closed", session.conn_id, event.get("type"))
            return
