import asyncio
import contextlib

import pytest

from app.transport.sessions import SessionDirectory, pump_outbox


class FakeWS:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send_json(self, event):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(event)


def _seated(directory, conn_id, pid, room="ABCD"):
    s = directory.open(conn_id, FakeWS())
    directory.bind(conn_id, room, pid)
    return s


def _drain(session):
    out = []
    while not session.outbox.empty():
        out.append(session.outbox.get_nowait())
    return out


def test_deliver_routes_targeted_and_room_events():
    d = SessionDirectory()
    a = _seated(d, "c1", "p1")
    b = _seated(d, "c2", "p2")
    other = _seated(d, "c3", "p9", room="WXYZ")

    d.deliver(
        "c1",
        [{"type": "room_joined"}],
        [{"type": "player_joined"}, {"type": "game_state", "n": 1, "targets": ["p1"]}],
    )

    assert _drain(a) == [{"type": "room_joined"}, {"type": "game_state", "n": 1}]
    assert _drain(b) == [{"type": "player_joined"}]
    assert _drain(other) == []


@pytest.mark.asyncio
async def test_pump_outbox_writes_in_order_and_stops_on_cancel():
    d = SessionDirectory()
    s = _seated(d, "c1", "p1")
    writer = asyncio.create_task(pump_outbox(s))

    d.send("c1", {"type": "a"})
    d.send("c1", {"type": "b"})
    while s.outbox.qsize():
        await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert s.ws.sent == [{"type": "a"}, {"type": "b"}]

    writer.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await writer
    assert writer.done()


@pytest.mark.asyncio
async def test_pump_outbox_returns_when_socket_fails():
    d = SessionDirectory()
    s = d.open("c1", FakeWS(fail=True))
    d.send("c1", {"type": "a"})
    await asyncio.wait_for(pump_outbox(s), timeout=1)
