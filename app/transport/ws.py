# app/transport/ws.py
from __future__ import annotations

import asyncio
import contextlib
import ipaddress
import json
import logging
import uuid
from typing import Optional
from urllib.parse import urlparse

from fastapi import APIRouter, WebSocket

from app.settings import Settings
from app.transport.dispatcher import dispatch_disconnect, dispatch_message
from app.transport.sessions import pump_outbox

logger = logging.getLogger(__name__)

router = APIRouter()


def origin_allowed(origin: Optional[str], settings: Settings) -> bool:
    """
    Browsers always send Origin; non-browser clients (tests, bots) may not
    and are let through. LAN origins count only on the dev frontend port.
    """
    if origin is None:
        return True
    if origin in settings.allowed_origins():
        return True
    if not settings.WS_ALLOW_LAN_ORIGINS:
        return False

    parsed = urlparse(origin)
    try:
        lan = ipaddress.ip_address(parsed.hostname or "").is_private
    except ValueError:
        return False
    return lan and parsed.port == settings.WS_LAN_PORT


@router.websocket("/ws")
async def ws_endpoint(websocket: WebSocket):
    ctx = websocket.app.state.ctx
    origin = websocket.headers.get("origin")
    if not origin_allowed(origin, ctx.settings):
        logger.info("rejecting websocket from origin %s", origin)
        await websocket.close(code=1008)
        return

    await websocket.accept()

    conn_id = uuid.uuid4().hex
    session = ctx.sessions.open(conn_id, websocket)
    writer = asyncio.create_task(pump_outbox(session))

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            try:
                raw = json.loads(message.get("text") or message.get("bytes") or b"")
            except ValueError:
                # not JSON: drop, keep the connection
                continue

            try:
                to_sender, to_room = await dispatch_message(ctx=ctx, conn_id=conn_id, raw=raw)
            except Exception:
                logger.exception("conn %s: handler failed for %r", conn_id, raw.get("type") if isinstance(raw, dict) else raw)
                continue

            # deliver is synchronous: outbound order matches processing order
            ctx.sessions.deliver(conn_id, to_sender, to_room)

    finally:
        try:
            room_code = session.room_code
            _, to_room = await dispatch_disconnect(ctx=ctx, conn_id=conn_id)
            ctx.sessions.deliver(conn_id, [], to_room, room_code=room_code)
        except Exception:
            logger.exception("conn %s: disconnect cleanup failed", conn_id)
        finally:
            ctx.sessions.close(conn_id)
            writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await writer
