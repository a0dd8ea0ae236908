from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

router = APIRouter(prefix="/admin", tags=["admin"])


def _room_summary(room) -> dict:
    return {
        "roomCode": room.code,
        "phase": room.phase,
        "hostId": room.host_id,
        "players": len(room.players),
        "currentRound": room.current_round,
        "totalRounds": room.total_rounds,
        "totalScore": room.total_score,
    }


@router.get("/rooms")
async def list_rooms(request: Request):
    """
    List all live rooms (debug/admin). Never exposes targets.
    """
    ctx = request.app.state.ctx
    rooms = sorted((_room_summary(r) for r in ctx.registry), key=lambda r: r["roomCode"])
    return {"rooms": rooms, "connections": len(ctx.sessions)}


@router.get("/rooms/{room_code}")
async def get_room(room_code: str, request: Request):
    """
    One room's public state, as an observer with no player id would see it.
    """
    ctx = request.app.state.ctx
    room = ctx.registry.get(room_code)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found")
    return room.public_state(None).model_dump(mode="json", by_alias=True)
