# app/settings.py
from __future__ import annotations

import os
from typing import List

from pydantic import BaseModel, Field

_DEV_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173,null"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


class Settings(BaseModel):
    APP_NAME: str = "wavelength-server"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Origins allowed to open /ws (comma-separated)
    WS_ALLOWED_ORIGINS: str = _DEV_ORIGINS
    # private LAN hosts are accepted on this port only
    WS_ALLOW_LAN_ORIGINS: bool = True
    WS_LAN_PORT: int = 5173

    # Game
    ROOM_CAP: int = Field(default=10, ge=2)
    MIN_PLAYERS: int = Field(default=2, ge=2)
    TOTAL_ROUNDS: int = Field(default=10, ge=1)

    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.WS_ALLOWED_ORIGINS.split(",") if o.strip()]


def get_settings() -> Settings:
    return Settings(
        APP_NAME=os.getenv("APP_NAME", "wavelength-server"),
        HOST=os.getenv("HOST", "0.0.0.0"),
        PORT=int(os.getenv("PORT", "8000")),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        WS_ALLOWED_ORIGINS=os.getenv("WS_ALLOWED_ORIGINS", _DEV_ORIGINS),
        WS_ALLOW_LAN_ORIGINS=_env_bool("WS_ALLOW_LAN_ORIGINS", True),
        WS_LAN_PORT=int(os.getenv("WS_LAN_PORT", "5173")),
        ROOM_CAP=int(os.getenv("ROOM_CAP", "10")),
        MIN_PLAYERS=int(os.getenv("MIN_PLAYERS", "2")),
        TOTAL_ROUNDS=int(os.getenv("TOTAL_ROUNDS", "10")),
    )
