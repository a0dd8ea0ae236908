# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.context import ServerContext, build_context
from app.settings import Settings, get_settings
from app.transport.admin import router as admin_router
from app.transport.ws import router as ws_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Settings | None = None, ctx: ServerContext | None = None) -> FastAPI:
    """
    Build the app around one ServerContext. Rooms and sessions live in
    memory for the lifetime of the process.
    """
    if settings is None:
        settings = ctx.settings if ctx is not None else get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.ctx = ctx or build_context(settings)

    @app.get("/health")
    async def health():
        return {"ok": True, "rooms": len(app.state.ctx.registry)}

    app.include_router(ws_router)
    app.include_router(admin_router)
    logger.info(
        "%s ready: cap=%d min_players=%d rounds=%d",
        settings.APP_NAME, settings.ROOM_CAP, settings.MIN_PLAYERS, settings.TOTAL_ROUNDS,
    )
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.HOST, port=_settings.PORT, log_level=_settings.LOG_LEVEL.lower())
