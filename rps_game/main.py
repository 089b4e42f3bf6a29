import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from rps_game.load_secrets import log_level
from rps_game.manager import SessionManager
from rps_game.routers import game
from rps_game.services.history_store import HistoryStore
from rps_game.services.move_source import MoveSource, RandomMoveSource
from rps_game.services.store_factory import build_history_store


def create_app(
    history_store: HistoryStore | None = None,
    move_source_factory: Callable[[], MoveSource] = RandomMoveSource,
) -> FastAPI:
    """Build the HTTP app.

    Run with: uvicorn rps_game.main:create_app --factory
    """
    logging.basicConfig(level=log_level)
    if history_store is None:
        history_store = build_history_store()

    @asynccontextmanager
    async def lifespan(app):
        try:
            yield
        finally:
            history_store.close()
            logging.info("Stop Server")

    app = FastAPI(lifespan=lifespan)
    app.state.session_manager = SessionManager(history_store, move_source_factory)
    app.include_router(game.game_router)
    return app
