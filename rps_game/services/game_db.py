"""SQLite-backed history store.

- This layer owns session/transaction boundaries.
- SQL lives in rps_game.crud; conversion lives in rps_game.converter.
"""

import logging
from typing import List

from sqlalchemy import Engine

from rps_game.converter import DataConverter
from rps_game.create_sqlite_engine import create_sqlite_engine
from rps_game.crud import CreateData, ReadData
from rps_game.db import create_session_factory
from rps_game.models.dc_models import Game
from rps_game.services.history_store import HistoryStore


class SQLiteHistoryStore(HistoryStore):
    def __init__(self, engine: Engine | None = None):
        self.engine = engine if engine is not None else create_sqlite_engine()
        self.Session = create_session_factory(self.engine)
        logging.info(f"Using SQLite history store at {self.engine.url}")

    def save(self, game: Game) -> None:
        game_result = DataConverter.convert_game_to_schema(game)
        with self.Session() as session:
            CreateData.create_game_result(game_result, session)

    def fetch(self) -> List[Game]:
        with self.Session() as session:
            rows = ReadData.read_game_history(session)
        return [DataConverter.convert_schema_to_game(row) for row in rows]

    def close(self) -> None:
        self.engine.dispose()
