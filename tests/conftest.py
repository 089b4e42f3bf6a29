"""
Pytest fixtures for rps_game tests.
"""

from datetime import datetime
from typing import List

import pytest
from fastapi.testclient import TestClient

from rps_game.create_sqlite_engine import create_sqlite_engine
from rps_game.errors import StorageError
from rps_game.main import create_app
from rps_game.models.dc_models import Game, Move
from rps_game.services.game_db import SQLiteHistoryStore
from rps_game.services.game_service import GameService
from rps_game.services.game_session import GameSession
from rps_game.services.history_store import HistoryStore, InMemoryHistoryStore
from rps_game.services.move_source import FixedMoveSource


class FailingHistoryStore(HistoryStore):
    """Rejects the first `failures` saves, then stores normally."""

    def __init__(self, failures: int = 1):
        self.failures = failures
        self.attempts = 0
        self.games: List[Game] = []

    def save(self, game: Game) -> None:
        self.attempts += 1
        if self.failures > 0:
            self.failures -= 1
            raise StorageError("disk full")
        self.games.append(game)

    def fetch(self) -> List[Game]:
        raise StorageError("history unavailable")


@pytest.fixture
def memory_store() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()


@pytest.fixture
def failing_store() -> FailingHistoryStore:
    return FailingHistoryStore()


@pytest.fixture
def rock_source() -> FixedMoveSource:
    return FixedMoveSource([Move.rock])


@pytest.fixture
def session(memory_store, rock_source) -> GameSession:
    return GameSession(
        memory_store,
        rock_source,
        clock=lambda: datetime(2024, 5, 1, 12, 30, 15, 123456),
    )


@pytest.fixture
def service(memory_store, rock_source) -> GameService:
    return GameService(memory_store, rock_source)


@pytest.fixture
def sqlite_store(tmp_path):
    store = SQLiteHistoryStore(create_sqlite_engine(str(tmp_path / "data"), "test.db"))
    yield store
    store.close()


@pytest.fixture
def client(memory_store):
    app = create_app(memory_store, lambda: FixedMoveSource([Move.rock]))
    with TestClient(app) as test_client:
        yield test_client
