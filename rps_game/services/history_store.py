"""History store interface shared by every storage backend.

- The game core only talks to HistoryStore; backends live in their own modules.
- save() and fetch() raise StorageError on failure and never retry.
- Ordering of fetch() results belongs to the backend.
"""

from abc import ABC, abstractmethod
from typing import List

from rps_game.models.dc_models import Game


class HistoryStore(ABC):
    @abstractmethod
    def save(self, game: Game) -> None:
        """Persist one finalized game."""

    @abstractmethod
    def fetch(self) -> List[Game]:
        """Return every persisted game."""

    def close(self) -> None:
        pass


class InMemoryHistoryStore(HistoryStore):
    """Keeps games in a list, returned in insertion order."""

    def __init__(self):
        self.games: List[Game] = []

    def save(self, game: Game) -> None:
        self.games.append(game)

    def fetch(self) -> List[Game]:
        return list(self.games)
