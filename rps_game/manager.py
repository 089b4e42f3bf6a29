from __future__ import annotations

from threading import Lock
from typing import Callable, Dict
from uuid import UUID
import logging

from uuid6 import uuid7

from rps_game.services.game_service import GameService
from rps_game.services.history_store import HistoryStore
from rps_game.services.move_source import MoveSource, RandomMoveSource


class SessionManager:
    """Holds one independently owned GameService per HTTP session id.

    Route handlers run on a thread pool, so the registry and every play on a
    given service are serialized through locks.
    """

    def __init__(
        self,
        history_store: HistoryStore,
        move_source_factory: Callable[[], MoveSource] = RandomMoveSource,
    ):
        self.history_store = history_store
        self.move_source_factory = move_source_factory
        self.active_sessions: Dict[UUID, GameService] = {}
        self.session_locks: Dict[UUID, Lock] = {}
        self._lock = Lock()

    def create(self) -> UUID:
        """Register a new idle session and return its id"""
        session_id = uuid7()
        with self._lock:
            self.active_sessions[session_id] = GameService(
                self.history_store, self.move_source_factory()
            )
            self.session_locks[session_id] = Lock()
        logging.info(f"Created session {session_id}")
        return session_id

    def get(self, session_id: UUID) -> GameService | None:
        with self._lock:
            return self.active_sessions.get(session_id)

    def lock_for(self, session_id: UUID) -> Lock | None:
        with self._lock:
            return self.session_locks.get(session_id)

    def remove(self, session_id: UUID) -> bool:
        """Forget a session; an unfinished game in it is dropped without being saved"""
        with self._lock:
            self.session_locks.pop(session_id, None)
            removed = self.active_sessions.pop(session_id, None) is not None
        if removed:
            logging.info(f"Removed session {session_id}")
        return removed
