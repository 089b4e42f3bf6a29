"""Entry point used by the CLI and the HTTP routes.

Wires a history store and a move source into a GameSession. Every GameService
owns its own session, so independent matches use independent services that
may share one history store.
"""

from typing import List, Optional

from rps_game.models.dc_models import Game, GameType, Move, RoundResult
from rps_game.services.game_session import GameSession, SessionState
from rps_game.services.history_store import HistoryStore
from rps_game.services.move_source import MoveSource, RandomMoveSource


class GameService:
    def __init__(self, history_store: HistoryStore, move_source: Optional[MoveSource] = None):
        self.history_store = history_store
        self.session = GameSession(history_store, move_source or RandomMoveSource())

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def current_game(self) -> Optional[Game]:
        return self.session.game

    @property
    def current_mode(self) -> Optional[GameType]:
        return self.session.mode

    @property
    def last_round(self) -> Optional[RoundResult]:
        return self.session.last_round

    def start_session(self, mode: GameType, player1: str, player2: str) -> Game:
        return self.session.start(mode, player1, player2)

    def play_round(self, move1: Move, move2: Optional[Move] = None) -> Game:
        return self.session.play_round(move1, move2)

    def retry_save(self) -> Game:
        return self.session.retry_save()

    def get_active_rounds(self) -> List[RoundResult]:
        return self.session.rounds

    def get_history(self) -> List[Game]:
        return self.history_store.fetch()
