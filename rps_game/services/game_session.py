"""Best-of-three session state machine.

LIFECYCLE:
1. start()      IDLE | IN_PROGRESS | PENDING_SAVE -> IN_PROGRESS
                any previous game is dropped without being saved
2. play_round() IN_PROGRESS -> IN_PROGRESS while nobody has won yet
                IN_PROGRESS -> IDLE once the game is finalized and saved
                IN_PROGRESS -> PENDING_SAVE when the save fails
3. retry_save() PENDING_SAVE -> IDLE on success, stays PENDING_SAVE on failure

A game ends after 2 rounds when the same player took both of them, otherwise
after 3 rounds by majority of round wins (no majority is a draw).

One GameSession holds exactly one game and is not shared between threads;
run independent matches on independent instances.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from uuid6 import uuid7

from rps_game.domain.game_rules import decide_game_winner, resolve_round, validate_player_names
from rps_game.errors import GameAlreadyFinalized, NoActiveSession, PersistenceFailed
from rps_game.models.dc_models import Game, GameType, Move, RoundResult
from rps_game.services.history_store import HistoryStore
from rps_game.services.move_source import MoveSource


class SessionState(Enum):
    IDLE = "idle"  # No game, or the last one was saved
    IN_PROGRESS = "in_progress"  # Rounds are being played
    PENDING_SAVE = "pending_save"  # Finalized game whose save failed


def new_game_id() -> str:
    return str(uuid7())


class GameSession:
    def __init__(
        self,
        history_store: HistoryStore,
        move_source: MoveSource,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_game_id,
    ):
        self.history_store = history_store
        self.move_source = move_source
        self.clock = clock
        self.id_factory = id_factory

        self.state = SessionState.IDLE
        self.game: Optional[Game] = None
        self.mode: Optional[GameType] = None
        self._rounds: List[RoundResult] = []
        # Survives finalization so callers can still show the deciding round.
        self.last_round: Optional[RoundResult] = None

    @property
    def rounds(self) -> List[RoundResult]:
        """Snapshot of the rounds of the current game, empty when idle."""
        return list(self._rounds)

    def start(self, mode: GameType, player1: str, player2: str) -> Game:
        """Validate the players and begin a new game

        Args:
            mode (GameType): Whether player2 is a person or the automated opponent
            player1 (str): Name of the first player
            player2 (str): Name of the second player

        Raises:
            InvalidPlayerName: One of the names was rejected; the session is untouched
            ValueError: mode is not a GameType; the session is untouched

        Returns:
            Game: The new in-progress game
        """
        validate_player_names(player1, player2)
        mode = GameType(mode)

        if self.state != SessionState.IDLE:
            logging.warning(f"Discarding unsaved game {self.game.id}")

        self.game = Game(
            id=self.id_factory(),
            player1=player1,
            player2=player2,
            played_at=self.clock(),
        )
        self.mode = mode
        self._rounds = []
        self.last_round = None
        self.state = SessionState.IN_PROGRESS
        logging.info(f"Started game {self.game.id} ({self.mode.value}): {player1} vs {player2}")
        return self.game

    def play_round(self, move1: Move, move2: Optional[Move] = None) -> Game:
        """Play one round and finalize the game when it is decided

        Against the automated opponent move2 is ignored and drawn from the move source.

        Raises:
            NoActiveSession: start() has not been called, or the last game already ended
            GameAlreadyFinalized: The previous save failed; use retry_save() or start()
            PersistenceFailed: The game was decided but the history store rejected it

        Returns:
            Game: The in-progress game (winner unset) or the saved, finalized game
        """
        if self.state == SessionState.PENDING_SAVE:
            raise GameAlreadyFinalized(self.game)
        if self.state != SessionState.IN_PROGRESS:
            raise NoActiveSession()

        if self.mode == GameType.player_vs_bot:
            move2 = self.move_source.generate_move()
        elif move2 is None:
            raise ValueError("move2 is required in a player vs player game")

        game = self.game
        round_result = resolve_round(Move(move1), Move(move2), game.player1, game.player2)
        self._rounds.append(round_result)
        self.last_round = round_result
        logging.info(
            f"Game {game.id} round {len(self._rounds)}: "
            f"{round_result.move1.value} vs {round_result.move2.value} -> {round_result.winner}"
        )

        winner = decide_game_winner(self._rounds, game.player1, game.player2)
        if winner is None:
            return game

        self.game = game.model_copy(update={"winner": winner})
        logging.info(f"Game {game.id} finished after {len(self._rounds)} rounds, winner: {winner}")
        return self._save()

    def retry_save(self) -> Game:
        """Save the finalized game again after a PersistenceFailed."""
        if self.state != SessionState.PENDING_SAVE:
            raise NoActiveSession()
        return self._save()

    def _save(self) -> Game:
        game = self.game
        try:
            self.history_store.save(game)
        except Exception as e:
            self.state = SessionState.PENDING_SAVE
            logging.error(f"Failed to save game {game.id}: {e}")
            raise PersistenceFailed(game, e) from e

        self.game = None
        self.mode = None
        self._rounds = []
        self.state = SessionState.IDLE
        return game
