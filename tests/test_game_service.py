"""
Tests for GameService, the entry point shared by the CLI and the HTTP routes.
"""

import pytest

from rps_game.domain.game_rules import DRAW
from rps_game.errors import NoActiveSession, StorageError
from rps_game.models.dc_models import GameType, Move
from rps_game.services.game_service import GameService
from rps_game.services.game_session import SessionState
from rps_game.services.move_source import FixedMoveSource
from tests.conftest import FailingHistoryStore


class TestGameService:
    def test_full_game_lands_in_history(self, service):
        service.start_session(GameType.player_vs_player, "Alice", "Bob")
        service.play_round(Move.rock, Move.paper)
        service.play_round(Move.rock, Move.scissors)
        game = service.play_round(Move.paper, Move.paper)

        assert game.winner == DRAW
        assert service.get_history() == [game]
        assert service.get_active_rounds() == []
        assert service.state == SessionState.IDLE

    def test_active_rounds_snapshot(self, service):
        service.start_session(GameType.player_vs_player, "Alice", "Bob")
        service.play_round(Move.rock, Move.paper)

        rounds = service.get_active_rounds()
        rounds.clear()

        assert len(service.get_active_rounds()) == 1
        assert service.current_game.winner is None

    def test_idle_rounds_empty(self, service):
        assert service.get_active_rounds() == []
        assert service.current_game is None

    def test_bot_game(self, service):
        service.start_session(GameType.player_vs_bot, "Alice", "Bot")
        service.play_round(Move.paper)
        game = service.play_round(Move.paper, Move.scissors)

        assert game.winner == "Alice"
        assert service.last_round.move2 == Move.rock

    def test_no_active_session_leaves_history_alone(self, service):
        with pytest.raises(NoActiveSession):
            service.play_round(Move.rock, Move.paper)
        assert service.get_history() == []

    def test_history_errors_propagate(self):
        service = GameService(FailingHistoryStore(), FixedMoveSource([Move.rock]))
        with pytest.raises(StorageError):
            service.get_history()

    def test_independent_services_share_store(self, memory_store):
        first = GameService(memory_store, FixedMoveSource([Move.rock]))
        second = GameService(memory_store, FixedMoveSource([Move.rock]))
        first.start_session(GameType.player_vs_player, "Alice", "Bob")
        second.start_session(GameType.player_vs_player, "Carol", "Dave")

        first.play_round(Move.rock, Move.scissors)
        second.play_round(Move.scissors, Move.rock)
        first.play_round(Move.rock, Move.scissors)

        assert [game.winner for game in memory_store.fetch()] == ["Alice"]
        assert second.state == SessionState.IN_PROGRESS
        assert len(second.get_active_rounds()) == 1

    def test_default_move_source_is_random(self, memory_store):
        service = GameService(memory_store)
        service.start_session(GameType.player_vs_bot, "Alice", "Bot")
        service.play_round(Move.rock)
        assert service.last_round.move2 in set(Move)
