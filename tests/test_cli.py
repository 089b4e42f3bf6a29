"""
Tests for the text front end, driven by scripted input.
"""

from rps_game.cli import GameCLI, main
from rps_game.models.dc_models import Move
from rps_game.services.game_service import GameService
from rps_game.services.move_source import FixedMoveSource
from tests.conftest import FailingHistoryStore


def run_cli(service, *answers):
    inputs = iter(answers)
    output = []
    GameCLI(service, input_fn=lambda prompt: next(inputs), output_fn=output.append).start()
    return output


class TestGameCLI:
    def test_player_vs_player_early_win(self, service, memory_store):
        output = run_cli(service, "1", "Alice", "Bob", "r", "s", "PAPER", "rock", "4")

        assert "Game winner: Alice" in output
        assert "\nAlice won in 2 rounds!" in output
        assert output[-1] == "Thanks for playing!"
        assert [game.winner for game in memory_store.fetch()] == ["Alice"]

    def test_player_vs_bot_draw(self, service, memory_store):
        output = run_cli(service, "2", "Alice", "rock", "rock", "rock", "4")

        assert "Round moves: Rock vs Rock" in output
        assert "The game is a draw!" in output
        assert memory_store.fetch()[0].player2 == "Bot"

    def test_reprompts_bad_name_and_move(self, service):
        output = run_cli(
            service, "1", "", "ThisNameIsTooLongForTheGame", "Alice", "Bob",
            "lizard", "r", "s", "r", "s", "4",
        )

        assert "Invalid name: name cannot be empty. Please try again." in output
        assert "Invalid name: name cannot be longer than 15 characters. Please try again." in output
        assert "Invalid move. Please enter R, P, or S (or full word)" in output
        assert "Game winner: Alice" in output

    def test_duplicate_name_reprompts_player2(self, service, memory_store):
        output = run_cli(service, "1", "Alice", "Alice", "Bob", "r", "s", "r", "s", "4")

        assert "Invalid name: name must differ from player1. Please try again." in output
        assert [(game.player1, game.player2) for game in memory_store.fetch()] == [("Alice", "Bob")]

    def test_bot_name_reprompts_player(self, service, memory_store):
        output = run_cli(service, "2", "Bot", "Alice", "paper", "paper", "4")

        assert "Invalid name: Bot is the opponent's name. Please try again." in output
        assert memory_store.fetch()[0].player1 == "Alice"

    def test_history(self, service):
        output = run_cli(service, "3", "1", "Alice", "Bob", "r", "s", "r", "s", "3", "4")

        assert "No games played yet!" in output
        assert "Players: Alice vs Bob" in output
        assert "Winner: Alice" in output

    def test_history_error(self):
        service = GameService(FailingHistoryStore(), FixedMoveSource([Move.rock]))
        output = run_cli(service, "3", "4")
        assert "Error getting history: history unavailable" in output

    def test_save_error_reported(self):
        service = GameService(FailingHistoryStore(), FixedMoveSource([Move.rock]))
        output = run_cli(service, "1", "Alice", "Bob", "r", "s", "r", "s", "4")
        assert any(line.startswith("Error: failed to save game") for line in output)

    def test_invalid_option(self, service):
        output = run_cli(service, "9", "4")
        assert "Invalid option, please try again" in output


def test_main_with_memory_storage(monkeypatch, capsys):
    answers = iter(["4"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    main(["--storage", "memory"])

    assert "Thanks for playing!" in capsys.readouterr().out


def test_main_exits_cleanly_on_eof(monkeypatch, capsys):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)

    main(["--storage", "memory"])

    assert "Thanks for playing!" in capsys.readouterr().out
