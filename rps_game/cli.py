"""
Rock Paper Scissors CLI - text front end for the game engine.

Usage:
    rps-game                     Play with the configured storage backend
    rps-game --storage memory    Play without keeping history between runs
"""

import argparse
import logging
import sys
from typing import Callable, Optional, Tuple

from rps_game.domain.game_rules import (
    DRAW,
    ROUNDS_PER_GAME,
    validate_player_name,
    validate_player_names,
)
from rps_game.errors import GameError, InvalidPlayerName
from rps_game.load_secrets import log_level, storage_backend
from rps_game.models.dc_models import Game, GameType, Move
from rps_game.services.game_service import GameService
from rps_game.services.store_factory import build_history_store

BOT_NAME = "Bot"

MOVE_INPUTS = {
    "rock": Move.rock,
    "r": Move.rock,
    "paper": Move.paper,
    "p": Move.paper,
    "scissors": Move.scissors,
    "s": Move.scissors,
}


class GameCLI:
    def __init__(
        self,
        service: GameService,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ):
        self.service = service
        self.input_fn = input_fn or input
        self.output_fn = output_fn or print

    def start(self):
        """Menu loop; returns when the user picks Exit."""
        while True:
            self.output_fn("\nRock Paper Scissors Game")
            self.output_fn("1. Player vs Player")
            self.output_fn("2. Player vs Bot")
            self.output_fn("3. View Game History")
            self.output_fn("4. Exit")
            choice = self.read_input("Choose an option: ")

            if choice == "1":
                self.play(GameType.player_vs_player)
            elif choice == "2":
                self.play(GameType.player_vs_bot)
            elif choice == "3":
                self.show_history()
            elif choice == "4":
                self.output_fn("Thanks for playing!")
                return
            else:
                self.output_fn("Invalid option, please try again")

    def play(self, mode: GameType):
        player1, player2 = self.read_players(mode)

        try:
            self.service.start_session(mode, player1, player2)
        except InvalidPlayerName as e:
            self.output_fn(f"Error: {e}")
            return

        self.output_fn("\nBest of 3 rounds! Game ends early if a player wins the first two rounds.")
        for round_number in range(1, ROUNDS_PER_GAME + 1):
            self.output_fn(f"\nRound {round_number}:")
            move1 = self.read_move(player1)
            move2 = None if mode == GameType.player_vs_bot else self.read_move(player2)

            try:
                game = self.service.play_round(move1, move2)
            except GameError as e:
                self.output_fn(f"Error: {e}")
                return

            self.display_result(game)
            if game.is_finalized:
                if round_number < ROUNDS_PER_GAME and game.winner != DRAW:
                    self.output_fn(f"\n{game.winner} won in {round_number} rounds!")
                return

    def show_history(self):
        try:
            history = self.service.get_history()
        except GameError as e:
            self.output_fn(f"Error getting history: {e}")
            return

        if not history:
            self.output_fn("No games played yet!")
            return

        self.output_fn("\nGame History:")
        for game in history:
            self.output_fn(f"\nGame ID: {game.id}")
            self.output_fn(f"Players: {game.player1} vs {game.player2}")
            self.output_fn(f"Winner: {game.winner}")
            self.output_fn(f"Played at: {game.played_at.isoformat(timespec='seconds')}")
            self.output_fn("------------------------")

    def display_result(self, game: Game):
        self.output_fn(f"\n{game.player1} vs {game.player2}")
        last_round = self.service.last_round
        if last_round is not None:
            self.output_fn(f"Round moves: {last_round.move1.value} vs {last_round.move2.value}")
            self.output_fn(f"Round winner: {last_round.winner}")

        if game.winner == DRAW:
            self.output_fn("The game is a draw!")
        elif game.winner is not None:
            self.output_fn(f"Game winner: {game.winner}")

    def read_input(self, prompt: str) -> str:
        return self.input_fn(prompt).strip()

    def read_player_name(self, prompt: str) -> str:
        while True:
            name = self.read_input(prompt)
            try:
                return validate_player_name(name)
            except InvalidPlayerName as e:
                self.output_fn(f"Invalid name: {e.reason}. Please try again.")

    def read_players(self, mode: GameType) -> Tuple[str, str]:
        """Prompt until both names pass validation as a pair."""
        if mode == GameType.player_vs_bot:
            while True:
                player1 = self.read_player_name("Enter your name: ")
                try:
                    validate_player_names(player1, BOT_NAME)
                    return player1, BOT_NAME
                except InvalidPlayerName:
                    self.output_fn(f"Invalid name: {BOT_NAME} is the opponent's name. Please try again.")

        player1 = self.read_player_name("Enter Player 1 name: ")
        while True:
            player2 = self.read_player_name("Enter Player 2 name: ")
            try:
                validate_player_names(player1, player2)
                return player1, player2
            except InvalidPlayerName as e:
                self.output_fn(f"Invalid name: {e.reason}. Please try again.")

    def read_move(self, player: str) -> Move:
        while True:
            choice = self.read_input(f"{player}, enter your move (Rock/Paper/Scissors): ").lower()
            if choice in MOVE_INPUTS:
                return MOVE_INPUTS[choice]
            self.output_fn("Invalid move. Please enter R, P, or S (or full word)")


def main(argv: Optional[list] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Best-of-three Rock Paper Scissors",
        prog="rps-game",
    )
    parser.add_argument(
        "--storage",
        choices=["sqlite", "memory"],
        default=storage_backend if storage_backend in ("sqlite", "memory") else "sqlite",
        help="Where finished games are recorded",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=log_level)
    history_store = build_history_store(args.storage)
    try:
        GameCLI(GameService(history_store)).start()
    except (EOFError, KeyboardInterrupt):
        print("\nThanks for playing!")
    finally:
        history_store.close()


if __name__ == "__main__":
    sys.exit(main())
