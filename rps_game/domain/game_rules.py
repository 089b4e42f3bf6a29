"""Rock-paper-scissors rules that are independent from storage and delivery.

Rule of thumb:
- OK: move comparison, name validation, best-of-three scoring.
- Not OK: touching DB sessions, ledger clients, FastAPI, datetime.now(), etc.
"""

from typing import List, Optional

from rps_game.errors import InvalidPlayerName
from rps_game.models.dc_models import Move, Outcome, RoundResult

DRAW = "Draw"
MAX_PLAYER_NAME_LENGTH = 15
ROUNDS_PER_GAME = 3

# Each move beats exactly one other move.
BEATS = {
    Move.rock: Move.scissors,
    Move.paper: Move.rock,
    Move.scissors: Move.paper,
}


def determine_outcome(move1: Move, move2: Move) -> Outcome:
    """Return the round outcome from the first player's point of view."""
    if move1 == move2:
        return Outcome.draw
    if BEATS[move1] == move2:
        return Outcome.first_wins
    return Outcome.second_wins


def validate_player_name(name: str, player: str = "player") -> str:
    """Check a single player name.

    Args:
        name (str): Name as supplied by the caller
        player (str): Slot reported in the error, "player1" or "player2"

    Raises:
        InvalidPlayerName: The name is empty, too long or collides with DRAW

    Returns:
        str: The validated name
    """
    if name is None or not name.strip():
        raise InvalidPlayerName(player, "name cannot be empty")
    if len(name) > MAX_PLAYER_NAME_LENGTH:
        raise InvalidPlayerName(
            player,
            f"name cannot be longer than {MAX_PLAYER_NAME_LENGTH} characters",
        )
    if name.casefold() == DRAW.casefold():
        raise InvalidPlayerName(player, f"name cannot be '{DRAW}'")
    return name


def validate_player_names(player1: str, player2: str) -> None:
    """Validate both names, reporting the first player that fails."""
    validate_player_name(player1, "player1")
    validate_player_name(player2, "player2")
    if player1 == player2:
        raise InvalidPlayerName("player2", "name must differ from player1")


def resolve_round(move1: Move, move2: Move, player1: str, player2: str) -> RoundResult:
    outcome = determine_outcome(move1, move2)
    if outcome == Outcome.first_wins:
        winner = player1
    elif outcome == Outcome.second_wins:
        winner = player2
    else:
        winner = DRAW
    return RoundResult(move1=move1, move2=move2, outcome=outcome, winner=winner)


def decide_game_winner(rounds: List[RoundResult], player1: str, player2: str) -> Optional[str]:
    """Apply the best-of-three rule to the rounds played so far.

    Args:
        rounds (List[RoundResult]): Rounds of the current game in play order
        player1 (str): Name of the first player
        player2 (str): Name of the second player

    Returns:
        Optional[str]: None while the game goes on, otherwise player1, player2 or DRAW
    """
    if len(rounds) == 2:
        first, second = rounds
        if first.outcome == second.outcome and first.outcome != Outcome.draw:
            return first.winner
        return None

    if len(rounds) == ROUNDS_PER_GAME:
        p1_wins = sum(1 for r in rounds if r.outcome == Outcome.first_wins)
        p2_wins = sum(1 for r in rounds if r.outcome == Outcome.second_wins)
        if p1_wins > p2_wins:
            return player1
        if p2_wins > p1_wins:
            return player2
        return DRAW

    return None
