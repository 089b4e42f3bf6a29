from pydantic import BaseModel, Field
from enum import Enum
from datetime import datetime
from typing import List, Optional


class Move(str, Enum):
    rock = "Rock"
    paper = "Paper"
    scissors = "Scissors"


class GameType(str, Enum):
    player_vs_player = "player_vs_player"
    player_vs_bot = "player_vs_bot"


class Outcome(str, Enum):
    draw = "draw"
    first_wins = "first_wins"  # player1 takes the round
    second_wins = "second_wins"  # player2 takes the round


class RoundResult(BaseModel):
    move1: Move
    move2: Move
    outcome: Outcome
    winner: str  # player1 name, player2 name or DRAW

    class Config:
        frozen = True


class Game(BaseModel):
    id: str
    player1: str
    player2: str
    winner: Optional[str] = None  # unset while the game is in progress
    played_at: datetime

    class Config:
        frozen = True

    @property
    def is_finalized(self) -> bool:
        return self.winner is not None


class StartSessionModel(BaseModel):
    mode: GameType = GameType.player_vs_player
    player1: str
    player2: Optional[str] = None


class PlayRoundModel(BaseModel):
    move1: Move
    move2: Optional[Move] = None  # ignored against the bot


class SessionModel(BaseModel):
    session_id: str
    state: str
    mode: Optional[GameType] = None
    game: Optional[Game] = None
    rounds: List[RoundResult] = Field(default_factory=list)
    last_round: Optional[RoundResult] = None
