"""Move sources used to play the automated opponent's side of a round."""

from abc import ABC, abstractmethod
from typing import Sequence
import random
import time

from rps_game.models.dc_models import Move

MOVES = (Move.rock, Move.paper, Move.scissors)


class MoveSource(ABC):
    @abstractmethod
    def generate_move(self) -> Move:
        """Produce the next move."""


class RandomMoveSource(MoveSource):
    """Uniform pick among the three moves from a generator owned by this instance.

    Not suitable where unpredictability matters against an adversary.
    """

    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = time.time_ns()
        self._rng = random.Random(seed)

    def generate_move(self) -> Move:
        return self._rng.choice(MOVES)


class FixedMoveSource(MoveSource):
    """Replays a preset sequence of moves, starting over once it runs out."""

    def __init__(self, moves: Sequence[Move]):
        if not moves:
            raise ValueError("FixedMoveSource needs at least one move")
        self.moves = list(moves)
        self.index = 0

    def generate_move(self) -> Move:
        if self.index >= len(self.moves):
            self.index = 0
        move = self.moves[self.index]
        self.index += 1
        return move
