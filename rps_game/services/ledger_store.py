"""Ledger-backed history store.

Each finalized game becomes one storeGameResult(bytes15, bytes15, uint8) contract
call, and history is rebuilt from the GameResultStored events the contract emits.
Connecting, signing and scanning the chain is the ledger client's job; this
module only owns the game <-> contract encoding.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Protocol

from rps_game.domain.game_rules import DRAW
from rps_game.errors import StorageError
from rps_game.models.dc_models import Game
from rps_game.services.history_store import HistoryStore

NAME_FIELD_SIZE = 15

WINNER_DRAW = 0
WINNER_PLAYER1 = 1
WINNER_PLAYER2 = 2


@dataclass(frozen=True)
class GameResultEvent:
    """One GameResultStored event as reported by the ledger client."""

    tx_hash: str
    player1: bytes
    player2: bytes
    winner: int
    block_timestamp: int  # seconds since the epoch


class LedgerClient(Protocol):
    def store_game_result(self, player1: bytes, player2: bytes, winner: int) -> str:
        """Send the contract call, wait until it is mined and return the tx hash."""
        ...

    def fetch_game_results(self) -> List[GameResultEvent]:
        """Return every GameResultStored event in ledger order."""
        ...


def encode_name(name: str) -> bytes:
    raw = name.encode("utf-8")
    if len(raw) > NAME_FIELD_SIZE:
        raise StorageError(f"name {name!r} does not fit in {NAME_FIELD_SIZE} bytes")
    return raw.ljust(NAME_FIELD_SIZE, b"\x00")


def decode_name(raw: bytes) -> str:
    return raw[:NAME_FIELD_SIZE].rstrip(b"\x00").decode("utf-8", errors="replace")


def encode_winner(game: Game) -> int:
    if game.winner == DRAW:
        return WINNER_DRAW
    if game.winner == game.player1:
        return WINNER_PLAYER1
    if game.winner == game.player2:
        return WINNER_PLAYER2
    raise StorageError(f"invalid winner value {game.winner!r} for game {game.id}")


def decode_winner(code: int, player1: str, player2: str) -> str:
    if code == WINNER_PLAYER1:
        return player1
    if code == WINNER_PLAYER2:
        return player2
    if code == WINNER_DRAW:
        return DRAW
    raise StorageError(f"invalid winner code {code}")


class LedgerHistoryStore(HistoryStore):
    def __init__(self, client: LedgerClient):
        self.client = client

    def save(self, game: Game) -> None:
        player1 = encode_name(game.player1)
        player2 = encode_name(game.player2)
        winner = encode_winner(game)
        try:
            tx_hash = self.client.store_game_result(player1, player2, winner)
        except StorageError:
            raise
        except Exception as e:
            logging.error(f"Failed to store game result on ledger: {e}")
            raise StorageError(f"error storing game {game.id} on ledger") from e
        logging.info(f"Stored game {game.id} on ledger in tx {tx_hash}")

    def fetch(self) -> List[Game]:
        try:
            events = self.client.fetch_game_results()
        except StorageError:
            raise
        except Exception as e:
            logging.error(f"Failed to read game results from ledger: {e}")
            raise StorageError("error reading game history from ledger") from e

        games = []
        for event in events:
            player1 = decode_name(event.player1)
            player2 = decode_name(event.player2)
            try:
                winner = decode_winner(event.winner, player1, player2)
            except StorageError as e:
                logging.warning(f"Skipping ledger event {event.tx_hash}: {e}")
                continue
            games.append(
                Game(
                    id=event.tx_hash,
                    player1=player1,
                    player2=player2,
                    winner=winner,
                    played_at=datetime.fromtimestamp(event.block_timestamp),
                )
            )
        return games

    def close(self) -> None:
        close = getattr(self.client, "close", None)
        if close is not None:
            close()
