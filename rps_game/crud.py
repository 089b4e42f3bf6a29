from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List
import logging

from rps_game.errors import StorageError
from rps_game.models.schema_models import GameResultSchema
from rps_game.models.schemas import GameResult


class CreateData:
    @staticmethod
    def create_game_result(game_result: GameResultSchema, session: Session) -> None:
        """Insert one finalized game into game_results

        Args:
            game_result (GameResultSchema): Row data of the finalized game
            session (Session): Session object to interact with database

        Raises:
            StorageError: The insert or the commit failed
        """
        with session:
            try:
                new_game_result = GameResult(
                    id=game_result.id,
                    player1=game_result.player1,
                    player2=game_result.player2,
                    winner=game_result.winner,
                    played_at=game_result.played_at,
                )
                session.add(new_game_result)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logging.error(f"Failed to create game result data: {e}")
                raise StorageError(f"error saving game {game_result.id}") from e


class ReadData:
    @staticmethod
    def read_game_history(session: Session) -> List[GameResultSchema]:
        """Read every stored game, most recent first

        Args:
            session (Session): Session object to interact with database

        Raises:
            StorageError: The query failed

        Returns:
            List[GameResultSchema]: Stored games ordered by played_at descending
        """
        with session:
            try:
                stmt = select(GameResult).order_by(desc(GameResult.played_at))
                result = session.execute(stmt)
                result = result.scalars().all()
                return [GameResultSchema.model_validate(row) for row in result]
            except SQLAlchemyError as e:
                logging.error(f"Failed to read game history: {e}")
                raise StorageError("error querying game history") from e
