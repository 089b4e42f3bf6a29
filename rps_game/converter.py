from rps_game.models.dc_models import Game
from rps_game.models.schema_models import GameResultSchema


class DataConverter:
    """This class is used to convert games between the domain and storage formats."""

    @staticmethod
    def convert_game_to_schema(game: Game) -> GameResultSchema:
        """Convert a finalized Game to the row schema stored in game_results

        Args:
            game (Game): Finalized game, winner must be set

        Returns:
            GameResultSchema: Row data ready to be written
        """
        if not game.is_finalized:
            raise ValueError(f"game {game.id} has no winner and cannot be stored")
        return GameResultSchema(
            id=game.id,
            player1=game.player1,
            player2=game.player2,
            winner=game.winner,
            played_at=game.played_at,
        )

    @staticmethod
    def convert_schema_to_game(game_result: GameResultSchema) -> Game:
        return Game(
            id=game_result.id,
            player1=game_result.player1,
            player2=game_result.player2,
            winner=game_result.winner,
            played_at=game_result.played_at,
        )
