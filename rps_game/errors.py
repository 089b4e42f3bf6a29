from rps_game.models.dc_models import Game


class GameError(Exception):
    """Base class of every error raised by the game core."""


class InvalidPlayerName(GameError):
    def __init__(self, player: str, reason: str):
        self.player = player
        self.reason = reason
        super().__init__(f"invalid {player} name: {reason}")


class NoActiveSession(GameError):
    def __init__(self):
        super().__init__("no game in progress")


class GameAlreadyFinalized(GameError):
    """A finalized game is waiting to be saved; retry the save or start a new session."""

    def __init__(self, game: Game):
        self.game = game
        super().__init__(f"game {game.id} is finalized but not saved")


class StorageError(GameError):
    """Raised by history stores when a save or fetch fails."""


class PersistenceFailed(GameError):
    def __init__(self, game: Game, cause: Exception):
        self.game = game
        self.cause = cause
        super().__init__(f"failed to save game {game.id}: {cause}")
