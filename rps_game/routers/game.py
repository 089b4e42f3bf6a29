import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Request, Response, status

from rps_game.domain.game_rules import DRAW
from rps_game.errors import (
    GameAlreadyFinalized,
    InvalidPlayerName,
    NoActiveSession,
    PersistenceFailed,
    StorageError,
)
from rps_game.manager import SessionManager
from rps_game.models.dc_models import (
    Game,
    GameType,
    PlayRoundModel,
    RoundResult,
    SessionModel,
    StartSessionModel,
)
from rps_game.services.game_service import GameService

BOT_NAME = "Bot"

game_router = APIRouter()


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


@contextmanager
def locked_service(manager: SessionManager, session_id: UUID) -> Iterator[GameService]:
    """Yield the session's service while holding its lock; 404 for unknown ids"""
    service = manager.get(session_id)
    lock = manager.lock_for(session_id)
    if service is None or lock is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session {session_id} not found",
        )
    with lock:
        yield service


def to_http_exception(error: Exception) -> HTTPException:
    if isinstance(error, InvalidPlayerName):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, (NoActiveSession, GameAlreadyFinalized)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, (PersistenceFailed, StorageError)):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def session_model(session_id: UUID, service: GameService, game: Optional[Game] = None) -> SessionModel:
    return SessionModel(
        session_id=str(session_id),
        state=service.state.value,
        mode=service.current_mode,
        game=game if game is not None else service.current_game,
        rounds=service.get_active_rounds(),
        last_round=service.last_round,
    )


def start_game(service: GameService, data: StartSessionModel) -> Game:
    player2 = data.player2
    if data.mode == GameType.player_vs_bot and not player2:
        player2 = BOT_NAME
    return service.start_session(data.mode, data.player1, player2 or "")


class GameAPI:
    @staticmethod
    @game_router.post(
        "/sessions", response_model=SessionModel, status_code=status.HTTP_201_CREATED
    )
    def create_session(data: StartSessionModel, request: Request):
        manager = get_session_manager(request)
        session_id = manager.create()
        with locked_service(manager, session_id) as service:
            try:
                game = start_game(service, data)
            except InvalidPlayerName as e:
                manager.remove(session_id)
                raise to_http_exception(e)
            return session_model(session_id, service, game)

    @staticmethod
    @game_router.post("/sessions/{session_id}/start", response_model=SessionModel)
    def restart_session(session_id: UUID, data: StartSessionModel, request: Request):
        with locked_service(get_session_manager(request), session_id) as service:
            try:
                game = start_game(service, data)
            except InvalidPlayerName as e:
                raise to_http_exception(e)
            return session_model(session_id, service, game)

    @staticmethod
    @game_router.post("/sessions/{session_id}/rounds", response_model=SessionModel)
    def play_round(session_id: UUID, data: PlayRoundModel, request: Request):
        with locked_service(get_session_manager(request), session_id) as service:
            try:
                game = service.play_round(data.move1, data.move2)
            except (NoActiveSession, GameAlreadyFinalized, PersistenceFailed, ValueError) as e:
                raise to_http_exception(e)
            if game.is_finalized:
                result = "a draw" if game.winner == DRAW else f"won by {game.winner}"
                logging.info(f"Session {session_id}: game {game.id} {result}")
            return session_model(session_id, service, game)

    @staticmethod
    @game_router.get("/sessions/{session_id}/rounds", response_model=List[RoundResult])
    def get_rounds(session_id: UUID, request: Request):
        with locked_service(get_session_manager(request), session_id) as service:
            return service.get_active_rounds()

    @staticmethod
    @game_router.post("/sessions/{session_id}/retry-save", response_model=SessionModel)
    def retry_save(session_id: UUID, request: Request):
        with locked_service(get_session_manager(request), session_id) as service:
            try:
                game = service.retry_save()
            except (NoActiveSession, PersistenceFailed) as e:
                raise to_http_exception(e)
            return session_model(session_id, service, game)

    @staticmethod
    @game_router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_session(session_id: UUID, request: Request):
        if not get_session_manager(request).remove(session_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Session {session_id} not found",
            )
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @staticmethod
    @game_router.get("/history", response_model=List[Game])
    def get_history(request: Request):
        try:
            return get_session_manager(request).history_store.fetch()
        except StorageError as e:
            logging.error(f"Failed to read game history: {e}")
            raise to_http_exception(e)
