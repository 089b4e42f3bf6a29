from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from rps_game.models.schemas import Base


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to the engine; tables are created when missing."""
    Base.metadata.create_all(engine)
    return sessionmaker(
        class_=Session,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )
