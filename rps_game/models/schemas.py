from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import String, DateTime
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


class GameResult(Base):
    __tablename__ = "game_results"
    id = Column(String, primary_key=True, default=lambda: str(uuid7()))
    player1 = Column(String, nullable=False)
    player2 = Column(String, nullable=False)
    winner = Column(String, nullable=False)
    played_at = Column(DateTime, nullable=False, default=datetime.now)
