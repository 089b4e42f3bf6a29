from pydantic import BaseModel
from datetime import datetime


class GameResultSchema(BaseModel):
    id: str
    player1: str
    player2: str
    winner: str
    played_at: datetime

    class Config:
        from_attributes = True
