from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Attempt(BaseModel):
    """Partida jugada por un usuario"""

    id: str
    uid: str
    score: Optional[int] = None
    created_at: datetime

    class Config:
        populate_by_name = True


class AttemptCreate(BaseModel):
    uid: str
    score: Optional[int] = None
