from typing import Optional, Union
from pydantic import BaseModel, Field


class RivalryUser(BaseModel):
    """Jugador tal como lo ve el ranking de rivalidad (snapshot de users)"""

    id: str = Field(..., alias="_id")
    name: Optional[str] = None

    school: Optional[str] = None
    team: Optional[str] = None  # fraternidad / equipo dentro de la escuela

    score: Optional[Union[int, float]] = None  # None = todavía no rankea

    class Config:
        populate_by_name = True


class IndividualRank(BaseModel):
    rank: Optional[int] = None
    total_users: int = 0


class TeamRank(BaseModel):
    team_name: Optional[str] = None
    rank: Optional[int] = None
    total_teams: int = 0
    total_score: Union[int, float] = 0
    member_count: int = 0


class TeamAggregate(BaseModel):
    """Suma de puntos de un equipo dentro de una escuela"""

    team_name: str
    total_score: Union[int, float] = 0
    member_count: int = 0


class TeamStanding(TeamAggregate):
    rank: int


class TopIndividual(BaseModel):
    user_id: str
    name: str
    team: Optional[str] = None
    score: Union[int, float]
    rank: int
