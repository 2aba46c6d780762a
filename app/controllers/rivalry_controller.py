"""
Controlador de rivalry - Rankings por escuela (individuales y por equipo)

Un usuario sin puntaje, sin equipo o inexistente no es un error:
se devuelve rank=None para que el front lo muestre como "pendiente".
"""

from typing import Optional

from fastapi import APIRouter, Query

from app.core.dependencies import Database, AppSettings
from app.models.rivalry import (
    IndividualRank,
    TeamRank,
    TeamAggregate,
    TeamStanding,
    TopIndividual,
)
from app.services.rivalry_service import RivalryService


router = APIRouter(prefix="/rivalry", tags=["rivalry"])


@router.get("/schools/{school}/individuals", response_model=list[TopIndividual])
async def get_top_individuals(
    school: str,
    db: Database,
    settings: AppSettings,
    limit: Optional[int] = Query(None, ge=1, le=100)
):
    """
    Obtener los mejores jugadores de una escuela.
    """
    rivalry_service = RivalryService(db)
    return await rivalry_service.get_top_individuals_for_school(
        school,
        limit or settings.top_individuals_limit
    )


@router.get("/schools/{school}/teams", response_model=list[TeamStanding])
async def get_team_rankings(school: str, db: Database):
    """
    Obtener todos los equipos de una escuela ordenados por puntaje total.
    """
    rivalry_service = RivalryService(db)
    return await rivalry_service.get_all_team_rankings_for_school(school)


@router.get("/schools/{school}/top-team", response_model=Optional[TeamAggregate])
async def get_top_team(school: str, db: Database):
    """
    Obtener el equipo que tiene el TopSeat de la escuela (null si no hay).
    """
    rivalry_service = RivalryService(db)
    return await rivalry_service.get_top_team_for_school(school)


@router.get("/users/{user_id}/rank", response_model=IndividualRank)
async def get_user_rank(
    user_id: str,
    db: Database,
    school: Optional[str] = Query(None, description="Defaults to the user's school")
):
    """
    Obtener la posición de un usuario dentro de una escuela.
    """
    rivalry_service = RivalryService(db)
    return await rivalry_service.get_individual_rank(user_id, school)


@router.get("/users/{user_id}/team-rank", response_model=TeamRank)
async def get_user_team_rank(user_id: str, db: Database):
    """
    Obtener la posición del equipo del usuario dentro de su escuela.
    """
    rivalry_service = RivalryService(db)
    return await rivalry_service.get_team_rank(user_id)
