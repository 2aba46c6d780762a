"""
Controlador de partidas - Registro de intentos de juego
"""

from fastapi import APIRouter, HTTPException, status

from app.core.dependencies import Database
from app.models.attempt import Attempt, AttemptCreate
from app.services.attempt_service import AttemptService, UserNotFoundError


router = APIRouter(prefix="/attempts", tags=["attempts"])


@router.post("", response_model=Attempt, status_code=status.HTTP_201_CREATED)
async def create_attempt(attempt_data: AttemptCreate, db: Database):
    """
    Registrar una partida.

    La primera partida de un usuario referido puede activar el premio del referente.
    """
    attempt_service = AttemptService(db)

    try:
        return await attempt_service.record_attempt(attempt_data)
    except UserNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
