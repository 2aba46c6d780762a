"""
Controlador de referidos - Estado y validación de referidos
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from app.core.dependencies import Database
from app.models.referral import ReferralMilestones, ReferralValidation
from app.services.referral_service import ReferralService


router = APIRouter(prefix="/referrals", tags=["referrals"])


class ValidateReferralRequest(BaseModel):
    uid: Optional[str] = None


@router.get("/status", response_model=ReferralMilestones)
async def get_referral_status(
    db: Database,
    uid: Optional[str] = Query(None, description="Referrer user ID")
):
    """
    Obtener los referidos válidos/pendientes y el progreso en los premios.
    """
    if not uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID required"
        )

    referral_service = ReferralService(db)
    return await referral_service.check_referral_milestones(uid)


@router.post("/validate", response_model=ReferralValidation)
async def validate_referral(request: ValidateReferralRequest, db: Database):
    """
    Forzar la validación de un referido (útil después de verificar el email
    o de jugar la primera partida).
    """
    if not request.uid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User ID required"
        )

    referral_service = ReferralService(db)
    return await referral_service.validate_referral(request.uid)
