"""
Controlador de autenticación - Signup con verificación de email
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from app.core.dependencies import Database
from app.services.email_verification_service import (
    EmailVerificationService,
    EmailVerificationError,
    InvalidEmailError,
    UserNotFoundError,
)


router = APIRouter(prefix="/auth", tags=["auth"])

VERIFICATION_SUCCESS_PATH = "/verification-success.html"


class SignupRequest(BaseModel):
    """Lo que manda el front al registrarse."""
    email: str
    referral_code: Optional[str] = None


class SignupResponse(BaseModel):
    success: bool = True
    message: str
    uid: str
    email_sent: bool


class ResendRequest(BaseModel):
    email: str


class MessageResponse(BaseModel):
    success: bool = True
    message: str


def _to_http_error(e: EmailVerificationError) -> HTTPException:
    """Traduce los errores del servicio a una respuesta {error, code}."""
    detail = {"error": str(e), "code": e.code}

    if isinstance(e, InvalidEmailError):
        detail["suggestion"] = e.suggestion

    status_code = (
        status.HTTP_404_NOT_FOUND
        if isinstance(e, UserNotFoundError)
        else status.HTTP_400_BAD_REQUEST
    )
    return HTTPException(status_code=status_code, detail=detail)


@router.post("/signup", response_model=SignupResponse)
async def signup(request: SignupRequest, db: Database):
    """
    Registrar un email y mandar el link de verificación.

    Si el email ya existe pero no está verificado, se reenvía el link.
    """
    service = EmailVerificationService(db)

    try:
        result = await service.signup(request.email, request.referral_code)
    except EmailVerificationError as e:
        raise _to_http_error(e)

    return SignupResponse(
        message="Account created! Please check your email to verify your account.",
        uid=result.uid,
        email_sent=result.email_sent
    )


@router.get("/verify-email")
async def verify_email(
    db: Database,
    token: str = Query(..., min_length=1)
):
    """
    Endpoint al que apunta el link del email. Redirige a la página de éxito.
    """
    service = EmailVerificationService(db)

    try:
        await service.verify_email(token)
    except EmailVerificationError as e:
        raise _to_http_error(e)

    return RedirectResponse(VERIFICATION_SUCCESS_PATH, status_code=status.HTTP_302_FOUND)


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(request: ResendRequest, db: Database):
    """
    Generar un token nuevo y reenviar el email de verificación.
    """
    service = EmailVerificationService(db)

    try:
        await service.resend_verification(request.email)
    except EmailVerificationError as e:
        raise _to_http_error(e)

    return MessageResponse(message="Verification email sent! Check your inbox.")
