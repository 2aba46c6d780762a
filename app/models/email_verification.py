from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EmailVerification(BaseModel):
    """Token de verificación pendiente (uno por usuario)"""

    uid: str = Field(..., alias="_id")
    email: str
    token: str

    created_at: datetime
    expires_at: datetime

    verified: bool = False
    verified_at: Optional[datetime] = None

    class Config:
        populate_by_name = True


class EmailValidationResult(BaseModel):
    valid: bool = False
    email: Optional[str] = None
    errors: list[str] = []
    suggestion: Optional[str] = None


class SignupResult(BaseModel):
    uid: str
    email_sent: bool
