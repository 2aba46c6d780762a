from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, Field


class User(BaseModel):
    id: str = Field(..., alias="_id")
    email: Optional[str] = None
    name: Optional[str] = None

    # Rivalry
    school: Optional[str] = None
    team: Optional[str] = None
    score: Optional[Union[int, float]] = None

    # Referidos
    share_code: Optional[str] = None
    referred_by_code: Optional[str] = None
    bonus_attempts: int = 0
    referral_validated: bool = False
    referral_rewarded: bool = False

    email_verified: bool = False
    email_verified_at: Optional[datetime] = None

    created_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
