from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel


ReferralStatus = Literal[
    "active",
    "pending_verification",
    "pending_gameplay",
    "not_found",
    "error",
]


class ReferralValidation(BaseModel):
    """Resultado de validar si un referido cuenta para las recompensas"""

    valid: bool
    reason: str
    status: ReferralStatus
    error: Optional[str] = None


class ReferralDetail(ReferralValidation):
    uid: str
    email: Optional[str] = None
    email_verified: bool = False
    created_at: Optional[datetime] = None


class ReferralSummary(BaseModel):
    valid: int = 0
    pending: int = 0
    total: int = 0
    details: list[ReferralDetail] = []


class MilestoneTier(BaseModel):
    threshold: int
    reward: int
    reached: bool
    progress: int
    remaining: int


class ReferralMilestones(BaseModel):
    valid_referrals: int
    pending_referrals: int
    total_referrals: int
    milestones: dict[str, MilestoneTier]
    bonus_attempts: int
    eligible_for_rewards: bool = True
