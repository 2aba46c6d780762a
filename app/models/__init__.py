from .user import User
from .attempt import Attempt, AttemptCreate
from .email_verification import EmailVerification, EmailValidationResult, SignupResult
from .referral import ReferralValidation, ReferralSummary, ReferralMilestones
from .rivalry import (
    RivalryUser,
    IndividualRank,
    TeamRank,
    TeamAggregate,
    TeamStanding,
    TopIndividual,
)

__all__ = [
    "User",
    "Attempt",
    "AttemptCreate",
    "EmailVerification",
    "EmailValidationResult",
    "SignupResult",
    "ReferralValidation",
    "ReferralSummary",
    "ReferralMilestones",
    "RivalryUser",
    "IndividualRank",
    "TeamRank",
    "TeamAggregate",
    "TeamStanding",
    "TopIndividual",
]
