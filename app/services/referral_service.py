"""
ReferralService - Referral validation and rewards.

A referral only counts once the referred user:
1. verified their email
2. played at least one game

The referrer earns BONUS_ATTEMPTS_PER_REFERRAL bonus attempts per valid
referral, plus the milestone rewards in REFERRAL_TIERS.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models.referral import (
    ReferralValidation,
    ReferralDetail,
    ReferralSummary,
    ReferralMilestones,
    MilestoneTier,
)
from app.repositories.user_repository import UserRepository
from app.repositories.attempt_repository import AttemptRepository

logger = logging.getLogger(__name__)

BONUS_ATTEMPTS_PER_REFERRAL = 5

# nombre -> (referidos necesarios, premio)
REFERRAL_TIERS = {
    "tier1": (10, 25),
    "tier2": (25, 50),
}


def build_milestones(valid: int) -> dict[str, MilestoneTier]:
    return {
        name: MilestoneTier(
            threshold=threshold,
            reward=reward,
            reached=valid >= threshold,
            progress=min(valid, threshold),
            remaining=max(0, threshold - valid),
        )
        for name, (threshold, reward) in REFERRAL_TIERS.items()
    }


class ReferralService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.user_repo = UserRepository(db)
        self.attempt_repo = AttemptRepository(db)

    async def is_referral_valid(self, uid: str) -> ReferralValidation:
        """Check if a referred user counts toward the referrer's rewards."""
        try:
            user = await self.user_repo.get_by_id(uid)
            if user is None:
                return ReferralValidation(
                    valid=False,
                    reason="User not found",
                    status="not_found"
                )

            if not user.email_verified:
                return ReferralValidation(
                    valid=False,
                    reason="Email not verified",
                    status="pending_verification"
                )

            if not await self.attempt_repo.has_attempts(uid):
                return ReferralValidation(
                    valid=False,
                    reason="No game attempts made",
                    status="pending_gameplay"
                )
        except PyMongoError as e:
            logger.error(f"❌ Error validating referral for {uid}: {e}")
            return ReferralValidation(
                valid=False,
                reason="Validation error",
                status="error",
                error=str(e)
            )

        return ReferralValidation(valid=True, reason="Referral valid", status="active")

    async def get_valid_referral_count(self, uid: str) -> ReferralSummary:
        """Valid vs pending referrals of a referrer."""
        referrer = await self.user_repo.get_by_id(uid)
        if referrer is None or not referrer.share_code:
            return ReferralSummary()

        referred = await self.user_repo.get_referred_by(referrer.share_code)

        details = []
        for user in referred:
            validation = await self.is_referral_valid(user.id)
            details.append(ReferralDetail(
                uid=user.id,
                email=user.email,
                email_verified=user.email_verified,
                created_at=user.created_at,
                **validation.model_dump()
            ))

        valid = sum(1 for d in details if d.valid)

        return ReferralSummary(
            valid=valid,
            pending=len(details) - valid,
            total=len(details),
            details=details
        )

    async def check_referral_milestones(self, uid: str) -> ReferralMilestones:
        summary = await self.get_valid_referral_count(uid)

        return ReferralMilestones(
            valid_referrals=summary.valid,
            pending_referrals=summary.pending,
            total_referrals=summary.total,
            milestones=build_milestones(summary.valid),
            bonus_attempts=summary.valid * BONUS_ATTEMPTS_PER_REFERRAL,
        )

    async def validate_referral(self, uid: str) -> ReferralValidation:
        """Validate a referral on demand and persist the result when valid."""
        validation = await self.is_referral_valid(uid)

        if validation.valid:
            await self.user_repo.mark_referral_validated(uid)

        return validation

    async def _reward_referrer(self, uid: str) -> bool:
        """
        Pay the referrer of `uid` if the referral just became valid.

        Returns True when bonus attempts were awarded.
        """
        user = await self.user_repo.get_by_id(uid)
        if user is None or not user.referred_by_code:
            return False

        validation = await self.is_referral_valid(uid)
        logger.info(f"Referral validation for {uid}: {validation.status}")
        if not validation.valid:
            return False

        referrer = await self.user_repo.get_by_share_code(user.referred_by_code)
        if referrer is None:
            logger.warning(f"⚠️ No referrer owns share code {user.referred_by_code}")
            return False

        if not await self.user_repo.claim_referral_reward(uid):
            return False

        await self.user_repo.add_bonus_attempts(referrer.id, BONUS_ATTEMPTS_PER_REFERRAL)
        logger.info(f"✅ Awarded {BONUS_ATTEMPTS_PER_REFERRAL} bonus attempts to referrer: {referrer.id}")
        return True

    async def handle_email_verified(self, uid: str) -> bool:
        logger.info(f"✅ Email verified for user: {uid}")
        return await self._reward_referrer(uid)

    async def handle_first_game_attempt(self, uid: str) -> bool:
        logger.info(f"🎮 First game attempt for user: {uid}")
        return await self._reward_referrer(uid)
